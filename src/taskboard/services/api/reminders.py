"""Reminders API endpoints."""

from typing import Any

from taskboard.models import Reminder
from taskboard.services.api.client import APIClient, parse_reply


class RemindersAPI:
    """Reminders API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def list_reminders(self, task_id: str | None = None) -> list[Reminder]:
        """List reminders, optionally only those attached to one task."""
        params: dict[str, Any] = {}
        if task_id:
            params["taskId"] = task_id
        data = await self.client.get("/reminders", params=params)
        return parse_reply(list[Reminder], data)

    async def get_reminder(self, reminder_id: str) -> Reminder:
        data = await self.client.get(f"/reminders/{reminder_id}")
        return parse_reply(Reminder, data)

    async def create_reminder(self, task_id: str, message: str, reminder_time: str) -> Reminder:
        """Create a reminder. ``reminder_time`` is an ISO-8601 timestamp."""
        data = await self.client.post(
            "/reminders",
            json={"taskId": task_id, "message": message, "reminderTime": reminder_time},
        )
        return parse_reply(Reminder, data)

    async def update_reminder(
        self,
        reminder_id: str,
        *,
        message: str | None = None,
        reminder_time: str | None = None,
        is_active: bool | None = None,
    ) -> Reminder:
        data: dict[str, Any] = {}
        if message is not None:
            data["message"] = message
        if reminder_time is not None:
            data["reminderTime"] = reminder_time
        if is_active is not None:
            data["isActive"] = is_active
        updated = await self.client.put(f"/reminders/{reminder_id}", json=data)
        return parse_reply(Reminder, updated)

    async def delete_reminder(self, reminder_id: str) -> None:
        await self.client.delete(f"/reminders/{reminder_id}")
