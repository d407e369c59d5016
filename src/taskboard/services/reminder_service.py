"""Reminder service - Business logic for task reminders."""

from __future__ import annotations

from taskboard.models import Reminder, ReminderCreate, ReminderUpdate
from taskboard.repositories import ReminderRepository, TaskRepository
from taskboard.utils.logger import get_logger


class ReminderService:
    """Service for reminder business logic.

    Reminders may only be created for tasks that exist at creation time.
    """

    def __init__(
        self,
        reminder_repository: ReminderRepository,
        task_repository: TaskRepository,
    ):
        self.repository = reminder_repository
        self.tasks = task_repository

    async def list_reminders(self, task_id: str | None = None) -> list[Reminder]:
        """List reminders, optionally only those of one task."""
        return await self.repository.list_all(task_id or None)

    async def get_reminder(self, reminder_id: str) -> Reminder:
        return await self.repository.get(reminder_id)

    async def create_reminder(self, reminder_data: ReminderCreate) -> Reminder:
        """Create a reminder.

        Raises:
            NotFoundError: If the referenced task does not exist
        """
        await self.tasks.get(reminder_data.task_id)
        reminder = await self.repository.add(reminder_data)
        get_logger().info("reminder created: %s for task %s", reminder.id, reminder.task_id)
        return reminder

    async def update_reminder(self, reminder_id: str, updates: ReminderUpdate) -> Reminder:
        reminder = await self.repository.update(reminder_id, updates)
        get_logger().info("reminder updated: %s", reminder_id)
        return reminder

    async def delete_reminder(self, reminder_id: str) -> bool:
        deleted = await self.repository.delete(reminder_id)
        get_logger().info("reminder deleted: %s", reminder_id)
        return deleted
