"""Tasks API endpoints."""

from datetime import date
from typing import Any

from pydantic_core import to_jsonable_python

from taskboard.models import Subtask, Task, TaskStats
from taskboard.services.api.client import APIClient, parse_reply


class TasksAPI:
    """Tasks API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def list_tasks(
        self,
        *,
        status: str | None = None,
        priority: str | None = None,
        search: str | None = None,
    ) -> list[Task]:
        """List tasks with optional filters. Falsy filters are not sent."""
        params: dict[str, Any] = {}

        if status:
            params["status"] = status
        if priority:
            params["priority"] = priority
        if search:
            params["search"] = search

        data = await self.client.get("/tasks", params=params)
        return parse_reply(list[Task], data)

    async def get_task(self, task_id: str) -> Task:
        """Get a specific task by ID."""
        data = await self.client.get(f"/tasks/{task_id}")
        return parse_reply(Task, data)

    async def create_task(
        self,
        title: str,
        *,
        description: str | None = None,
        priority: str | None = None,
        due_date: str | date | None = None,
        tags: list[str] | None = None,
        assignee: str | None = None,
    ) -> Task:
        """Create a new task."""
        data: dict[str, Any] = {"title": title}

        if description:
            data["description"] = description
        if priority:
            data["priority"] = priority
        if due_date:
            data["dueDate"] = to_jsonable_python(due_date)
        if tags:
            data["tags"] = tags
        if assignee:
            data["assignee"] = assignee

        created = await self.client.post("/tasks", json=data)
        return parse_reply(Task, created)

    async def update_task(self, task_id: str, **updates: Any) -> Task:
        """Update a task. Keyword names may be snake_case or camelCase."""
        data = await self.client.put(f"/tasks/{task_id}", json=_camel_keys(updates))
        return parse_reply(Task, data)

    async def delete_task(self, task_id: str) -> None:
        """Delete a task."""
        await self.client.delete(f"/tasks/{task_id}")

    async def create_subtask(self, task_id: str, title: str) -> Subtask:
        """Add a subtask to a task."""
        data = await self.client.post(f"/tasks/{task_id}/subtasks", json={"title": title})
        return parse_reply(Subtask, data)

    async def update_subtask(self, task_id: str, subtask_id: str, **updates: Any) -> Subtask:
        """Update a subtask (``title`` and/or ``completed``)."""
        data = await self.client.put(f"/tasks/{task_id}/subtasks/{subtask_id}", json=updates)
        return parse_reply(Subtask, data)

    async def delete_subtask(self, task_id: str, subtask_id: str) -> None:
        """Delete a subtask."""
        await self.client.delete(f"/tasks/{task_id}/subtasks/{subtask_id}")

    async def get_stats(self) -> TaskStats:
        """Get aggregate task counts."""
        data = await self.client.get("/stats")
        return parse_reply(TaskStats, data)


def _camel_keys(values: dict[str, Any]) -> dict[str, Any]:
    renamed = {"due_date": "dueDate"}
    return {renamed.get(key, key): to_jsonable_python(value) for key, value in values.items()}
