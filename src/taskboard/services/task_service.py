"""Task service - Business logic for task and subtask operations.

This service layer sits between the HTTP routes and the repositories,
providing a clean API for task-related business logic.
"""

from __future__ import annotations

from datetime import date

from taskboard.models import (
    Subtask,
    SubtaskCreate,
    SubtaskUpdate,
    Task,
    TaskCreate,
    TaskFilters,
    TaskStats,
    TaskUpdate,
)
from taskboard.repositories import ReminderRepository, TaskRepository
from taskboard.utils.logger import get_logger
from taskboard.utils.task_views import compute_stats


class TaskService:
    """Service for task business logic.

    This service encapsulates business rules and orchestrates task operations
    using the task repository. When a reminder repository is supplied,
    deleting a task also deletes the reminders that point at it.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        reminder_repository: ReminderRepository | None = None,
    ):
        """Initialize the task service.

        Args:
            task_repository: TaskRepository implementation for data access
            reminder_repository: Optional ReminderRepository for cascading deletes
        """
        self.repository = task_repository
        self.reminders = reminder_repository

    async def list_tasks(
        self,
        *,
        status: str | None = None,
        priority: str | None = None,
        search: str | None = None,
    ) -> list[Task]:
        """List tasks with filtering.

        Args:
            status: Exact status to match
            priority: Exact priority to match
            search: Case-insensitive text searched in title and description

        Returns:
            List of Task objects matching every supplied filter
        """
        filters = TaskFilters(status=status, priority=priority, search=search)
        return await self.repository.list_all(filters)

    async def get_task(self, task_id: str) -> Task:
        """Get a specific task by ID."""
        return await self.repository.get(task_id)

    async def create_task(self, task_data: TaskCreate) -> Task:
        """Create a new task in ``todo`` state."""
        task = await self.repository.add(task_data)
        get_logger().info("task created: %s", task.id)
        return task

    async def update_task(self, task_id: str, updates: TaskUpdate) -> Task:
        """Apply the supplied fields to a task and refresh its timestamp."""
        task = await self.repository.update(task_id, updates)
        get_logger().info("task updated: %s (%s)", task_id, ", ".join(sorted(updates.changes())))
        return task

    async def delete_task(self, task_id: str) -> bool:
        """Delete a task and, when reminders are wired in, its reminders."""
        deleted = await self.repository.delete(task_id)
        if self.reminders is not None:
            removed = await self.reminders.delete_for_task(task_id)
            if removed:
                get_logger().info("removed %d reminder(s) of deleted task %s", removed, task_id)
        get_logger().info("task deleted: %s", task_id)
        return deleted

    async def add_subtask(self, task_id: str, subtask_data: SubtaskCreate) -> Subtask:
        """Append a subtask to a task."""
        subtask = await self.repository.add_subtask(task_id, subtask_data)
        get_logger().info("subtask created: %s/%s", task_id, subtask.id)
        return subtask

    async def update_subtask(
        self, task_id: str, subtask_id: str, updates: SubtaskUpdate
    ) -> Subtask:
        """Apply the supplied fields to a subtask."""
        subtask = await self.repository.update_subtask(task_id, subtask_id, updates)
        get_logger().info("subtask updated: %s/%s", task_id, subtask_id)
        return subtask

    async def delete_subtask(self, task_id: str, subtask_id: str) -> bool:
        """Remove a subtask from its task."""
        deleted = await self.repository.delete_subtask(task_id, subtask_id)
        get_logger().info("subtask deleted: %s/%s", task_id, subtask_id)
        return deleted

    async def get_stats(self, today: date | None = None) -> TaskStats:
        """Count all tasks by status, plus the overdue ones.

        Args:
            today: Reference date for overdue checks, defaults to today (UTC)
        """
        tasks = await self.repository.list_all(TaskFilters())
        return compute_stats(tasks, today)
