"""Repository abstraction layer for Taskboard.

This module defines the abstract base classes (interfaces) for the entity
store, following the hexagonal architecture (Ports & Adapters) pattern.

The services and the HTTP layer only talk to these interfaces, so the
in-memory adapter can be swapped for a persistent one without touching
endpoint logic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from taskboard.models import (
    Reminder,
    ReminderCreate,
    ReminderUpdate,
    Subtask,
    SubtaskCreate,
    SubtaskUpdate,
    Task,
    TaskCreate,
    TaskFilters,
    TaskUpdate,
)


class TaskRepository(ABC):
    """Abstract base class for task persistence operations.

    Subtasks are owned by their task, so their operations live here too.
    """

    @abstractmethod
    async def list_all(self, filters: TaskFilters) -> list[Task]:
        """List tasks matching the filters, in insertion order.

        Args:
            filters: TaskFilters object specifying filter criteria

        Returns:
            List of Task objects matching the filters
        """
        raise NotImplementedError(
            "TaskRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, task_id: str) -> Task:
        """Get a specific task by ID.

        Raises:
            NotFoundError: If task does not exist
        """
        raise NotImplementedError("TaskRepository.get() must be implemented by adapter")

    @abstractmethod
    async def add(self, task_data: TaskCreate) -> Task:
        """Create a new task.

        Args:
            task_data: Validated TaskCreate payload

        Returns:
            Created Task with generated ID, status ``todo`` and timestamps
        """
        raise NotImplementedError("TaskRepository.add() must be implemented by adapter")

    @abstractmethod
    async def update(self, task_id: str, updates: TaskUpdate) -> Task:
        """Merge the supplied fields onto a task and refresh ``updated_at``.

        Raises:
            NotFoundError: If task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, task_id: str) -> bool:
        """Delete a task.

        Returns:
            True if deletion was successful

        Raises:
            NotFoundError: If task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.delete() must be implemented by adapter"
        )

    @abstractmethod
    async def add_subtask(self, task_id: str, subtask_data: SubtaskCreate) -> Subtask:
        """Append a subtask to a task.

        Raises:
            NotFoundError: If task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.add_subtask() must be implemented by adapter"
        )

    @abstractmethod
    async def update_subtask(
        self, task_id: str, subtask_id: str, updates: SubtaskUpdate
    ) -> Subtask:
        """Merge the supplied fields onto a subtask.

        Raises:
            NotFoundError: If the task, then the subtask, does not exist
        """
        raise NotImplementedError(
            "TaskRepository.update_subtask() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_subtask(self, task_id: str, subtask_id: str) -> bool:
        """Remove a subtask from its task.

        Raises:
            NotFoundError: If the task, then the subtask, does not exist
        """
        raise NotImplementedError(
            "TaskRepository.delete_subtask() must be implemented by adapter"
        )


class ReminderRepository(ABC):
    """Abstract base class for reminder persistence operations."""

    @abstractmethod
    async def list_all(self, task_id: str | None = None) -> list[Reminder]:
        """List reminders, optionally only those for one task."""
        raise NotImplementedError(
            "ReminderRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, reminder_id: str) -> Reminder:
        """Get a reminder by ID.

        Raises:
            NotFoundError: If reminder does not exist
        """
        raise NotImplementedError(
            "ReminderRepository.get() must be implemented by adapter"
        )

    @abstractmethod
    async def add(self, reminder_data: ReminderCreate) -> Reminder:
        """Create a new, active reminder."""
        raise NotImplementedError(
            "ReminderRepository.add() must be implemented by adapter"
        )

    @abstractmethod
    async def update(self, reminder_id: str, updates: ReminderUpdate) -> Reminder:
        """Merge the supplied fields onto a reminder.

        Raises:
            NotFoundError: If reminder does not exist
        """
        raise NotImplementedError(
            "ReminderRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, reminder_id: str) -> bool:
        """Delete a reminder.

        Raises:
            NotFoundError: If reminder does not exist
        """
        raise NotImplementedError(
            "ReminderRepository.delete() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_for_task(self, task_id: str) -> int:
        """Delete every reminder pointing at a task.

        Returns:
            Number of reminders removed
        """
        raise NotImplementedError(
            "ReminderRepository.delete_for_task() must be implemented by adapter"
        )
