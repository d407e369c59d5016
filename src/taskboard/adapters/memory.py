"""In-memory implementations of the repository interfaces.

State lives in plain Python lists for the lifetime of the process: lookups are
linear scans, updates replace the entry at its index and deletes remove it.
Nothing survives a restart.

Every entity handed out is a deep copy, so callers can only change stored
state through the repository methods.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta

from taskboard.adapters.utils import generate_uuid, now_utc
from taskboard.models import (
    NotFoundError,
    Reminder,
    ReminderCreate,
    ReminderUpdate,
    Subtask,
    SubtaskCreate,
    SubtaskUpdate,
    Task,
    TaskCreate,
    TaskFilters,
    TaskPriority,
    TaskStatus,
    TaskUpdate,
)
from taskboard.repositories import ReminderRepository, TaskRepository


def _task_matches(task: Task, filters: TaskFilters) -> bool:
    if filters.status and task.status.value != filters.status:
        return False
    if filters.priority and task.priority.value != filters.priority:
        return False
    if filters.search:
        term = filters.search.lower()
        if term not in task.title.lower() and term not in task.description.lower():
            return False
    return True


class InMemoryTaskRepository(TaskRepository):
    """Task repository backed by a process-lifetime list."""

    def __init__(self, tasks: Iterable[Task] | None = None):
        self._tasks: list[Task] = [t.model_copy(deep=True) for t in tasks or []]

    def _index_of(self, task_id: str) -> int:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        raise NotFoundError("Task not found")

    @staticmethod
    def _subtask_index(task: Task, subtask_id: str) -> int:
        for index, subtask in enumerate(task.subtasks):
            if subtask.id == subtask_id:
                return index
        raise NotFoundError("Subtask not found")

    async def list_all(self, filters: TaskFilters) -> list[Task]:
        return [t.model_copy(deep=True) for t in self._tasks if _task_matches(t, filters)]

    async def get(self, task_id: str) -> Task:
        return self._tasks[self._index_of(task_id)].model_copy(deep=True)

    async def add(self, task_data: TaskCreate) -> Task:
        timestamp = now_utc()
        task = Task(
            id=generate_uuid(),
            title=task_data.title,
            description=task_data.description,
            status=TaskStatus.TODO,
            priority=task_data.priority,
            due_date=task_data.due_date,
            created_at=timestamp,
            updated_at=timestamp,
            subtasks=[],
            tags=list(task_data.tags),
            assignee=task_data.assignee,
        )
        self._tasks.append(task)
        return task.model_copy(deep=True)

    async def update(self, task_id: str, updates: TaskUpdate) -> Task:
        index = self._index_of(task_id)
        changes = updates.changes()
        changes["updated_at"] = now_utc()
        self._tasks[index] = self._tasks[index].model_copy(update=changes, deep=True)
        return self._tasks[index].model_copy(deep=True)

    async def delete(self, task_id: str) -> bool:
        index = self._index_of(task_id)
        del self._tasks[index]
        return True

    async def add_subtask(self, task_id: str, subtask_data: SubtaskCreate) -> Subtask:
        task = self._tasks[self._index_of(task_id)]
        subtask = Subtask(id=generate_uuid(), title=subtask_data.title, completed=False)
        task.subtasks.append(subtask)
        task.updated_at = now_utc()
        return subtask.model_copy()

    async def update_subtask(
        self, task_id: str, subtask_id: str, updates: SubtaskUpdate
    ) -> Subtask:
        task = self._tasks[self._index_of(task_id)]
        index = self._subtask_index(task, subtask_id)
        task.subtasks[index] = task.subtasks[index].model_copy(update=updates.changes())
        task.updated_at = now_utc()
        return task.subtasks[index].model_copy()

    async def delete_subtask(self, task_id: str, subtask_id: str) -> bool:
        task = self._tasks[self._index_of(task_id)]
        index = self._subtask_index(task, subtask_id)
        del task.subtasks[index]
        task.updated_at = now_utc()
        return True


class InMemoryReminderRepository(ReminderRepository):
    """Reminder repository backed by a process-lifetime list."""

    def __init__(self, reminders: Iterable[Reminder] | None = None):
        self._reminders: list[Reminder] = [r.model_copy() for r in reminders or []]

    def _index_of(self, reminder_id: str) -> int:
        for index, reminder in enumerate(self._reminders):
            if reminder.id == reminder_id:
                return index
        raise NotFoundError("Reminder not found")

    async def list_all(self, task_id: str | None = None) -> list[Reminder]:
        return [
            r.model_copy()
            for r in self._reminders
            if task_id is None or r.task_id == task_id
        ]

    async def get(self, reminder_id: str) -> Reminder:
        return self._reminders[self._index_of(reminder_id)].model_copy()

    async def add(self, reminder_data: ReminderCreate) -> Reminder:
        reminder = Reminder(
            id=generate_uuid(),
            task_id=reminder_data.task_id,
            message=reminder_data.message,
            reminder_time=reminder_data.reminder_time,
            is_active=True,
        )
        self._reminders.append(reminder)
        return reminder.model_copy()

    async def update(self, reminder_id: str, updates: ReminderUpdate) -> Reminder:
        index = self._index_of(reminder_id)
        self._reminders[index] = self._reminders[index].model_copy(update=updates.changes())
        return self._reminders[index].model_copy()

    async def delete(self, reminder_id: str) -> bool:
        del self._reminders[self._index_of(reminder_id)]
        return True

    async def delete_for_task(self, task_id: str) -> int:
        before = len(self._reminders)
        self._reminders = [r for r in self._reminders if r.task_id != task_id]
        return before - len(self._reminders)


def seed_demo_data() -> tuple[list[Task], list[Reminder]]:
    """Build the two demo tasks and one reminder a fresh server starts with."""
    timestamp = now_utc()
    tasks = [
        Task(
            id="1",
            title="Learn asyncio",
            description="Study tasks, event loops and cancellation",
            status=TaskStatus.IN_PROGRESS,
            priority=TaskPriority.HIGH,
            due_date=date(2025, 1, 20),
            created_at=timestamp,
            updated_at=timestamp,
            subtasks=[
                Subtask(id="sub1", title="Read the asyncio documentation", completed=True),
                Subtask(id="sub2", title="Practice task groups", completed=False),
            ],
            tags=["python", "learning"],
            assignee="John Doe",
        ),
        Task(
            id="2",
            title="Build Task Manager",
            description="Create a comprehensive task management application",
            status=TaskStatus.TODO,
            priority=TaskPriority.MEDIUM,
            due_date=date(2025, 1, 25),
            created_at=timestamp,
            updated_at=timestamp,
            subtasks=[
                Subtask(id="sub3", title="Setup backend API", completed=True),
                Subtask(id="sub4", title="Write the board client", completed=False),
                Subtask(id="sub5", title="Add form validation", completed=False),
            ],
            tags=["project", "development"],
            assignee="Jane Smith",
        ),
    ]
    reminders = [
        Reminder(
            id="rem1",
            task_id="1",
            message="Don't forget to finish the asyncio chapter!",
            reminder_time=timestamp + timedelta(hours=24),
            is_active=True,
        )
    ]
    return tasks, reminders
