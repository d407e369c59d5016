"""Derived views over a task collection.

Everything here is a pure function of the task list plus the current
filter/sort selections; nothing is cached, so a view can never drift from the
tasks it was computed from.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from datetime import UTC, date, datetime
from typing import NamedTuple, get_args

from taskboard.models import SortField, Task, TaskPriority, TaskStats, TaskStatus

PRIORITY_ORDER = {
    TaskPriority.HIGH: 3,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 1,
}

STATUS_ORDER = {
    TaskStatus.TODO: 1,
    TaskStatus.IN_PROGRESS: 2,
    TaskStatus.COMPLETED: 3,
}

SORT_FIELDS: tuple[str, ...] = get_args(SortField)

ALL = "all"


class DueDateStatus(NamedTuple):
    """Bucket and label describing how close a due date is."""

    status: str
    text: str


def today_utc() -> date:
    return datetime.now(UTC).date()


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def is_overdue(task: Task, today: date | None = None) -> bool:
    """A task is overdue when its due date has passed and it is not completed."""
    if task.due_date is None or task.status == TaskStatus.COMPLETED:
        return False
    return task.due_date < (today or today_utc())


def compute_stats(tasks: Sequence[Task], today: date | None = None) -> TaskStats:
    """Count tasks in total, per status, and overdue."""
    today = today or today_utc()
    return TaskStats(
        total=len(tasks),
        todo=sum(1 for t in tasks if t.status == TaskStatus.TODO),
        in_progress=sum(1 for t in tasks if t.status == TaskStatus.IN_PROGRESS),
        completed=sum(1 for t in tasks if t.status == TaskStatus.COMPLETED),
        overdue=sum(1 for t in tasks if is_overdue(t, today)),
    )


def completion_rate(tasks: Sequence[Task]) -> int:
    """Percentage of completed tasks, rounded half up; 0 for an empty list."""
    if not tasks:
        return 0
    completed = sum(1 for t in tasks if t.status == TaskStatus.COMPLETED)
    return _round_half_up(completed / len(tasks) * 100)


def subtask_progress(task: Task) -> int:
    """Percentage of completed subtasks.

    Without subtasks the task itself counts: 100 if completed, else 0.
    """
    if not task.subtasks:
        return 100 if task.status == TaskStatus.COMPLETED else 0
    done = sum(1 for s in task.subtasks if s.completed)
    return _round_half_up(done / len(task.subtasks) * 100)


def due_date_status(task: Task, today: date | None = None) -> DueDateStatus | None:
    """Describe the due date relative to today, or None when there is none."""
    if task.due_date is None:
        return None
    days = (task.due_date - (today or today_utc())).days
    if days < 0:
        return DueDateStatus("overdue", f"{abs(days)} days overdue")
    if days == 0:
        return DueDateStatus("today", "Due today")
    if days <= 3:
        return DueDateStatus("soon", f"Due in {days} days")
    return DueDateStatus("future", f"Due in {days} days")


def matches_search(task: Task, term: str) -> bool:
    """Case-insensitive match against title, description and tags."""
    if not term:
        return True
    needle = term.lower()
    return (
        needle in task.title.lower()
        or needle in task.description.lower()
        or any(needle in tag.lower() for tag in task.tags)
    )


def filter_tasks(
    tasks: Iterable[Task],
    *,
    search: str = "",
    status: str = ALL,
    priority: str = ALL,
) -> list[Task]:
    """Apply the board filters. ``all`` (or empty) disables a dimension."""
    return [
        t
        for t in tasks
        if matches_search(t, search)
        and (status in (ALL, "") or t.status.value == status)
        and (priority in (ALL, "") or t.priority.value == priority)
    ]


def _sort_key(sort_by: str):
    if sort_by == "title":
        return lambda t: t.title.lower()
    if sort_by == "priority":
        return lambda t: PRIORITY_ORDER[t.priority]
    if sort_by == "dueDate":
        return lambda t: t.due_date or date.max
    if sort_by == "status":
        return lambda t: STATUS_ORDER[t.status]
    return lambda t: t.created_at


def sort_tasks(
    tasks: Iterable[Task], *, sort_by: str = "createdAt", sort_order: str = "desc"
) -> list[Task]:
    """Stable sort by one of SORT_FIELDS; unknown fields sort by creation time."""
    return sorted(tasks, key=_sort_key(sort_by), reverse=sort_order == "desc")


def filter_and_sort(
    tasks: Iterable[Task],
    *,
    search: str = "",
    status: str = ALL,
    priority: str = ALL,
    sort_by: str = "createdAt",
    sort_order: str = "desc",
) -> list[Task]:
    filtered = filter_tasks(tasks, search=search, status=status, priority=priority)
    return sort_tasks(filtered, sort_by=sort_by, sort_order=sort_order)


def group_by_status(tasks: Iterable[Task]) -> dict[str, list[Task]]:
    """Group tasks into kanban columns; every status key is always present."""
    grouped: dict[str, list[Task]] = {status.value: [] for status in TaskStatus}
    for task in tasks:
        grouped[task.status.value].append(task)
    return grouped
