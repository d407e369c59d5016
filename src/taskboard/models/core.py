"""Core domain models for Taskboard.

All models serialize with camelCase keys (``dueDate``, ``createdAt``...) so the
JSON on the wire matches what browser clients expect, while Python code keeps
using snake_case attributes.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class TaskStatus(str, Enum):
    """Lifecycle state of a task."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    """Priority level of a task."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ApiModel(BaseModel):
    """Base model using camelCase aliases on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict[str, Any]:
        """Dump to a JSON-compatible dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


def _require_text(value: Any, message: str) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(message)
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _unique_tags(tags: list[str]) -> list[str]:
    return list(dict.fromkeys(tags))


class Subtask(ApiModel):
    """Checklist item belonging to a task.

    Attributes:
        id: Identifier, unique within the parent task
        title: Short description of the step
        completed: Whether the step is done
    """

    id: str
    title: str
    completed: bool = False


class SubtaskCreate(ApiModel):
    """Payload for adding a subtask to a task."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(default="", validate_default=True)

    @field_validator("title", mode="before")
    @classmethod
    def title_required(cls, v: Any) -> Any:
        return _require_text(v, "Subtask title is required")


class SubtaskUpdate(ApiModel):
    """Mutable subtask fields. Keys outside this set are ignored."""

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    completed: bool | None = None

    @field_validator("title", mode="before")
    @classmethod
    def title_not_blank(cls, v: Any) -> Any:
        return _require_text(v, "Subtask title cannot be empty")

    def changes(self) -> dict[str, Any]:
        """Return the supplied, non-null fields."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


class Task(ApiModel):
    """Task model representing a complete task entity.

    Attributes:
        id: Unique identifier for the task
        title: Short task title (never empty)
        description: Optional longer description, empty string when absent
        status: Lifecycle state (todo, in-progress, completed)
        priority: Priority level (low, medium, high)
        due_date: Optional calendar date the task is due
        created_at: Creation timestamp
        updated_at: Timestamp of the last mutation, including subtask changes
        subtasks: Ordered checklist of subtasks
        tags: Free-form tags, de-duplicated
        assignee: Person responsible, empty string when unassigned
    """

    id: str
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: date | None = None
    created_at: datetime
    updated_at: datetime
    subtasks: list[Subtask] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    assignee: str = ""

    def find_subtask(self, subtask_id: str) -> Subtask | None:
        """Return the subtask with the given id, if present."""
        for subtask in self.subtasks:
            if subtask.id == subtask_id:
                return subtask
        return None


class TaskCreate(ApiModel):
    """Model for creating a new task.

    Attributes:
        title: Task title (required, non-blank)
        description: Optional detailed description
        priority: Priority level, defaults to medium
        due_date: Optional due date (blank strings count as none)
        tags: Optional tags
        assignee: Optional assignee name
    """

    model_config = ConfigDict(extra="ignore")

    title: str = Field(default="", validate_default=True)
    description: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: date | None = None
    tags: list[str] = Field(default_factory=list)
    assignee: str = ""

    @field_validator("title", mode="before")
    @classmethod
    def title_required(cls, v: Any) -> Any:
        return _require_text(v, "Title is required")

    @field_validator("description", "assignee", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("priority", mode="before")
    @classmethod
    def default_priority(cls, v: Any) -> Any:
        return TaskPriority.MEDIUM if v in (None, "") else v

    @field_validator("due_date", mode="before")
    @classmethod
    def blank_due_date(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("tags", mode="before")
    @classmethod
    def none_to_no_tags(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, v: list[str]) -> list[str]:
        return _unique_tags(v)


class TaskUpdate(ApiModel):
    """Model for updating an existing task.

    Only the fields declared here can be changed; anything else in the request
    body (``id``, ``createdAt``, ``subtasks``...) is dropped. Only fields that
    were actually supplied are applied.
    """

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: date | None = None
    tags: list[str] | None = None
    assignee: str | None = None

    @field_validator("title", mode="before")
    @classmethod
    def title_not_blank(cls, v: Any) -> Any:
        return _require_text(v, "Title cannot be empty")

    @field_validator("description", "assignee", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("due_date", mode="before")
    @classmethod
    def blank_due_date(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("tags", mode="before")
    @classmethod
    def none_to_no_tags(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, v: list[str] | None) -> list[str] | None:
        return None if v is None else _unique_tags(v)

    def changes(self) -> dict[str, Any]:
        """Return only the fields the caller supplied.

        An explicit ``null`` only clears ``due_date``; for every other field
        it is treated as "not supplied".
        """
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None or name == "due_date"
        }


class TaskFilters(BaseModel):
    """Filters for querying tasks.

    Empty strings are treated as "no filter". Unknown status or priority
    values are kept as-is and simply match nothing.

    Attributes:
        status: Exact status match
        priority: Exact priority match
        search: Case-insensitive substring of title or description
    """

    status: str | None = None
    priority: str | None = None
    search: str | None = None

    @field_validator("status", "priority", "search", mode="before")
    @classmethod
    def empty_is_none(cls, v: Any) -> Any:
        return v or None


class TaskStats(ApiModel):
    """Aggregate task counts."""

    total: int = 0
    todo: int = 0
    in_progress: int = 0
    completed: int = 0
    overdue: int = 0


class Reminder(ApiModel):
    """Scheduled reminder attached to a task.

    Attributes:
        id: Unique identifier
        task_id: Task the reminder refers to
        message: Text shown when the reminder fires
        reminder_time: When the reminder should fire
        is_active: Whether the reminder is still pending
    """

    id: str
    task_id: str
    message: str
    reminder_time: datetime
    is_active: bool = True


class ReminderCreate(ApiModel):
    """Model for creating a reminder. All three fields are required."""

    model_config = ConfigDict(extra="ignore")

    task_id: str
    message: str
    reminder_time: datetime

    @model_validator(mode="before")
    @classmethod
    def all_fields_required(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        keys = (("taskId", "task_id"), ("message", "message"), ("reminderTime", "reminder_time"))
        for alias, name in keys:
            if not (data.get(alias) or data.get(name)):
                raise ValueError("TaskId, message, and reminderTime are required")
        return data


class ReminderUpdate(ApiModel):
    """Mutable reminder fields."""

    model_config = ConfigDict(extra="ignore")

    message: str | None = None
    reminder_time: datetime | None = None
    is_active: bool | None = None

    @field_validator("message", mode="before")
    @classmethod
    def message_not_blank(cls, v: Any) -> Any:
        return _require_text(v, "Reminder message cannot be empty")

    def changes(self) -> dict[str, Any]:
        """Return the supplied, non-null fields."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }
