"""Taskboard domain models.

This package contains Pydantic models that represent the core domain entities
of the Taskboard application, the configuration models, and the exception
hierarchy shared by the server and the client.
"""

from .config_models import AppConfig, BoardPreferences, SortField
from .core import (
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
    TaskStats,
    TaskStatus,
    TaskUpdate,
)
from .exceptions import (
    ApiError,
    NotFoundError,
    TaskboardError,
    TransportError,
    ValidationError,
)

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskFilters",
    "TaskStatus",
    "TaskPriority",
    "TaskStats",
    # Subtask models
    "Subtask",
    "SubtaskCreate",
    "SubtaskUpdate",
    # Reminder models
    "Reminder",
    "ReminderCreate",
    "ReminderUpdate",
    # Config models
    "AppConfig",
    "BoardPreferences",
    "SortField",
    # Errors
    "TaskboardError",
    "ValidationError",
    "NotFoundError",
    "ApiError",
    "TransportError",
]
