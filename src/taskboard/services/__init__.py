"""Services module for Taskboard - Business logic and client state layers."""

from .board import TaskBoard
from .reminder_service import ReminderService
from .task_service import TaskService

__all__ = [
    "TaskService",
    "ReminderService",
    "TaskBoard",
]
