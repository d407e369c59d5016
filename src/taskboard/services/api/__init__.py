"""HTTP client for the Taskboard REST API."""

from .client import APIClient, get_client
from .reminders import RemindersAPI
from .tasks import TasksAPI

__all__ = ["APIClient", "get_client", "TasksAPI", "RemindersAPI"]
