"""Repository interfaces for Taskboard.

This package contains abstract base classes (ABCs) that define the contracts
for data persistence operations. These are the "Ports" in the Hexagonal Architecture.

Implementations (Adapters) are in:
- taskboard.adapters.memory (process-lifetime in-memory store)
"""

from .repository import ReminderRepository, TaskRepository

__all__ = [
    "TaskRepository",
    "ReminderRepository",
]
