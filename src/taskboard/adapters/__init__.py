"""Storage adapters implementing the repository interfaces."""

from .memory import InMemoryReminderRepository, InMemoryTaskRepository, seed_demo_data

__all__ = [
    "InMemoryTaskRepository",
    "InMemoryReminderRepository",
    "seed_demo_data",
]
