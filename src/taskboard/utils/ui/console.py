"""Shared rich console for Taskboard output."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=1)
def get_console() -> Console:
    """Console used for all human-readable output.

    Automatic highlighting is off so ids, dates and percentages keep the
    styles the formatters give them. rich honours ``NO_COLOR`` on its own.
    """
    return Console(highlight=False)
