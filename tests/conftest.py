"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem/API state.
"""

from __future__ import annotations

import logging
from datetime import UTC, date, datetime
from unittest.mock import patch

import pytest

from taskboard.models import Subtask, Task, TaskPriority, TaskStatus

# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolate_dirs(tmp_path, monkeypatch):
    """Keep config and log files inside *tmp_path* for every test.

    Clears the cached ConfigService and the logger singleton so nothing leaks
    between tests.
    """
    import taskboard.utils.logger as logger_mod
    from taskboard.services.config_service import get_config_service

    config_dir = tmp_path / "config"
    log_dir = tmp_path / "logs"
    monkeypatch.delenv("TASKBOARD_API_URL", raising=False)
    monkeypatch.delenv("TASKBOARD_LOG_LEVEL", raising=False)

    get_config_service.cache_clear()
    logger_mod._logger = None
    with patch("taskboard.services.config_service.user_config_dir", return_value=str(config_dir)):
        with patch("taskboard.utils.logger.user_log_dir", return_value=str(log_dir)):
            yield tmp_path

    get_config_service.cache_clear()
    logger_mod._logger = None
    for handler in list(logging.getLogger("taskboard").handlers):
        logging.getLogger("taskboard").removeHandler(handler)
        handler.close()


# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------


def make_task(
    task_id: str = "task-1",
    title: str = "Write tests",
    *,
    status: TaskStatus = TaskStatus.TODO,
    priority: TaskPriority = TaskPriority.MEDIUM,
    due_date: date | None = None,
    created_at: datetime | None = None,
    subtasks: list[Subtask] | None = None,
    tags: list[str] | None = None,
    description: str = "",
) -> Task:
    """Build a Task with sensible defaults."""
    created = created_at or datetime(2025, 1, 1, 12, 0, tzinfo=UTC)
    return Task(
        id=task_id,
        title=title,
        description=description,
        status=status,
        priority=priority,
        due_date=due_date,
        created_at=created,
        updated_at=created,
        subtasks=subtasks or [],
        tags=tags or [],
    )


@pytest.fixture
def sample_task() -> Task:
    return make_task(
        subtasks=[
            Subtask(id="s1", title="Unit tests", completed=True),
            Subtask(id="s2", title="Integration tests", completed=False),
        ],
        tags=["qa"],
    )


@pytest.fixture
def task_factory():
    """Return the ``make_task`` builder for tests that need several tasks."""
    return make_task
