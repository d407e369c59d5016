"""Helpers shared by the board commands."""

from __future__ import annotations

import contextlib
from collections.abc import AsyncIterator

from taskboard.models import Task
from taskboard.services.api.client import get_client
from taskboard.services.api.tasks import TasksAPI
from taskboard.services.board import TaskBoard
from taskboard.services.config_service import get_config_service


def resolve_output(output: str | None) -> str:
    """Use the configured output format unless one was given."""
    if output:
        return output
    return get_config_service().get("output.format") or "pretty"


@contextlib.asynccontextmanager
async def open_board() -> AsyncIterator[TaskBoard]:
    """Open an API client and a board bound to the saved preferences."""
    async with get_client() as client:
        async with TaskBoard(TasksAPI(client), config_service=get_config_service()) as board:
            yield board


async def focus_task(board: TaskBoard, task_id: str) -> Task:
    """Load a single task into the board so it can be changed optimistically.

    Raises:
        ApiError: If the task cannot be fetched (404 for unknown ids)
    """
    task = await board.api.get_task(task_id)
    board.tasks = [task]
    return task
