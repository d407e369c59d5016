"""Subtask (checklist) commands."""

from typing import Annotated

import typer

from taskboard.models import NotFoundError
from taskboard.utils.ui.formatters import format_info, format_success

from .decorators import command_wrapper
from .utils import focus_task, open_board

app = typer.Typer(help="Subtask management commands", no_args_is_help=True)


@app.command("add")
@command_wrapper
async def add_subtask(
    task_id: Annotated[str, typer.Argument(help="Parent task ID")],
    title: Annotated[str, typer.Argument(help="Subtask title")],
) -> None:
    """Add a checklist item to a task."""
    async with open_board() as board:
        await focus_task(board, task_id)
        subtask = await board.add_subtask(task_id, title)
    if subtask is None:
        format_info("Nothing to add, the subtask title is blank")
        return
    format_success(f"Added subtask #{subtask.id}: {subtask.title}")


@app.command("toggle")
@command_wrapper
async def toggle_subtask(
    task_id: Annotated[str, typer.Argument(help="Parent task ID")],
    subtask_id: Annotated[str, typer.Argument(help="Subtask ID")],
) -> None:
    """Mark a checklist item done, or not done again."""
    async with open_board() as board:
        await focus_task(board, task_id)
        subtask = await board.toggle_subtask(task_id, subtask_id)
    if subtask is None:
        raise NotFoundError("Subtask not found")
    state = "done" if subtask.completed else "not done"
    format_success(f"Subtask #{subtask.id} marked {state}")


@app.command("delete")
@command_wrapper
async def delete_subtask(
    task_id: Annotated[str, typer.Argument(help="Parent task ID")],
    subtask_id: Annotated[str, typer.Argument(help="Subtask ID")],
) -> None:
    """Remove a checklist item."""
    async with open_board() as board:
        task = await focus_task(board, task_id)
        if task.find_subtask(subtask_id) is None:
            raise NotFoundError("Subtask not found")
        await board.delete_subtask(task_id, subtask_id)
    format_success(f"Deleted subtask #{subtask_id}")
