"""Task management commands."""

import asyncio
from typing import Annotated

import typer

from taskboard.models import BoardPreferences, TaskStatus, ValidationError
from taskboard.services.config_service import get_config_service
from taskboard.utils.exit_codes import ERROR_NETWORK
from taskboard.utils.task_views import SORT_FIELDS
from taskboard.utils.ui.console import get_console
from taskboard.utils.ui.formatters import (
    format_board,
    format_error,
    format_output,
    format_success,
    format_task_detail,
    format_task_list,
    format_warning,
)

from .decorators import command_wrapper
from .utils import open_board, resolve_output

app = typer.Typer(help="Task management commands", no_args_is_help=True)
console = get_console()

OutputOption = Annotated[
    str | None, typer.Option("--output", "-o", help="Output format (pretty, json, yaml)")
]


def _render(board, output: str, view: str) -> None:
    visible = board.visible_tasks
    if output != "pretty":
        format_output([t.to_json_dict() for t in visible], output)
    elif view == "kanban":
        format_board(board.tasks_by_status)
    else:
        format_task_list(visible)


@app.command("list")
@command_wrapper
async def list_tasks(
    search: Annotated[str | None, typer.Option("--search", "-s", help="Search title, description and tags")] = None,
    status: Annotated[str | None, typer.Option("--status", help="todo, in-progress, completed or all")] = None,
    priority: Annotated[str | None, typer.Option("--priority", help="low, medium, high or all")] = None,
    sort: Annotated[
        str | None, typer.Option("--sort", help=f"Sort field: {', '.join(SORT_FIELDS)}")
    ] = None,
    order: Annotated[str | None, typer.Option("--order", help="asc or desc")] = None,
    view: Annotated[str | None, typer.Option("--view", help="kanban or list")] = None,
    save: Annotated[bool, typer.Option("--save", help="Remember these filters")] = False,
    output: OutputOption = None,
) -> None:
    """List tasks using the saved (or given) filters and sort order."""
    output = resolve_output(output)
    config_service = get_config_service()

    changes = {
        key: value
        for key, value in {
            "search": search,
            "status_filter": status,
            "priority_filter": priority,
            "sort_by": sort,
            "sort_order": order,
            "view_mode": view,
        }.items()
        if value is not None
    }
    preferences = BoardPreferences.model_validate(
        {**config_service.preferences.model_dump(), **changes}
    )
    if save and changes:
        config_service.save_preferences(**changes)

    async with open_board() as board:
        board.preferences = preferences
        await board.load_tasks()
        if board.error:
            format_error(f"Failed to load tasks: {board.error}")
            raise typer.Exit(ERROR_NETWORK)
        _render(board, output, preferences.view_mode)


@app.command("show")
@command_wrapper
async def show_task(
    task_id: Annotated[str, typer.Argument(help="Task ID")],
    output: OutputOption = None,
) -> None:
    """Show every field of a task."""
    output = resolve_output(output)
    async with open_board() as board:
        task = await board.api.get_task(task_id)
    if output == "pretty":
        format_task_detail(task)
    else:
        format_output(task.to_json_dict(), output)


@app.command("add")
@command_wrapper
async def add_task(
    title: Annotated[str, typer.Argument(help="Task title")],
    description: Annotated[str | None, typer.Option("--description", "-d", help="Longer description")] = None,
    priority: Annotated[str | None, typer.Option("--priority", "-p", help="low, medium or high")] = None,
    due: Annotated[str | None, typer.Option("--due", help="Due date (YYYY-MM-DD)")] = None,
    tags: Annotated[list[str] | None, typer.Option("--tag", "-t", help="Tag (repeatable)")] = None,
    assignee: Annotated[str | None, typer.Option("--assignee", "-a", help="Person responsible")] = None,
    output: OutputOption = None,
) -> None:
    """Create a task."""
    output = resolve_output(output)
    async with open_board() as board:
        task = await board.create_task(
            title,
            description=description,
            priority=priority,
            due_date=due,
            tags=tags,
            assignee=assignee,
        )
    if output == "pretty":
        format_success(f"Created task #{task.id}: {task.title}")
    else:
        format_output(task.to_json_dict(), output)


@app.command("edit")
@command_wrapper
async def edit_task(
    task_id: Annotated[str, typer.Argument(help="Task ID")],
    title: Annotated[str | None, typer.Option("--title", help="New title")] = None,
    description: Annotated[str | None, typer.Option("--description", "-d", help="New description")] = None,
    priority: Annotated[str | None, typer.Option("--priority", "-p", help="low, medium or high")] = None,
    due: Annotated[str | None, typer.Option("--due", help="Due date (YYYY-MM-DD)")] = None,
    clear_due: Annotated[bool, typer.Option("--clear-due", help="Remove the due date")] = False,
    tags: Annotated[list[str] | None, typer.Option("--tag", "-t", help="Replace tags (repeatable)")] = None,
    assignee: Annotated[str | None, typer.Option("--assignee", "-a", help="Person responsible")] = None,
    output: OutputOption = None,
) -> None:
    """Change fields of a task."""
    output = resolve_output(output)
    updates = {
        key: value
        for key, value in {
            "title": title,
            "description": description,
            "priority": priority,
            "due_date": due,
            "tags": tags,
            "assignee": assignee,
        }.items()
        if value is not None
    }
    if clear_due:
        updates["due_date"] = None
    if not updates:
        raise ValidationError("Nothing to update")

    async with open_board() as board:
        task = await board.update_task(task_id, **updates)
    if output == "pretty":
        format_success(f"Updated task #{task.id}: {task.title}")
    else:
        format_output(task.to_json_dict(), output)


@app.command("status")
@command_wrapper
async def change_status(
    task_id: Annotated[str, typer.Argument(help="Task ID")],
    status: Annotated[str, typer.Argument(help="todo, in-progress or completed")],
) -> None:
    """Move a task to another column."""
    new_status = TaskStatus(status)
    async with open_board() as board:
        task = await board.change_status(task_id, new_status)
    format_success(f"Task #{task.id} is now {task.status.value}")


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: Annotated[str, typer.Argument(help="Task ID")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Delete a task and its reminders."""
    if not yes and not typer.confirm(f"Delete task #{task_id}?"):
        format_error("Cancelled")
        raise typer.Exit(0)
    async with open_board() as board:
        await board.delete_task(task_id)
    format_success(f"Deleted task #{task_id}")


@app.command("watch")
@command_wrapper
async def watch_tasks(
    interval: Annotated[float, typer.Option("--interval", "-i", help="Seconds between refreshes")] = 30.0,
    count: Annotated[int, typer.Option("--count", "-n", help="Stop after this many refreshes (0 = forever)")] = 0,
) -> None:
    """Redraw the board periodically."""
    preferences = get_config_service().preferences
    async with open_board() as board:
        refreshes = 0
        while True:
            await board.load_tasks()
            console.clear()
            if board.error:
                format_warning(f"Failed to load tasks: {board.error}")
            else:
                _render(board, "pretty", preferences.view_mode)
                console.print(f"[dim]Last refresh: {board.last_refresh:%H:%M:%S}[/dim]")
            refreshes += 1
            if count and refreshes >= count:
                break
            await asyncio.sleep(interval)
