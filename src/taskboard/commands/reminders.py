"""Reminder commands."""

from datetime import timedelta
from typing import Annotated

import typer

from taskboard.adapters.utils import now_utc
from taskboard.services.api.client import get_client
from taskboard.services.api.reminders import RemindersAPI
from taskboard.utils.ui.formatters import format_output, format_reminders, format_success

from .decorators import command_wrapper
from .utils import resolve_output

app = typer.Typer(help="Reminder commands", no_args_is_help=True)


@app.command("list")
@command_wrapper
async def list_reminders(
    task_id: Annotated[str | None, typer.Option("--task", help="Only reminders of this task")] = None,
    output: Annotated[str | None, typer.Option("--output", "-o", help="Output format")] = None,
) -> None:
    """List reminders."""
    output = resolve_output(output)
    async with get_client() as client:
        reminders = await RemindersAPI(client).list_reminders(task_id)
    if output == "pretty":
        format_reminders(reminders)
    else:
        format_output([r.to_json_dict() for r in reminders], output)


@app.command("add")
@command_wrapper
async def add_reminder(
    task_id: Annotated[str, typer.Argument(help="Task ID")],
    message: Annotated[str, typer.Argument(help="Reminder text")],
    at: Annotated[str | None, typer.Option("--at", help="When, as an ISO-8601 timestamp")] = None,
    in_hours: Annotated[float, typer.Option("--in", help="Hours from now, used when --at is omitted")] = 24.0,
) -> None:
    """Schedule a reminder for a task."""
    when = at or (now_utc() + timedelta(hours=in_hours)).isoformat()
    async with get_client() as client:
        reminder = await RemindersAPI(client).create_reminder(task_id, message, when)
    format_success(f"Reminder #{reminder.id} set for {reminder.reminder_time:%Y-%m-%d %H:%M}")


@app.command("delete")
@command_wrapper
async def delete_reminder(
    reminder_id: Annotated[str, typer.Argument(help="Reminder ID")],
) -> None:
    """Delete a reminder."""
    async with get_client() as client:
        await RemindersAPI(client).delete_reminder(reminder_id)
    format_success(f"Deleted reminder #{reminder_id}")
