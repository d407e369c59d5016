"""Main entry point for the Taskboard CLI."""

import asyncio

import typer

from taskboard import __version__
from taskboard.commands import config, reminders, subtasks, tasks
from taskboard.commands.serve import serve
from taskboard.commands.stats import show_stats
from taskboard.models import ApiError
from taskboard.services.api.client import get_client
from taskboard.services.config_service import get_config_service
from taskboard.utils.ui.console import get_console

app = typer.Typer(
    name="taskboard",
    help="Task board with a REST API, optimistic client and kanban view",
    no_args_is_help=True,
)

console = get_console()


# Add subcommands
app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(subtasks.app, name="subtasks", help="Subtask (checklist) commands")
app.add_typer(reminders.app, name="reminders", help="Reminder commands")
app.add_typer(config.app, name="config", help="Configuration management")

# Add top-level commands
app.command("serve")(serve)
app.command("stats")(show_stats)


@app.command()
def version() -> None:
    """Show version information and API health."""
    console.print(f"[bold]Taskboard[/bold] version [cyan]{__version__}[/cyan]")
    endpoint = get_config_service().api_endpoint
    console.print(f"[dim]API endpoint: {endpoint}[/dim]")

    async def check_health() -> None:
        async with get_client() as client:
            await client.get("/stats")

    try:
        asyncio.run(check_health())
    except ApiError as e:
        console.print(f"[red]✗ API health check failed: {e.message}[/red]")
    else:
        console.print("[green]✓ API is healthy[/green]")


if __name__ == "__main__":
    app()
