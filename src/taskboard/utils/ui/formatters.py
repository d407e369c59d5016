"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.table import Table
from rich.text import Text

from taskboard.models import Reminder, Task, TaskStats
from taskboard.utils.task_views import due_date_status, subtask_progress
from taskboard.utils.ui.console import get_console

console = get_console()

PRIORITY_COLORS = {
    "high": "bold red",
    "medium": "yellow",
    "low": "green",
}

STATUS_ICONS = {
    "todo": "○",
    "in-progress": "◐",
    "completed": "●",
}

STATUS_TITLES = {
    "todo": "To Do",
    "in-progress": "In Progress",
    "completed": "Completed",
}

DUE_STYLES = {
    "overdue": "bold red",
    "today": "bold yellow",
    "soon": "yellow",
    "future": "dim",
}


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display plain data (dicts/lists) based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    elif isinstance(data, list):
        format_dict_table(data)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0].keys())
    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col)

    for item in items:
        table.add_row(*(_format_value(item.get(col)) for col in columns))

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key, _format_value(value))

    console.print(table)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(v.get("title", str(v)) if isinstance(v, dict) else str(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


def get_progress_bar(percentage: float) -> str:
    """Get a progress bar representation."""
    filled = int(percentage / 10)
    empty = 10 - filled
    return "▓" * filled + "░" * empty


def get_completion_color(percentage: float) -> str:
    """Get color based on completion percentage."""
    if percentage >= 80:
        return "green"
    if percentage >= 40:
        return "yellow"
    return "red"


def format_task_line(task: Task, indent: str = "") -> Text:
    """Build the one-line summary shown on the board."""
    line = Text(indent)
    line.append(f"{STATUS_ICONS[task.status.value]} ", style="cyan")
    line.append(task.title, style="bold")
    line.append(f"  [{task.priority.value}]", style=PRIORITY_COLORS[task.priority.value])

    due = due_date_status(task)
    if due is not None and task.status.value != "completed":
        line.append(f"  {due.text}", style=DUE_STYLES[due.status])

    if task.subtasks:
        progress = subtask_progress(task)
        line.append(
            f"  {get_progress_bar(progress)} {progress}%",
            style=get_completion_color(progress),
        )
    line.append(f"  #{task.id}", style="dim")
    return line


def format_board(columns: dict[str, list[Task]]) -> None:
    """Render tasks as kanban columns, one section per status."""
    for status, tasks in columns.items():
        console.print(f"{STATUS_TITLES[status]} ({len(tasks)})", style="bold cyan")
        if not tasks:
            console.print("  [dim]No tasks[/dim]")
        for task in tasks:
            console.print(format_task_line(task, indent="  "))
        console.print()


def format_task_list(tasks: list[Task]) -> None:
    """Render tasks as a flat list in the given order."""
    if not tasks:
        console.print("[yellow]No tasks match your filters[/yellow]")
        return
    for task in tasks:
        console.print(format_task_line(task))


def format_task_detail(task: Task) -> None:
    """Render every field of a task plus its checklist."""
    data = task.to_json_dict()
    subtasks = data.pop("subtasks")
    format_single_item(data)
    if subtasks:
        console.print()
        console.print(f"Subtasks ({subtask_progress(task)}% done)", style="bold")
        for subtask in task.subtasks:
            mark = "[green]✓[/green]" if subtask.completed else "[dim]✗[/dim]"
            console.print(f"  {mark} {subtask.title}  [dim]#{subtask.id}[/dim]")


def format_stats(stats: TaskStats, completion: int | None = None) -> None:
    """Render aggregate counts."""
    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="bold")
    table.add_row("Total", str(stats.total))
    table.add_row("To do", str(stats.todo))
    table.add_row("In progress", str(stats.in_progress))
    table.add_row("Completed", str(stats.completed))
    overdue_style = "bold red" if stats.overdue else "white"
    table.add_row("Overdue", Text(str(stats.overdue), style=overdue_style))
    if completion is not None:
        table.add_row(
            "Completion",
            Text(f"{get_progress_bar(completion)} {completion}%", style=get_completion_color(completion)),
        )
    console.print(table)


def format_reminders(reminders: list[Reminder]) -> None:
    """Render reminders as a table."""
    format_dict_table([r.to_json_dict() for r in reminders])
