"""Statistics command."""

from typing import Annotated

import typer

from taskboard.utils.ui.formatters import format_output, format_stats

from .decorators import command_wrapper
from .utils import open_board, resolve_output


@command_wrapper
async def show_stats(
    output: Annotated[str | None, typer.Option("--output", "-o", help="Output format")] = None,
) -> None:
    """Show task counts, overdue tasks and completion."""
    output = resolve_output(output)
    async with open_board() as board:
        stats = await board.api.get_stats()
        await board.load_tasks()
    completion = None if board.error else board.completion
    if output == "pretty":
        format_stats(stats, completion)
    else:
        data = stats.to_json_dict()
        if completion is not None:
            data["completion"] = completion
        format_output(data, output)
