"""Command that runs the REST server."""

import logging
from typing import Annotated

import typer
import uvicorn

from taskboard.server import create_app
from taskboard.services.config_service import get_config_service
from taskboard.utils.logger import enable_console_logging, get_logger
from taskboard.utils.ui.console import get_console

console = get_console()


def serve(
    host: Annotated[str | None, typer.Option("--host", help="Interface to bind")] = None,
    port: Annotated[int | None, typer.Option("--port", "-p", help="Port to listen on")] = None,
    seed: Annotated[
        bool | None, typer.Option("--seed/--no-seed", help="Load the demo tasks")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log requests to stderr")] = False,
) -> None:
    """Run the Taskboard REST API."""
    server = get_config_service().config.server
    host = host or server.host
    port = port or server.port
    seed = server.seed_demo_data if seed is None else seed

    if verbose:
        enable_console_logging(logging.INFO)

    app = create_app(seed=seed, cors_origins=server.cors_origins)
    get_logger().info("serving on http://%s:%d (seed=%s)", host, port, seed)
    console.print(f"[bold]Taskboard API[/bold] on [cyan]http://{host}:{port}/api[/cyan]")
    uvicorn.run(app, host=host, port=port, log_level="info" if verbose else "warning")
