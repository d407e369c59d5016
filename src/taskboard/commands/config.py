"""Configuration management commands."""

from typing import Annotated

import typer

from taskboard.services.config_service import get_config_service
from taskboard.utils.ui.console import get_console
from taskboard.utils.ui.formatters import format_error, format_output, format_success

from .decorators import command_wrapper

app = typer.Typer(help="Configuration management commands", no_args_is_help=True)
console = get_console()


@app.command("view")
@command_wrapper
def view_config(
    output: Annotated[str, typer.Option("--output", "-o", help="Output format")] = "pretty",
) -> None:
    """View current configuration."""
    config_service = get_config_service()
    format_output(config_service.config.model_dump(mode="json"), output)
    if output == "pretty":
        console.print(f"[dim]{config_service.config_path}[/dim]")


@app.command("get")
@command_wrapper
def get_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g., api.endpoint)")],
) -> None:
    """Get a configuration value."""
    value = get_config_service().get(key)
    if value is None:
        format_error(f"Configuration key '{key}' not found")
        raise typer.Exit(1)
    console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g., api.endpoint)")],
    value: Annotated[str, typer.Argument(help="Configuration value")],
) -> None:
    """Set a configuration value."""
    # Try to convert value to appropriate type
    parsed_value: str | int | bool = value
    if value.lower() in ("true", "false"):
        parsed_value = value.lower() == "true"
    elif value.isdigit():
        parsed_value = int(value)

    try:
        get_config_service().set(key, parsed_value)
    except KeyError as e:
        format_error(f"Configuration key '{key}' not found")
        raise typer.Exit(1) from e
    format_success(f"Configuration '{key}' set to '{parsed_value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Annotated[str | None, typer.Argument(help="Configuration key to reset")] = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            format_error("Cancelled")
            raise typer.Exit(0)

    try:
        get_config_service().reset(key)
    except KeyError as e:
        format_error(f"Configuration key '{key}' not found")
        raise typer.Exit(1) from e

    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
