"""Decorators for command functions."""

import asyncio
import functools
import time
import traceback
from collections.abc import Callable

import pydantic
import typer

from taskboard.models import ApiError, TaskboardError
from taskboard.utils.exit_codes import ERROR_GENERAL, ERROR_INVALID_ARGS, exit_code_for
from taskboard.utils.logger import get_logger
from taskboard.utils.ui.formatters import format_error


def command_wrapper(func: Callable) -> Callable:
    """Run a (possibly async) command with logging and error-to-exit-code mapping."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            if asyncio.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except typer.Exit:
            # Re-raise Typer's own exits (like --help or explicit Exit(0))
            raise

        except (ApiError, TaskboardError) as e:
            elapsed = time.monotonic() - start
            logger.error("command failed: %s (%.3fs) - %s", cmd, elapsed, str(e))
            format_error(str(e))
            raise typer.Exit(code=exit_code_for(e)) from e

        except (pydantic.ValidationError, ValueError) as e:
            elapsed = time.monotonic() - start
            logger.error("command failed: %s (%.3fs) - %s", cmd, elapsed, str(e))
            format_error(f"Invalid input: {e}")
            raise typer.Exit(code=ERROR_INVALID_ARGS) from e

        except Exception as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                elapsed,
                str(e),
                traceback.format_exc(),
            )
            # Generic fallback for unexpected crashes
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=ERROR_GENERAL) from e

    return wrapper
