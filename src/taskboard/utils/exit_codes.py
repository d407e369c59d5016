"""
Exit codes for the Taskboard CLI.

Semantic exit codes let scripts tell validation problems, unreachable servers
and missing entities apart without parsing output.
"""

from taskboard.models import ApiError, NotFoundError, TransportError, ValidationError

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Network or API error (server unreachable, timeout, etc.)
ERROR_NETWORK = 4

# Resource not found
ERROR_NOT_FOUND = 5


def exit_code_for(error: Exception) -> int:
    """Map an exception raised by a command to its exit code."""
    if isinstance(error, TransportError):
        return ERROR_NETWORK
    if isinstance(error, ApiError):
        if error.status_code == 404:
            return ERROR_NOT_FOUND
        if error.status_code == 400:
            return ERROR_INVALID_ARGS
        return ERROR_NETWORK
    if isinstance(error, NotFoundError):
        return ERROR_NOT_FOUND
    if isinstance(error, ValidationError):
        return ERROR_INVALID_ARGS
    return ERROR_GENERAL
