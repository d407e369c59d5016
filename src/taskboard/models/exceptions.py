"""Custom exceptions for Taskboard."""

from __future__ import annotations


class TaskboardError(Exception):
    """Base exception for all Taskboard errors."""


class ValidationError(TaskboardError):
    """Raised when a payload is missing a required field or holds an invalid value."""


class NotFoundError(TaskboardError):
    """Raised when a task, subtask or reminder id does not exist."""


class ApiError(TaskboardError):
    """Raised by the API client when a request fails.

    Attributes:
        message: Human-readable message, taken from the server's ``error`` field
            when it sent one
        status_code: HTTP status of the failed response, None for transport failures
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TransportError(ApiError):
    """Raised when the server could not be reached at all."""
