"""REST server for Taskboard."""

from .app import create_app

__all__ = ["create_app"]
