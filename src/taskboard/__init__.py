"""Taskboard: in-memory task REST API with an optimistic-update client."""

__version__ = "0.1.0"
