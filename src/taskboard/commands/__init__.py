"""Command-line commands for Taskboard."""
