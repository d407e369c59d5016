"""Tests for the reminders commands."""

import json

import pytest
from typer.testing import CliRunner

from taskboard.main import app
from taskboard.utils.exit_codes import ERROR_NOT_FOUND

runner = CliRunner()

pytestmark = pytest.mark.usefixtures("live_api")


def _reminders(*args: str) -> list[dict]:
    result = runner.invoke(app, ["reminders", "list", *args, "-o", "json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


def test_list():
    reminders = _reminders()
    assert [r["id"] for r in reminders] == ["rem1"]


def test_add_and_filter_by_task():
    result = runner.invoke(
        app, ["reminders", "add", "2", "Review the PR", "--at", "2030-01-01T09:00:00+00:00"]
    )
    assert result.exit_code == 0, result.output
    assert "2030-01-01 09:00" in result.stdout

    reminders = _reminders("--task", "2")
    assert [r["message"] for r in reminders] == ["Review the PR"]


def test_add_for_missing_task():
    result = runner.invoke(app, ["reminders", "add", "nope", "Ping"])

    assert result.exit_code == ERROR_NOT_FOUND
    assert "Task not found" in result.output


def test_delete():
    result = runner.invoke(app, ["reminders", "delete", "rem1"])

    assert result.exit_code == 0, result.output
    assert _reminders() == []


def test_pretty_list():
    result = runner.invoke(app, ["reminders", "list", "-o", "pretty"])

    assert result.exit_code == 0, result.output
    assert "rem1" in result.stdout
