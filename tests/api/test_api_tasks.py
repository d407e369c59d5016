"""Tests for Tasks API."""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from taskboard.models import TaskStatus
from taskboard.services.api.client import APIClient
from taskboard.services.api.tasks import TasksAPI


@pytest.fixture
def mock_client():
    """Create a mock API client."""
    client = MagicMock(spec=APIClient)
    client.get = AsyncMock()
    client.post = AsyncMock()
    client.put = AsyncMock()
    client.patch = AsyncMock()
    client.delete = AsyncMock()
    return client


@pytest.fixture
def task_json(sample_task):
    return sample_task.to_json_dict()


@pytest.mark.asyncio
async def test_list_tasks_no_filters(mock_client):
    """Test listing tasks without filters."""
    mock_client.get.return_value = []

    result = await TasksAPI(mock_client).list_tasks()

    assert result == []
    mock_client.get.assert_called_once_with("/tasks", params={})


@pytest.mark.asyncio
async def test_list_tasks_skips_falsy_filters(mock_client, task_json):
    mock_client.get.return_value = [task_json]

    result = await TasksAPI(mock_client).list_tasks(status="todo", priority="", search=None)

    assert result[0].id == "task-1"
    mock_client.get.assert_called_once_with("/tasks", params={"status": "todo"})


@pytest.mark.asyncio
async def test_get_task(mock_client, task_json):
    mock_client.get.return_value = task_json

    task = await TasksAPI(mock_client).get_task("task-1")

    assert task.title == "Write tests"
    assert len(task.subtasks) == 2
    mock_client.get.assert_called_once_with("/tasks/task-1")


@pytest.mark.asyncio
async def test_create_task_sends_camel_case(mock_client, task_json):
    mock_client.post.return_value = task_json

    await TasksAPI(mock_client).create_task(
        "Write tests", priority="high", due_date=date(2025, 2, 1), tags=["qa"]
    )

    mock_client.post.assert_called_once_with(
        "/tasks",
        json={"title": "Write tests", "priority": "high", "dueDate": "2025-02-01", "tags": ["qa"]},
    )


@pytest.mark.asyncio
async def test_update_task(mock_client, task_json):
    mock_client.put.return_value = task_json

    await TasksAPI(mock_client).update_task("task-1", status=TaskStatus.COMPLETED, due_date=None)

    mock_client.put.assert_called_once_with(
        "/tasks/task-1", json={"status": "completed", "dueDate": None}
    )


@pytest.mark.asyncio
async def test_delete_task(mock_client):
    mock_client.delete.return_value = None

    assert await TasksAPI(mock_client).delete_task("task-1") is None
    mock_client.delete.assert_called_once_with("/tasks/task-1")


@pytest.mark.asyncio
async def test_subtask_endpoints(mock_client):
    mock_client.post.return_value = {"id": "s9", "title": "Docs", "completed": False}
    mock_client.put.return_value = {"id": "s9", "title": "Docs", "completed": True}
    api = TasksAPI(mock_client)

    created = await api.create_subtask("task-1", "Docs")
    toggled = await api.update_subtask("task-1", "s9", completed=True)
    await api.delete_subtask("task-1", "s9")

    assert created.id == "s9"
    assert toggled.completed is True
    mock_client.post.assert_called_once_with("/tasks/task-1/subtasks", json={"title": "Docs"})
    mock_client.put.assert_called_once_with(
        "/tasks/task-1/subtasks/s9", json={"completed": True}
    )
    mock_client.delete.assert_called_once_with("/tasks/task-1/subtasks/s9")


@pytest.mark.asyncio
async def test_get_stats(mock_client):
    mock_client.get.return_value = {
        "total": 3,
        "todo": 1,
        "inProgress": 1,
        "completed": 1,
        "overdue": 0,
    }

    stats = await TasksAPI(mock_client).get_stats()

    assert stats.in_progress == 1
    mock_client.get.assert_called_once_with("/stats")
