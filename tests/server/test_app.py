"""Tests for the application factory."""

from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient

from taskboard.adapters import InMemoryReminderRepository, InMemoryTaskRepository
from taskboard.models import NotFoundError
from taskboard.server import create_app
from taskboard.services import ReminderService, TaskService


def test_unseeded_by_default():
    with TestClient(create_app()) as client:
        assert client.get("/api/tasks").json() == []
        assert client.get("/api/reminders").json() == []


def test_injected_services_are_used(sample_task):
    task_service = MagicMock(spec=TaskService)
    task_service.list_tasks = AsyncMock(return_value=[sample_task])
    task_service.get_task = AsyncMock(side_effect=NotFoundError("Task not found"))
    reminder_service = MagicMock(spec=ReminderService)

    app = create_app(task_service, reminder_service)

    with TestClient(app) as client:
        tasks = client.get("/api/tasks", params={"search": "tests"}).json()
        missing = client.get("/api/tasks/x")

    assert [t["id"] for t in tasks] == ["task-1"]
    task_service.list_tasks.assert_awaited_once_with(status=None, priority=None, search="tests")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Task not found"}


def test_cors_origins_configurable():
    app = create_app(cors_origins=["http://localhost:5173"])

    with TestClient(app) as client:
        allowed = client.get("/api/tasks", headers={"Origin": "http://localhost:5173"})
        other = client.get("/api/tasks", headers={"Origin": "http://evil.test"})

    assert allowed.headers["access-control-allow-origin"] == "http://localhost:5173"
    assert "access-control-allow-origin" not in other.headers


def test_requests_are_logged(isolate_dirs):
    with TestClient(create_app()) as client:
        client.get("/api/stats")

    log = (isolate_dirs / "logs" / "taskboard.log").read_text()
    assert "GET /api/stats -> 200" in log


def test_reminder_service_shares_task_service_stores():
    task_repo = InMemoryTaskRepository([])
    reminder_repo = InMemoryReminderRepository([])
    app = create_app(TaskService(task_repo, reminder_repo))

    with TestClient(app) as client:
        task = client.post("/api/tasks", json={"title": "Ship it"}).json()
        reminder = client.post(
            "/api/reminders",
            json={"taskId": task["id"], "message": "Ping", "reminderTime": "2030-01-01T09:00:00Z"},
        )
        client.delete(f"/api/tasks/{task['id']}")
        remaining = client.get("/api/reminders").json()

    assert reminder.status_code == 201
    assert remaining == []


def test_task_service_built_from_reminder_service(sample_task):
    task_repo = InMemoryTaskRepository([sample_task])
    app = create_app(reminder_service=ReminderService(InMemoryReminderRepository([]), task_repo))

    with TestClient(app) as client:
        assert [t["id"] for t in client.get("/api/tasks").json()] == ["task-1"]
