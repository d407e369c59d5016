"""Tests for TaskBoard optimistic updates and derived state."""

import asyncio
from datetime import UTC, date, datetime
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from taskboard.models import (
    ApiError,
    BoardPreferences,
    Subtask,
    TaskPriority,
    TaskStatus,
    TransportError,
)
from taskboard.services.api.client import APIClient
from taskboard.services.api.tasks import TasksAPI
from taskboard.services.board import TEMP_ID_PREFIX, TaskBoard
from taskboard.services.config_service import ConfigService


@pytest.fixture
def api():
    """Create a mock Tasks API."""
    mock = MagicMock(spec=TasksAPI)
    for name in (
        "list_tasks",
        "get_task",
        "create_task",
        "update_task",
        "delete_task",
        "create_subtask",
        "update_subtask",
        "delete_subtask",
        "get_stats",
    ):
        setattr(mock, name, AsyncMock())
    return mock


@pytest.fixture
def board(api, sample_task, task_factory):
    board = TaskBoard(api)
    board.tasks = [sample_task, task_factory("task-2", "Other task")]
    return board


class TestLoading:
    @pytest.mark.asyncio
    async def test_load_tasks(self, api, sample_task):
        api.list_tasks.return_value = [sample_task]
        board = TaskBoard(api)

        await board.load_tasks()

        assert board.tasks == [sample_task]
        assert board.error is None
        assert board.is_loading is False
        assert board.last_refresh is not None

    @pytest.mark.asyncio
    async def test_load_failure_sets_error(self, api):
        api.list_tasks.side_effect = TransportError("Could not reach server")
        board = TaskBoard(api)

        await board.load_tasks()

        assert board.error == "Could not reach server"
        assert board.is_loading is False
        assert board.last_refresh is None

    @pytest.mark.asyncio
    async def test_load_records_refresh_in_config(self, api):
        api.list_tasks.return_value = []
        config_service = ConfigService()
        board = TaskBoard(api, config_service=config_service)

        await board.load_tasks()

        assert config_service.preferences.last_refresh == board.last_refresh

    @pytest.mark.asyncio
    async def test_close_cancels_background_load(self, api):
        started = asyncio.Event()

        async def slow_list():
            started.set()
            await asyncio.sleep(10)
            return []

        api.list_tasks.side_effect = slow_list
        board = TaskBoard(api)
        load = board.start()
        await started.wait()

        await board.close()

        assert load.cancelled()
        assert board.error is None
        assert board.is_loading is False

    @pytest.mark.asyncio
    async def test_auto_refresh_reloads(self, api, sample_task):
        api.list_tasks.return_value = [sample_task]
        async with TaskBoard(api) as board:
            board.start(refresh_interval=0.01)
            for _ in range(100):
                if api.list_tasks.await_count >= 3:
                    break
                await asyncio.sleep(0.01)

        assert api.list_tasks.await_count >= 3


class TestOptimisticStatusChange:
    @pytest.mark.asyncio
    async def test_visible_before_response(self, api, board, sample_task):
        release = asyncio.Event()

        async def slow_update(task_id, **updates):
            await release.wait()
            return sample_task.model_copy(update={"status": TaskStatus.COMPLETED})

        api.update_task.side_effect = slow_update

        pending = asyncio.create_task(board.change_status("task-1", "completed"))
        await asyncio.sleep(0)

        assert board.find_task("task-1").status == TaskStatus.COMPLETED
        release.set()
        await pending
        assert board.find_task("task-1").status == TaskStatus.COMPLETED
        api.update_task.assert_awaited_once_with("task-1", status=TaskStatus.COMPLETED)

    @pytest.mark.asyncio
    async def test_reverts_on_failure(self, api, board):
        api.update_task.side_effect = ApiError("Task not found", 404)

        with pytest.raises(ApiError):
            await board.change_status("task-1", TaskStatus.IN_PROGRESS)

        assert board.find_task("task-1").status == TaskStatus.TODO
        assert board.error == "Task not found"

    @pytest.mark.asyncio
    async def test_rollback_keeps_other_tasks_changes(self, api, board):
        release = asyncio.Event()

        async def failing_update(task_id, **updates):
            await release.wait()
            raise ApiError("Server error", 500)

        api.update_task.side_effect = failing_update
        pending = asyncio.create_task(board.change_status("task-1", "completed"))
        await asyncio.sleep(0)

        # Another task changes while the first request is in flight
        other = board.find_task("task-2")
        board.tasks[1] = other.model_copy(update={"title": "Renamed"})

        release.set()
        with pytest.raises(ApiError):
            await pending

        assert board.find_task("task-1").status == TaskStatus.TODO
        assert board.find_task("task-2").title == "Renamed"

    @pytest.mark.asyncio
    async def test_invalid_status_rejected_before_request(self, api, board):
        with pytest.raises(ValueError):
            await board.change_status("task-1", "archived")

        api.update_task.assert_not_awaited()


class TestMalformedReplies:
    """Replies that arrive with 2xx but cannot be used still roll back."""

    @staticmethod
    def _board(sample_task, handler) -> TaskBoard:
        transport = httpx.MockTransport(handler)
        client = APIClient(base_url="http://testserver/api", timeout=5, transport=transport)
        board = TaskBoard(TasksAPI(client))
        board.tasks = [sample_task]
        return board

    @pytest.mark.asyncio
    async def test_non_json_body_reverts(self, sample_task):
        board = self._board(
            sample_task,
            lambda request: httpx.Response(200, content=b"<html>proxy</html>"),
        )

        with pytest.raises(ApiError) as exc_info:
            await board.change_status("task-1", "completed")

        assert exc_info.value.status_code == 200
        assert board.find_task("task-1").status == TaskStatus.TODO
        assert board.error == "Invalid JSON response"

    @pytest.mark.asyncio
    async def test_wrong_shape_reverts(self, sample_task):
        board = self._board(
            sample_task,
            lambda request: httpx.Response(200, json={"unexpected": True}),
        )

        with pytest.raises(ApiError):
            await board.change_status("task-1", "completed")

        assert board.find_task("task-1").status == TaskStatus.TODO
        assert board.error.startswith("Invalid response from server")

    @pytest.mark.asyncio
    async def test_load_with_wrong_shape_sets_error(self, sample_task):
        board = self._board(sample_task, lambda request: httpx.Response(200, json={"tasks": []}))

        await board.load_tasks()

        assert board.error.startswith("Invalid response from server")


class TestOptimisticTaskUpdate:
    @pytest.mark.asyncio
    async def test_update_fields(self, api, board, sample_task):
        api.update_task.return_value = sample_task

        await board.update_task("task-1", title="Renamed", due_date="2025-03-01")

        task = board.find_task("task-1")
        assert task.title == "Renamed"
        assert task.due_date == date(2025, 3, 1)

    @pytest.mark.asyncio
    async def test_unknown_task_still_sent(self, api, board, sample_task):
        api.update_task.side_effect = ApiError("Task not found", 404)

        with pytest.raises(ApiError):
            await board.update_task("missing", title="x")

        assert [t.id for t in board.tasks] == ["task-1", "task-2"]


class TestSubtasks:
    @pytest.mark.asyncio
    async def test_toggle(self, api, board):
        api.update_subtask.return_value = Subtask(id="s2", title="Integration tests", completed=True)

        await board.toggle_subtask("task-1", "s2")

        assert board.find_task("task-1").find_subtask("s2").completed is True
        api.update_subtask.assert_awaited_once_with("task-1", "s2", completed=True)

    @pytest.mark.asyncio
    async def test_toggle_reverts_on_failure(self, api, board):
        api.update_subtask.side_effect = ApiError("Subtask not found", 404)

        with pytest.raises(ApiError):
            await board.toggle_subtask("task-1", "s1")

        assert board.find_task("task-1").find_subtask("s1").completed is True

    @pytest.mark.asyncio
    async def test_toggle_unknown_subtask_is_noop(self, api, board):
        assert await board.toggle_subtask("task-1", "nope") is None
        api.update_subtask.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_replaces_temporary_entry(self, api, board):
        release = asyncio.Event()
        server_subtask = Subtask(id="srv-1", title="Docs", completed=False)

        async def slow_create(task_id, title):
            await release.wait()
            return server_subtask

        api.create_subtask.side_effect = slow_create
        pending = asyncio.create_task(board.add_subtask("task-1", "Docs"))
        await asyncio.sleep(0)

        last = board.find_task("task-1").subtasks[-1]
        assert last.id.startswith(TEMP_ID_PREFIX)
        assert last.title == "Docs"

        release.set()
        await pending

        subtasks = board.find_task("task-1").subtasks
        assert [s.id for s in subtasks] == ["s1", "s2", "srv-1"]

    @pytest.mark.asyncio
    async def test_add_failure_removes_temporary_entry(self, api, board):
        api.create_subtask.side_effect = ApiError("Task not found", 404)

        with pytest.raises(ApiError):
            await board.add_subtask("task-1", "Docs")

        assert [s.id for s in board.find_task("task-1").subtasks] == ["s1", "s2"]

    @pytest.mark.asyncio
    async def test_add_blank_title_is_noop(self, api, board):
        assert await board.add_subtask("task-1", "   ") is None
        api.create_subtask.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete(self, api, board):
        await board.delete_subtask("task-1", "s1")

        assert [s.id for s in board.find_task("task-1").subtasks] == ["s2"]
        api.delete_subtask.assert_awaited_once_with("task-1", "s1")

    @pytest.mark.asyncio
    async def test_delete_reverts_on_failure(self, api, board):
        api.delete_subtask.side_effect = ApiError("HTTP error! status: 500", 500)

        with pytest.raises(ApiError):
            await board.delete_subtask("task-1", "s1")

        assert [s.id for s in board.find_task("task-1").subtasks] == ["s1", "s2"]


class TestCreateDelete:
    @pytest.mark.asyncio
    async def test_create_prepends(self, api, board, task_factory):
        api.create_task.return_value = task_factory("task-3", "Brand new")

        await board.create_task("Brand new", priority="high")

        assert board.tasks[0].id == "task-3"
        api.create_task.assert_awaited_once_with("Brand new", priority="high")

    @pytest.mark.asyncio
    async def test_create_failure_sets_error(self, api, board):
        api.create_task.side_effect = ApiError("Title is required", 400)

        with pytest.raises(ApiError):
            await board.create_task("")

        assert board.error == "Title is required"
        assert len(board.tasks) == 2

    @pytest.mark.asyncio
    async def test_delete_waits_for_server(self, api, board):
        api.delete_task.side_effect = ApiError("Task not found", 404)

        with pytest.raises(ApiError):
            await board.delete_task("task-1")
        assert board.find_task("task-1") is not None

        api.delete_task.side_effect = None
        await board.delete_task("task-1")
        assert board.find_task("task-1") is None


class TestDerivedState:
    @pytest.fixture
    def populated(self, api, task_factory):
        board = TaskBoard(api)
        board.tasks = [
            task_factory(
                "a",
                "Alpha",
                priority=TaskPriority.LOW,
                created_at=datetime(2025, 1, 1, tzinfo=UTC),
            ),
            task_factory(
                "b",
                "beta",
                status=TaskStatus.COMPLETED,
                priority=TaskPriority.HIGH,
                created_at=datetime(2025, 1, 3, tzinfo=UTC),
            ),
            task_factory(
                "c",
                "Gamma",
                status=TaskStatus.IN_PROGRESS,
                tags=["docs"],
                created_at=datetime(2025, 1, 2, tzinfo=UTC),
            ),
        ]
        return board

    def test_stats_and_completion(self, populated):
        assert populated.stats.total == 3
        assert populated.stats.completed == 1
        assert populated.completion == 33

    def test_visible_tasks_default_newest_first(self, populated):
        assert [t.id for t in populated.visible_tasks] == ["b", "c", "a"]

    def test_visible_tasks_follow_preferences(self, populated):
        populated.preferences = BoardPreferences(
            status_filter="all", sort_by="priority", sort_order="desc"
        )
        assert [t.id for t in populated.visible_tasks] == ["b", "c", "a"]

        populated.preferences = BoardPreferences(search="DOCS")
        assert [t.id for t in populated.visible_tasks] == ["c"]

    def test_tasks_by_status(self, populated):
        populated.preferences = BoardPreferences(priority_filter="high")
        columns = populated.tasks_by_status

        assert list(columns) == ["todo", "in-progress", "completed"]
        assert columns["todo"] == []
        assert [t.id for t in columns["completed"]] == ["b"]
