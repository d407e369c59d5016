"""Client-side board state with optimistic mutations.

``TaskBoard`` keeps the client's copy of the task list. Status changes,
task edits and subtask changes are applied locally first and then sent to
the server; when the server rejects one, only the affected task is put back
the way it was and the error is re-raised.
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar
from uuid import uuid4

from taskboard.adapters.utils import now_utc
from taskboard.models import (
    ApiError,
    BoardPreferences,
    Subtask,
    Task,
    TaskStats,
    TaskStatus,
)
from taskboard.services.api.tasks import TasksAPI
from taskboard.services.config_service import ConfigService
from taskboard.utils.logger import get_logger
from taskboard.utils.task_views import (
    compute_stats,
    completion_rate,
    filter_and_sort,
    group_by_status,
)

T = TypeVar("T")

DEFAULT_REFRESH_INTERVAL = 30.0
TEMP_ID_PREFIX = "temp-"


class TaskBoard:
    """Client's view of the task collection.

    Attributes:
        tasks: Local copy of the tasks, in server order with new tasks first
        is_loading: True while a load is in flight
        error: Message of the last failed operation, None after a good load
        last_refresh: When the tasks were last loaded successfully
    """

    def __init__(
        self,
        tasks_api: TasksAPI,
        preferences: BoardPreferences | None = None,
        config_service: ConfigService | None = None,
    ):
        self.api = tasks_api
        self.config_service = config_service
        if preferences is None:
            preferences = config_service.preferences if config_service else BoardPreferences()
        self.preferences = preferences

        self.tasks: list[Task] = []
        self.is_loading = False
        self.error: str | None = None
        self.last_refresh = None
        self._background: list[asyncio.Task] = []

    async def __aenter__(self) -> TaskBoard:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load_tasks(self) -> list[Task]:
        """Fetch every task from the server.

        A failed load is recorded in ``error`` rather than raised, so callers
        can show it and try again. Cancellation propagates without touching
        ``error``.
        """
        self.is_loading = True
        self.error = None
        try:
            self.tasks = await self.api.list_tasks()
        except ApiError as e:
            self.error = e.message
            get_logger().warning("loading tasks failed: %s", e.message)
        else:
            self.last_refresh = now_utc()
            if self.config_service is not None:
                self.config_service.record_refresh(self.last_refresh)
        finally:
            self.is_loading = False
        return self.tasks

    def start(self, refresh_interval: float | None = None) -> asyncio.Task:
        """Start the initial load in the background.

        Args:
            refresh_interval: When set, keep reloading every that many seconds

        Returns:
            The asyncio task running the initial load
        """
        load = asyncio.create_task(self.load_tasks())
        self._background.append(load)
        if refresh_interval is not None:
            self._background.append(asyncio.create_task(self.auto_refresh(refresh_interval)))
        return load

    async def auto_refresh(self, interval: float = DEFAULT_REFRESH_INTERVAL) -> None:
        """Reload the tasks every ``interval`` seconds until cancelled."""
        while True:
            await asyncio.sleep(interval)
            await self.load_tasks()

    async def close(self) -> None:
        """Cancel any background load or refresh still running."""
        pending, self._background = self._background, []
        for task in pending:
            task.cancel()
        for task in pending:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    # ------------------------------------------------------------------
    # Non-optimistic mutations
    # ------------------------------------------------------------------

    async def create_task(self, title: str, **fields: Any) -> Task:
        """Create a task on the server and put it at the top of the list."""
        try:
            task = await self.api.create_task(title, **fields)
        except ApiError as e:
            self._fail("creating task", e)
            raise
        self.tasks.insert(0, task)
        return task

    async def delete_task(self, task_id: str) -> None:
        """Delete a task, dropping it locally once the server confirms."""
        try:
            await self.api.delete_task(task_id)
        except ApiError as e:
            self._fail(f"deleting task {task_id}", e)
            raise
        self.tasks = [t for t in self.tasks if t.id != task_id]

    # ------------------------------------------------------------------
    # Optimistic mutations
    # ------------------------------------------------------------------

    async def update_task(self, task_id: str, **updates: Any) -> Task | None:
        """Apply field changes locally, then send them to the server."""

        def change(task: Task) -> Task:
            merged = task.model_dump()
            merged.update(updates)
            merged["updated_at"] = now_utc()
            return Task.model_validate(merged)

        return await self._apply_optimistic(
            task_id, change, lambda: self.api.update_task(task_id, **updates)
        )

    async def change_status(self, task_id: str, status: TaskStatus | str) -> Task | None:
        """Move a task to another column."""
        return await self.update_task(task_id, status=TaskStatus(status))

    async def toggle_subtask(self, task_id: str, subtask_id: str) -> Subtask | None:
        """Flip a subtask's completed flag. Unknown subtasks are ignored."""
        task = self.find_task(task_id)
        subtask = task.find_subtask(subtask_id) if task else None
        if subtask is None:
            return None
        completed = not subtask.completed

        def change(current: Task) -> Task:
            return _replace_subtask(
                current, subtask_id, lambda s: s.model_copy(update={"completed": completed})
            )

        return await self._apply_optimistic(
            task_id,
            change,
            lambda: self.api.update_subtask(task_id, subtask_id, completed=completed),
        )

    async def add_subtask(self, task_id: str, title: str) -> Subtask | None:
        """Append a subtask, showing a temporary entry until the server answers.

        Blank titles are ignored.
        """
        if not title.strip():
            return None
        temp = Subtask(id=f"{TEMP_ID_PREFIX}{uuid4().hex}", title=title, completed=False)

        def change(task: Task) -> Task:
            return task.model_copy(update={"subtasks": [*task.subtasks, temp]}, deep=True)

        created = await self._apply_optimistic(
            task_id, change, lambda: self.api.create_subtask(task_id, title)
        )
        current = self.find_task(task_id)
        if current is not None:
            self._store(_replace_subtask(current, temp.id, lambda _: created))
        return created

    async def delete_subtask(self, task_id: str, subtask_id: str) -> None:
        """Remove a subtask. Unknown subtasks are ignored."""
        task = self.find_task(task_id)
        if task is None or task.find_subtask(subtask_id) is None:
            return

        def change(current: Task) -> Task:
            remaining = [s for s in current.subtasks if s.id != subtask_id]
            return current.model_copy(update={"subtasks": remaining}, deep=True)

        await self._apply_optimistic(
            task_id, change, lambda: self.api.delete_subtask(task_id, subtask_id)
        )

    async def _apply_optimistic(
        self,
        task_id: str,
        change: Callable[[Task], Task],
        send: Callable[[], Awaitable[T]],
    ) -> T:
        """Show ``change`` immediately, undo it if ``send`` fails.

        The snapshot is the task as it was before the change; on failure only
        that task is restored, so concurrent changes to other tasks survive.
        """
        snapshot = self.find_task(task_id)
        if snapshot is not None:
            self._store(change(snapshot))
        try:
            return await send()
        except ApiError as e:
            if snapshot is not None:
                self._store(snapshot)
            self._fail(f"updating task {task_id}", e)
            raise

    def _fail(self, action: str, error: ApiError) -> None:
        self.error = error.message
        get_logger().warning("%s failed: %s", action, error.message)

    def _store(self, task: Task) -> None:
        for index, existing in enumerate(self.tasks):
            if existing.id == task.id:
                self.tasks[index] = task
                return

    def find_task(self, task_id: str) -> Task | None:
        """Return the local copy of a task, if loaded."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def stats(self) -> TaskStats:
        return compute_stats(self.tasks)

    @property
    def completion(self) -> int:
        """Percentage of completed tasks."""
        return completion_rate(self.tasks)

    @property
    def visible_tasks(self) -> list[Task]:
        """Tasks after applying the search, filters and sort preferences."""
        prefs = self.preferences
        return filter_and_sort(
            self.tasks,
            search=prefs.search,
            status=prefs.status_filter,
            priority=prefs.priority_filter,
            sort_by=prefs.sort_by,
            sort_order=prefs.sort_order,
        )

    @property
    def tasks_by_status(self) -> dict[str, list[Task]]:
        """Visible tasks grouped into kanban columns."""
        return group_by_status(self.visible_tasks)


def _replace_subtask(task: Task, subtask_id: str, replace: Callable[[Subtask], Subtask]) -> Task:
    subtasks = [replace(s) if s.id == subtask_id else s for s in task.subtasks]
    return task.model_copy(update={"subtasks": subtasks, "updated_at": now_utc()}, deep=True)
