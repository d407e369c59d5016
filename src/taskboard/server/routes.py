"""HTTP routes for tasks, subtasks, reminders and statistics.

Every route answers with camelCase JSON. Failures are raised as
``NotFoundError``/``ValidationError`` and turned into ``{"error": ...}``
bodies by the handlers registered in :mod:`taskboard.server.app`.
"""

from __future__ import annotations

from typing import Any, TypeVar

import pydantic
from fastapi import APIRouter, Body, Depends, Query, Request, Response

from taskboard.models import (
    ReminderCreate,
    ReminderUpdate,
    SubtaskCreate,
    SubtaskUpdate,
    TaskCreate,
    TaskUpdate,
    ValidationError,
)
from taskboard.services import ReminderService, TaskService

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)

router = APIRouter(prefix="/api")


def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service


def get_reminder_service(request: Request) -> ReminderService:
    return request.app.state.reminder_service


def _error_message(exc: pydantic.ValidationError) -> str:
    first = exc.errors()[0]
    cause = first.get("ctx", {}).get("error")
    if cause is not None:
        return str(cause)
    field = ".".join(str(part) for part in first["loc"])
    return f"Invalid value for '{field}': {first['msg']}"


def _validate(model: type[ModelT], payload: Any) -> ModelT:
    """Validate a request body, raising our ValidationError on failure."""
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as e:
        raise ValidationError(_error_message(e)) from e


# ----------------------------------------------------------------------
# Tasks
# ----------------------------------------------------------------------


@router.get("/tasks")
async def list_tasks(
    status: str | None = None,
    priority: str | None = None,
    search: str | None = None,
    service: TaskService = Depends(get_task_service),
) -> list[dict[str, Any]]:
    tasks = await service.list_tasks(status=status, priority=priority, search=search)
    return [task.to_json_dict() for task in tasks]


@router.get("/tasks/{task_id}")
async def get_task(task_id: str, service: TaskService = Depends(get_task_service)) -> dict[str, Any]:
    task = await service.get_task(task_id)
    return task.to_json_dict()


@router.post("/tasks", status_code=201)
async def create_task(
    payload: Any = Body(default=None),
    service: TaskService = Depends(get_task_service),
) -> dict[str, Any]:
    task = await service.create_task(_validate(TaskCreate, payload))
    return task.to_json_dict()


@router.put("/tasks/{task_id}")
async def update_task(
    task_id: str,
    payload: Any = Body(default=None),
    service: TaskService = Depends(get_task_service),
) -> dict[str, Any]:
    # Unknown ids are a 404 even when the body is also invalid
    await service.get_task(task_id)
    task = await service.update_task(task_id, _validate(TaskUpdate, payload))
    return task.to_json_dict()


@router.delete("/tasks/{task_id}", status_code=204, response_class=Response)
async def delete_task(task_id: str, service: TaskService = Depends(get_task_service)) -> Response:
    await service.delete_task(task_id)
    return Response(status_code=204)


# ----------------------------------------------------------------------
# Subtasks
# ----------------------------------------------------------------------


@router.post("/tasks/{task_id}/subtasks", status_code=201)
async def create_subtask(
    task_id: str,
    payload: Any = Body(default=None),
    service: TaskService = Depends(get_task_service),
) -> dict[str, Any]:
    await service.get_task(task_id)
    subtask = await service.add_subtask(task_id, _validate(SubtaskCreate, payload))
    return subtask.to_json_dict()


@router.put("/tasks/{task_id}/subtasks/{subtask_id}")
async def update_subtask(
    task_id: str,
    subtask_id: str,
    payload: Any = Body(default=None),
    service: TaskService = Depends(get_task_service),
) -> dict[str, Any]:
    await service.get_task(task_id)
    updates = _validate(SubtaskUpdate, payload)
    subtask = await service.update_subtask(task_id, subtask_id, updates)
    return subtask.to_json_dict()


@router.delete(
    "/tasks/{task_id}/subtasks/{subtask_id}", status_code=204, response_class=Response
)
async def delete_subtask(
    task_id: str, subtask_id: str, service: TaskService = Depends(get_task_service)
) -> Response:
    await service.delete_subtask(task_id, subtask_id)
    return Response(status_code=204)


# ----------------------------------------------------------------------
# Reminders
# ----------------------------------------------------------------------


@router.get("/reminders")
async def list_reminders(
    task_id: str | None = Query(default=None, alias="taskId"),
    service: ReminderService = Depends(get_reminder_service),
) -> list[dict[str, Any]]:
    reminders = await service.list_reminders(task_id)
    return [reminder.to_json_dict() for reminder in reminders]


@router.get("/reminders/{reminder_id}")
async def get_reminder(
    reminder_id: str, service: ReminderService = Depends(get_reminder_service)
) -> dict[str, Any]:
    reminder = await service.get_reminder(reminder_id)
    return reminder.to_json_dict()


@router.post("/reminders", status_code=201)
async def create_reminder(
    payload: Any = Body(default=None),
    service: ReminderService = Depends(get_reminder_service),
) -> dict[str, Any]:
    reminder = await service.create_reminder(_validate(ReminderCreate, payload))
    return reminder.to_json_dict()


@router.put("/reminders/{reminder_id}")
async def update_reminder(
    reminder_id: str,
    payload: Any = Body(default=None),
    service: ReminderService = Depends(get_reminder_service),
) -> dict[str, Any]:
    await service.get_reminder(reminder_id)
    reminder = await service.update_reminder(reminder_id, _validate(ReminderUpdate, payload))
    return reminder.to_json_dict()


@router.delete("/reminders/{reminder_id}", status_code=204, response_class=Response)
async def delete_reminder(
    reminder_id: str, service: ReminderService = Depends(get_reminder_service)
) -> Response:
    await service.delete_reminder(reminder_id)
    return Response(status_code=204)


# ----------------------------------------------------------------------
# Statistics
# ----------------------------------------------------------------------


@router.get("/stats")
async def get_stats(service: TaskService = Depends(get_task_service)) -> dict[str, Any]:
    stats = await service.get_stats()
    return stats.to_json_dict()
