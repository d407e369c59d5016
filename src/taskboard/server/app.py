"""FastAPI application factory.

The app keeps its services on ``app.state`` so routes never reach for
module-level globals; tests build an app with their own repositories.
"""

from __future__ import annotations

import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskboard import __version__
from taskboard.adapters import InMemoryReminderRepository, InMemoryTaskRepository, seed_demo_data
from taskboard.models import NotFoundError, ValidationError
from taskboard.server.routes import router
from taskboard.services import ReminderService, TaskService
from taskboard.utils.logger import get_logger


def create_app(
    task_service: TaskService | None = None,
    reminder_service: ReminderService | None = None,
    *,
    seed: bool = False,
    cors_origins: list[str] | None = None,
) -> FastAPI:
    """Build the REST application.

    Args:
        task_service: Service to serve tasks from
        reminder_service: Service to serve reminders from. When only one
            service is given the other is built over its repositories; when
            neither is, both use fresh in-memory stores
        seed: Load the demo tasks and reminder into the in-memory stores
        cors_origins: Allowed CORS origins, defaults to any

    Returns:
        Configured FastAPI application
    """
    if task_service is None and reminder_service is None:
        tasks, reminders = seed_demo_data() if seed else ([], [])
        task_repo = InMemoryTaskRepository(tasks)
        reminder_repo = InMemoryReminderRepository(reminders)
        task_service = TaskService(task_repo, reminder_repo)
        reminder_service = ReminderService(reminder_repo, task_repo)
    elif reminder_service is None:
        reminder_service = ReminderService(task_service.reminders, task_service.repository)
    elif task_service is None:
        task_service = TaskService(reminder_service.tasks, reminder_service.repository)

    app = FastAPI(title="Taskboard API", version=__version__)
    app.state.task_service = task_service
    app.state.reminder_service = reminder_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins or ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.monotonic()
        response = await call_next(request)
        elapsed = time.monotonic() - start
        get_logger().info(
            "%s %s -> %d (%.3fs)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed,
        )
        return response

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": str(exc)})

    @app.exception_handler(ValidationError)
    async def bad_request(request: Request, exc: ValidationError) -> JSONResponse:
        get_logger().warning("rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def malformed_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        get_logger().warning("malformed %s %s", request.method, request.url.path)
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    app.include_router(router)
    return app
