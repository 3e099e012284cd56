"""RPC boundary: the task service exposed as typed procedures under one endpoint.

Each procedure is a path segment under the RPC prefix (``/rpc/createTask`` and so
on). Request bodies are validated against the input models before the service is
called; errors are rendered with one envelope shape:

    {"error": {"code": "NOT_FOUND", "message": "...", "id": 7}}
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from todo_api.app.errors import TaskNotFoundError
from todo_api.app.models import (
    CreateTaskInput,
    DeleteTaskInput,
    DeleteTaskResult,
    Task,
    ToggleTaskInput,
    UpdateTaskInput,
)
from todo_api.app.service import TaskService

logger = logging.getLogger(__name__)


def build_rpc_router(prefix: str = "/rpc") -> APIRouter:
    router = APIRouter(prefix=prefix, tags=["rpc"])

    def _service(request: Request) -> TaskService:
        return request.app.state.service

    @router.get("/getTasks", response_model=list[Task])
    def get_tasks(request: Request) -> list[Task]:
        return _service(request).get_tasks()

    @router.post("/createTask", response_model=Task)
    def create_task(payload: CreateTaskInput, request: Request) -> Task:
        return _service(request).create_task(payload)

    @router.post("/updateTask", response_model=Task)
    def update_task(payload: UpdateTaskInput, request: Request) -> Task:
        return _service(request).update_task(payload)

    @router.post("/toggleTask", response_model=Task)
    def toggle_task(payload: ToggleTaskInput, request: Request) -> Task:
        return _service(request).toggle_task(payload)

    @router.post("/deleteTask", response_model=DeleteTaskResult)
    def delete_task(payload: DeleteTaskInput, request: Request) -> DeleteTaskResult:
        return _service(request).delete_task(payload)

    return router


def register_error_handlers(app: FastAPI) -> None:
    """Map validation, not-found, routing, and store failures onto the error envelope."""

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        issues = [_issue(error) for error in exc.errors()]
        logger.info("rpc event=rejected path=%s issues=%s", request.url.path, len(issues))
        return _error_response(
            400,
            code="BAD_REQUEST",
            message="Input failed validation",
            issues=issues,
        )

    @app.exception_handler(TaskNotFoundError)
    async def _not_found(request: Request, exc: TaskNotFoundError) -> JSONResponse:
        return _error_response(404, code="NOT_FOUND", message=str(exc), id=exc.task_id)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown procedure (404) or wrong method (405) still use the envelope.
        return _error_response(
            exc.status_code,
            code=HTTPStatus(exc.status_code).name,
            message=str(exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def _store_error(request: Request, exc: Exception) -> JSONResponse:
        # The server middleware re-raises after this response, so the traceback is logged there.
        logger.error(
            "rpc event=failed path=%s error=%s",
            request.url.path,
            type(exc).__name__,
        )
        return _error_response(500, code="INTERNAL_SERVER_ERROR", message=str(exc))


def _issue(error: Any) -> dict[str, Any]:
    """Keep only the JSON-safe parts of one Pydantic error entry."""
    return {
        "loc": [str(part) for part in error.get("loc", ())],
        "msg": str(error.get("msg", "")),
        "type": str(error.get("type", "")),
    }


def _error_response(
    status_code: int,
    *,
    code: str,
    message: str,
    headers: dict[str, str] | None = None,
    **extra: Any,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message, **extra}},
        headers=headers,
    )
