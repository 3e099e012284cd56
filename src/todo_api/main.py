"""FastAPI application wiring for the task tracker.

Beginner terms used in this file:
- FastAPI app: the main web application object.
- Lifespan: code that runs once when the server starts (open storage, migrate).
- app.state: a place to store shared runtime objects (storage, service).
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from todo_api.app.rpc import build_rpc_router, register_error_handlers
from todo_api.app.service import TaskService
from todo_api.app.ui import render_homepage
from todo_api.config.settings import Settings, get_settings
from todo_api.storage.base import TaskStorage
from todo_api.storage.memory import InMemoryTaskStorage
from todo_api.storage.postgres import PostgresTaskStorage

logger = logging.getLogger(__name__)


def _build_storage(settings: Settings) -> TaskStorage:
    if settings.storage_backend == "memory":
        return InMemoryTaskStorage()
    if not settings.database_url:
        # Fail fast if required configuration is missing.
        raise RuntimeError(
            "Missing database URL. Set TODO_API_DATABASE_URL before starting the app "
            "or use TODO_API_STORAGE_BACKEND=memory."
        )
    return PostgresTaskStorage(settings.database_url)


def _ensure_runtime_state(
    app: FastAPI,
    *,
    settings: Settings,
    storage_override: TaskStorage | None,
) -> None:
    if not hasattr(app.state, "storage"):
        storage = storage_override or _build_storage(settings)
        # Ensure schema exists before serving requests.
        storage.migrate()
        app.state.storage = storage
        logger.info(
            "app event=storage_ready backend=%s env=%s",
            type(storage).__name__,
            settings.app_env,
        )

    if not hasattr(app.state, "service"):
        app.state.service = TaskService(app.state.storage)

    if not hasattr(app.state, "settings"):
        app.state.settings = settings


def create_app(
    *,
    storage: TaskStorage | None = None,
    settings_override: Settings | None = None,
) -> FastAPI:
    """Application factory.

    Tests pass ``storage`` to skip backend selection; otherwise the backend is
    built from settings when the lifespan starts.
    """
    settings = settings_override or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        _ensure_runtime_state(app, settings=settings, storage_override=storage)
        yield

    app_lifespan = lifespan if storage is None else None
    app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=app_lifespan)

    # Keep test paths reliable when lifespan is not executed by the client.
    if storage is not None:
        _ensure_runtime_state(app, settings=settings, storage_override=storage)

    register_error_handlers(app)
    app.include_router(build_rpc_router(settings.rpc_prefix))

    # Multiple health endpoints map to the same function for compatibility with
    # different health checkers and load balancers.
    @app.get("/health")
    @app.get("/healthz")
    @app.get("/live")
    def health() -> dict[str, str]:
        return {"status": "ok", "service": settings.app_name}

    @app.get("/", response_class=HTMLResponse)
    def home() -> str:
        return render_homepage(app_name=settings.app_name, rpc_prefix=settings.rpc_prefix)

    return app


# Module-level app for `uvicorn todo_api.main:app`.
app = create_app()
