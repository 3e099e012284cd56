"""Python client for the task RPC endpoint plus a local task-list view.

``TaskRpcClient`` is a thin typed wrapper over the five procedures.
``TaskListView`` keeps a local copy of the list and reconciles it with server
responses the same way the browser page does: create appends, toggle merges
only ``completed``, delete removes on ``success: true``. Failures are logged and
otherwise ignored.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Literal

import httpx

from todo_api.app.models import DeleteTaskResult, Task

logger = logging.getLogger(__name__)

ViewPhase = Literal["loading", "idle"]


class TaskRpcError(RuntimeError):
    """Rejected RPC call carrying the server's error envelope."""

    def __init__(self, status_code: int, code: str, message: str) -> None:
        self.status_code = status_code
        self.code = code
        super().__init__(f"{code} ({status_code}): {message}")


class TaskRpcClient:
    def __init__(self, http: httpx.Client, *, prefix: str = "/rpc") -> None:
        self.http = http
        self.prefix = prefix.rstrip("/")

    def get_tasks(self) -> list[Task]:
        data = self._call("GET", "getTasks")
        return [Task.model_validate(item) for item in data]

    def create_task(self, title: str, description: str | None = None) -> Task:
        data = self._call("POST", "createTask", {"title": title, "description": description})
        return Task.model_validate(data)

    def update_task(self, task_id: int, **fields: Any) -> Task:
        """Send only the given fields; pass ``description=None`` to clear it."""
        data = self._call("POST", "updateTask", {"id": task_id, **fields})
        return Task.model_validate(data)

    def toggle_task(self, task_id: int, completed: bool) -> Task:
        data = self._call("POST", "toggleTask", {"id": task_id, "completed": completed})
        return Task.model_validate(data)

    def delete_task(self, task_id: int) -> DeleteTaskResult:
        data = self._call("POST", "deleteTask", {"id": task_id})
        return DeleteTaskResult.model_validate(data)

    def _call(self, method: str, procedure: str, payload: dict[str, Any] | None = None) -> Any:
        response = self.http.request(method, f"{self.prefix}/{procedure}", json=payload)
        if response.is_success:
            return response.json()
        try:
            error = response.json().get("error", {})
        except ValueError:
            error = {}
        raise TaskRpcError(
            response.status_code,
            str(error.get("code", "HTTP_ERROR")),
            str(error.get("message", response.text)),
        )


class TaskListView:
    """Local task list reconciled against RPC responses.

    Safe to drive from several threads: claiming an in-flight action and merging a
    response into ``tasks`` both happen under one lock, the RPC call itself does not.
    """

    def __init__(self, client: TaskRpcClient) -> None:
        self.client = client
        self.phase: ViewPhase = "loading"
        self.tasks: list[Task] = []
        # In-flight actions, e.g. ("create", None) or ("toggle", 3).
        self.pending: set[tuple[str, int | None]] = set()
        self._lock = threading.Lock()

    @property
    def incomplete(self) -> list[Task]:
        return [task for task in self.tasks if not task.completed]

    @property
    def completed(self) -> list[Task]:
        return [task for task in self.tasks if task.completed]

    def summary(self) -> str:
        return f"{len(self.completed)} of {len(self.tasks)} tasks completed"

    def is_busy(self, action: str, task_id: int | None = None) -> bool:
        with self._lock:
            return (action, task_id) in self.pending

    def load(self) -> None:
        try:
            tasks = self.client.get_tasks()
        except (httpx.HTTPError, TaskRpcError):
            logger.error("task_view event=load status=failed", exc_info=True)
        else:
            with self._lock:
                self.tasks = tasks
        finally:
            self.phase = "idle"

    def create(self, title: str) -> Task | None:
        title = title.strip()
        key = ("create", None)
        if not title or not self._claim(key):
            return None
        try:
            task = self.client.create_task(title, None)
        except (httpx.HTTPError, TaskRpcError):
            logger.error("task_view event=create status=failed", exc_info=True)
            return None
        else:
            with self._lock:
                self.tasks = [*self.tasks, task]
            return task
        finally:
            self._release(key)

    def toggle(self, task_id: int, completed: bool) -> None:
        key = ("toggle", task_id)
        if not self._claim(key):
            return
        try:
            updated = self.client.toggle_task(task_id, completed)
        except (httpx.HTTPError, TaskRpcError):
            logger.error("task_view event=toggle task_id=%s status=failed", task_id, exc_info=True)
        else:
            with self._lock:
                # Only the completion flag is merged into the local copy.
                self.tasks = [
                    task.model_copy(update={"completed": updated.completed})
                    if task.id == task_id
                    else task
                    for task in self.tasks
                ]
        finally:
            self._release(key)

    def delete(self, task_id: int) -> None:
        key = ("delete", task_id)
        if not self._claim(key):
            return
        try:
            result = self.client.delete_task(task_id)
        except (httpx.HTTPError, TaskRpcError):
            logger.error("task_view event=delete task_id=%s status=failed", task_id, exc_info=True)
        else:
            if result.success:
                with self._lock:
                    self.tasks = [task for task in self.tasks if task.id != task_id]
        finally:
            self._release(key)

    def _claim(self, key: tuple[str, int | None]) -> bool:
        """Mark an action in flight; False when the same action already is."""
        with self._lock:
            if key in self.pending:
                return False
            self.pending.add(key)
            return True

    def _release(self, key: tuple[str, int | None]) -> None:
        with self._lock:
            self.pending.discard(key)
