"""Task service: validated inputs in, one store call, typed results or errors out.

Beginner terms used in this file:
- Service: the layer between the RPC routes and storage. It owns the rules
  (not-found is an error for update/toggle, but a normal result for delete).
- Store round trip: one request/response exchange with the storage backend.
"""

from __future__ import annotations

import logging

from todo_api.app.errors import TaskNotFoundError
from todo_api.app.models import (
    CreateTaskInput,
    DeleteTaskInput,
    DeleteTaskResult,
    Task,
    ToggleTaskInput,
    UpdateTaskInput,
)
from todo_api.storage.base import TaskStorage

logger = logging.getLogger(__name__)


class TaskService:
    """The five task operations, each backed by exactly one store round trip."""

    def __init__(self, storage: TaskStorage) -> None:
        self.storage = storage

    def create_task(self, payload: CreateTaskInput) -> Task:
        task = self.storage.insert_task(payload.title, payload.description)
        logger.info("task_service event=create task_id=%s", task.id)
        return task

    def get_tasks(self) -> list[Task]:
        tasks = self.storage.list_tasks()
        logger.info("task_service event=list count=%s", len(tasks))
        return tasks

    def update_task(self, payload: UpdateTaskInput) -> Task:
        changes = payload.changes()
        task = self.storage.update_task(payload.id, changes)
        if task is None:
            logger.warning("task_service event=update task_id=%s status=not_found", payload.id)
            raise TaskNotFoundError(payload.id)
        logger.info(
            "task_service event=update task_id=%s fields=%s",
            task.id,
            sorted(changes),
        )
        return task

    def toggle_task(self, payload: ToggleTaskInput) -> Task:
        task = self.storage.update_task(payload.id, payload.changes())
        if task is None:
            logger.warning("task_service event=toggle task_id=%s status=not_found", payload.id)
            raise TaskNotFoundError(payload.id)
        logger.info(
            "task_service event=toggle task_id=%s completed=%s",
            task.id,
            task.completed,
        )
        return task

    def delete_task(self, payload: DeleteTaskInput) -> DeleteTaskResult:
        removed = self.storage.delete_task(payload.id)
        logger.info("task_service event=delete task_id=%s success=%s", payload.id, removed)
        return DeleteTaskResult(success=removed)
