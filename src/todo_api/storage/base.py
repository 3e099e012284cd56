"""Storage interface for the task table."""

from __future__ import annotations

from typing import Any, Protocol

from todo_api.app.models import Task


class TaskStorage(Protocol):
    """Insert/select/update/delete-by-key capability over the tasks table.

    Every method is exactly one round trip to the backing store.
    """

    def migrate(self) -> None: ...

    def insert_task(self, title: str, description: str | None = None) -> Task: ...

    def list_tasks(self) -> list[Task]: ...

    def update_task(self, task_id: int, changes: dict[str, Any]) -> Task | None: ...

    def delete_task(self, task_id: int) -> bool: ...
