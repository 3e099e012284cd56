"""In-memory storage backend for tests and local development."""

from __future__ import annotations

import threading
from datetime import UTC, datetime, timedelta
from typing import Any

from todo_api.app.models import Task

UPDATABLE_COLUMNS = frozenset({"title", "description", "completed"})


class InMemoryTaskStorage:
    """Dict-backed implementation matching PostgresTaskStorage behavior."""

    def __init__(self) -> None:
        self._tasks: dict[int, Task] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def migrate(self) -> None:
        return None

    def insert_task(self, title: str, description: str | None = None) -> Task:
        now = datetime.now(UTC)
        with self._lock:
            task = Task(
                id=self._next_id,
                title=title,
                description=description,
                completed=False,
                created_at=now,
                updated_at=now,
            )
            self._next_id += 1
            self._tasks[task.id] = task
        return task.model_copy()

    def list_tasks(self) -> list[Task]:
        with self._lock:
            tasks = list(self._tasks.values())
        ordered = sorted(tasks, key=lambda task: (task.created_at, task.id), reverse=True)
        return [task.model_copy() for task in ordered]

    def update_task(self, task_id: int, changes: dict[str, Any]) -> Task | None:
        unknown = set(changes) - UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Unsupported task columns: {sorted(unknown)}")
        with self._lock:
            current = self._tasks.get(task_id)
            if current is None:
                return None
            # Keep updated_at strictly increasing even if the clock has not ticked.
            updated_at = max(
                datetime.now(UTC),
                current.updated_at + timedelta(microseconds=1),
            )
            updated = current.model_copy(update={**changes, "updated_at": updated_at})
            self._tasks[task_id] = updated
        return updated.model_copy()

    def delete_task(self, task_id: int) -> bool:
        with self._lock:
            return self._tasks.pop(task_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._tasks.clear()
