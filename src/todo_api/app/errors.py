"""Domain errors raised by the task service."""

from __future__ import annotations


class TaskNotFoundError(LookupError):
    """Raised when update/toggle targets an id with no matching row."""

    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"Task with id {task_id} not found")
