"""Storage backends for the tasks table."""

from todo_api.storage.base import TaskStorage
from todo_api.storage.memory import InMemoryTaskStorage
from todo_api.storage.postgres import PostgresTaskStorage

__all__ = [
    "InMemoryTaskStorage",
    "PostgresTaskStorage",
    "TaskStorage",
]
