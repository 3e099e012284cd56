"""Pydantic models shared across the RPC boundary, the service, and storage.

Beginner terms used in this file:
- Model: a typed schema class used for validation/serialization.
- Strict mode: values are not coerced ("5" is not accepted where an int is expected).
- fields_set: the names of the fields a caller actually sent, even when the value was null.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Task(BaseModel):
    """Canonical task record shape returned by RPC/storage."""

    id: int
    title: str
    # None means "no description"; the wire shape always carries the key.
    description: str | None = None
    completed: bool = False
    created_at: datetime
    updated_at: datetime


class CreateTaskInput(BaseModel):
    """Input for createTask."""

    model_config = ConfigDict(strict=True)

    # min_length rejects an empty title before the store is reached.
    title: str = Field(min_length=1)
    description: str | None = None


class UpdateTaskInput(BaseModel):
    """Input for updateTask.

    Every optional field is tri-state: omitted keeps the stored value, an explicit
    value replaces it, and for ``description`` an explicit null clears it.
    """

    model_config = ConfigDict(strict=True)

    id: int
    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    completed: bool | None = None

    @field_validator("title", "completed")
    @classmethod
    def _reject_explicit_null(cls, value: Any) -> Any:
        # Runs only for values the caller sent; defaults are not validated.
        if value is None:
            raise ValueError("field may be omitted but not null")
        return value

    def changes(self) -> dict[str, Any]:
        """Return only the fields present in the request, without ``id``."""
        return {name: getattr(self, name) for name in self.model_fields_set if name != "id"}


class ToggleTaskInput(BaseModel):
    """Input for toggleTask: the explicit target state, not a flip."""

    model_config = ConfigDict(strict=True)

    id: int
    completed: bool

    def changes(self) -> dict[str, Any]:
        return {"completed": self.completed}


class DeleteTaskInput(BaseModel):
    """Input for deleteTask."""

    model_config = ConfigDict(strict=True)

    id: int


class DeleteTaskResult(BaseModel):
    """deleteTask outcome; ``success`` is False when no row matched."""

    success: bool
