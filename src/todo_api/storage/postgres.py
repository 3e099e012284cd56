"""PostgreSQL storage backend for tasks.

Beginner terms:
- Migration: creating/updating database tables before normal reads/writes.
- RETURNING: makes INSERT/UPDATE/DELETE hand back the affected row, so each
  operation needs a single round trip.
- Row factory: returns query rows as dict-like objects instead of tuples.
"""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Any

from todo_api.app.models import Task

# Column order matters only for readability of the generated SQL.
UPDATABLE_COLUMNS = ("title", "description", "completed")
UPDATED_AT_ASSIGNMENT = "updated_at = GREATEST(now(), updated_at + interval '1 microsecond')"


class PostgresTaskStorage:
    """Thread-safe PostgreSQL-backed storage for Task rows."""

    def __init__(self, database_url: str) -> None:
        if not database_url:
            raise ValueError("TODO_API_DATABASE_URL is required")
        self.database_url = database_url
        # Lock guards DB operations done through this storage instance.
        self._lock = threading.Lock()
        # Lazy import helper keeps error message clear if psycopg is missing.
        self._psycopg, self._dict_row = self._load_psycopg()

    def migrate(self) -> None:
        """Create required table and indexes if they do not already exist."""
        with self._lock, self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS tasks (
                    id SERIAL PRIMARY KEY,
                    title TEXT NOT NULL,
                    description TEXT,
                    completed BOOLEAN NOT NULL DEFAULT FALSE,
                    created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
                    updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
                )
                """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_tasks_created_at
                ON tasks(created_at DESC, id DESC)
                """)
            conn.commit()

    def insert_task(self, title: str, description: str | None = None) -> Task:
        """Insert a new incomplete task; the database assigns id and both timestamps."""
        with self._lock, self._connect() as conn:
            row = conn.execute(
                """
                INSERT INTO tasks (
                    title,
                    description,
                    completed
                ) VALUES (%s, %s, %s)
                RETURNING *
                """,
                (title, description, False),
            ).fetchone()
            conn.commit()
        if row is None:
            raise RuntimeError("Failed to persist task")
        return self._row_to_task(row)

    def list_tasks(self) -> list[Task]:
        """Read every task, newest first."""
        with self._lock, self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM tasks ORDER BY created_at DESC, id DESC",
            ).fetchall()
        return [self._row_to_task(row) for row in rows]

    def update_task(self, task_id: int, changes: dict[str, Any]) -> Task | None:
        """Apply only the given columns and reset updated_at; None when no row matched."""
        query, params = self._build_update(task_id, changes)
        with self._lock, self._connect() as conn:
            row = conn.execute(query, params).fetchone()
            conn.commit()
        if row is None:
            return None
        return self._row_to_task(row)

    def delete_task(self, task_id: int) -> bool:
        """Remove one row by id; True when a row was removed."""
        with self._lock, self._connect() as conn:
            row = conn.execute(
                "DELETE FROM tasks WHERE id = %s RETURNING id",
                (task_id,),
            ).fetchone()
            conn.commit()
        return row is not None

    @staticmethod
    def _build_update(task_id: int, changes: dict[str, Any]) -> tuple[str, list[Any]]:
        unknown = set(changes) - set(UPDATABLE_COLUMNS)
        if unknown:
            raise ValueError(f"Unsupported task columns: {sorted(unknown)}")
        # Column names come from UPDATABLE_COLUMNS only; values are always bound.
        columns = [column for column in UPDATABLE_COLUMNS if column in changes]
        assignments = [f"{column} = %s" for column in columns]
        # Database clock, and strictly after the stored value even if that clock steps back.
        assignments.append(UPDATED_AT_ASSIGNMENT)
        query = f"UPDATE tasks SET {', '.join(assignments)} WHERE id = %s RETURNING *"
        params = [changes[column] for column in columns]
        params.append(task_id)
        return query, params

    def _connect(self) -> Any:
        """Open a psycopg connection that yields dict-like rows."""
        return self._psycopg.connect(self.database_url, row_factory=self._dict_row)

    @staticmethod
    def _load_psycopg() -> tuple[Any, Any]:
        """Import psycopg and helpers with a friendly install hint on failure."""
        try:
            import psycopg
            from psycopg.rows import dict_row
        except ImportError as exc:  # pragma: no cover - exercised only without dependency
            raise RuntimeError(
                "PostgreSQL backend requires psycopg. Install with: "
                'python -m pip install "psycopg[binary]>=3.2,<4.0"'
            ) from exc
        return psycopg, dict_row

    @staticmethod
    def _parse_datetime(raw: Any) -> datetime:
        """Parse datetime value from database driver output."""
        if isinstance(raw, datetime):
            return raw
        if isinstance(raw, str):
            return datetime.fromisoformat(raw)
        raise TypeError(f"Unsupported datetime value: {type(raw)!r}")

    @classmethod
    def _row_to_task(cls, row: Any) -> Task:
        """Map one DB row to the canonical Task model."""
        return Task(
            id=int(row["id"]),
            title=row["title"],
            description=row["description"],
            completed=bool(row["completed"]),
            created_at=cls._parse_datetime(row["created_at"]),
            updated_at=cls._parse_datetime(row["updated_at"]),
        )
