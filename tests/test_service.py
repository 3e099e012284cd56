from __future__ import annotations

from datetime import UTC, datetime

import pytest

from todo_api.app.errors import TaskNotFoundError
from todo_api.app.models import (
    CreateTaskInput,
    DeleteTaskInput,
    ToggleTaskInput,
    UpdateTaskInput,
)
from todo_api.app.service import TaskService
from todo_api.storage import memory as memory_module


def _create(service: TaskService, title: str = "Original Task", description: str | None = None):
    return service.create_task(CreateTaskInput(title=title, description=description))


def test_create_task_defaults(service: TaskService) -> None:
    task = _create(service, "Buy milk")

    assert task.id >= 1
    assert task.title == "Buy milk"
    assert task.description is None
    assert task.completed is False
    assert task.created_at == task.updated_at


def test_create_task_keeps_description(service: TaskService) -> None:
    task = _create(service, "Write report", "Quarterly numbers")

    assert task.description == "Quarterly numbers"


def test_get_tasks_empty(service: TaskService) -> None:
    assert service.get_tasks() == []


def test_get_tasks_returns_newest_first(service: TaskService) -> None:
    created = [_create(service, f"Task {index}") for index in range(4)]

    listed = service.get_tasks()

    assert [task.id for task in listed] == [task.id for task in reversed(created)]


def test_update_title_only_leaves_other_fields(service: TaskService) -> None:
    original = _create(service, description="Original description")

    result = service.update_task(UpdateTaskInput(id=original.id, title="Updated Task Title"))

    assert result.title == "Updated Task Title"
    assert result.description == "Original description"
    assert result.completed is False
    assert result.created_at == original.created_at
    assert result.updated_at > original.updated_at


def test_update_can_clear_description_with_null(service: TaskService) -> None:
    original = _create(service, description="Original description")

    result = service.update_task(UpdateTaskInput(id=original.id, description=None))

    assert result.description is None
    assert result.title == original.title


def test_update_with_only_id_still_bumps_updated_at(service: TaskService) -> None:
    original = _create(service, description="Keep me")

    result = service.update_task(UpdateTaskInput(id=original.id))

    assert result.model_dump(exclude={"updated_at"}) == original.model_dump(exclude={"updated_at"})
    assert result.updated_at > original.updated_at


def test_update_missing_task_raises_not_found(service: TaskService) -> None:
    with pytest.raises(TaskNotFoundError, match="Task with id 999 not found") as excinfo:
        service.update_task(UpdateTaskInput(id=999, title="Nope"))

    assert excinfo.value.task_id == 999
    assert service.get_tasks() == []


def test_toggle_sets_completed_only(service: TaskService) -> None:
    original = _create(service, description="Details")

    result = service.toggle_task(ToggleTaskInput(id=original.id, completed=True))

    assert result.completed is True
    assert result.title == original.title
    assert result.description == original.description
    assert result.updated_at > original.updated_at


def test_toggle_repeated_value_still_advances_updated_at(service: TaskService) -> None:
    original = _create(service)

    first = service.toggle_task(ToggleTaskInput(id=original.id, completed=True))
    second = service.toggle_task(ToggleTaskInput(id=original.id, completed=True))

    assert first.completed is True
    assert second.completed is True
    assert second.updated_at > first.updated_at > original.updated_at


def test_toggle_missing_task_raises_not_found(service: TaskService) -> None:
    with pytest.raises(TaskNotFoundError) as excinfo:
        service.toggle_task(ToggleTaskInput(id=42, completed=True))

    assert excinfo.value.task_id == 42


def test_delete_is_idempotent(service: TaskService) -> None:
    task = _create(service)
    other = _create(service, "Other")

    assert service.delete_task(DeleteTaskInput(id=task.id)).success is True
    assert [item.id for item in service.get_tasks()] == [other.id]
    assert service.delete_task(DeleteTaskInput(id=task.id)).success is False
    assert service.delete_task(DeleteTaskInput(id=task.id)).success is False
    assert [item.id for item in service.get_tasks()] == [other.id]


def test_store_errors_propagate_unchanged(service: TaskService, monkeypatch: pytest.MonkeyPatch) -> None:
    class StoreDown(ConnectionError):
        pass

    def broken_insert(title: str, description: str | None = None):
        raise StoreDown("connection refused")

    monkeypatch.setattr(service.storage, "insert_task", broken_insert)

    with pytest.raises(StoreDown, match="connection refused"):
        _create(service)


def test_buy_milk_scenario(service: TaskService) -> None:
    created = _create(service, "Buy milk")
    assert created.description is None
    assert created.completed is False

    updated = service.update_task(UpdateTaskInput(id=created.id, completed=True))
    assert updated.completed is True
    assert updated.title == "Buy milk"

    assert service.delete_task(DeleteTaskInput(id=created.id)).success is True
    assert service.get_tasks() == []


def test_get_tasks_breaks_created_at_ties_by_id(
    service: TaskService, monkeypatch: pytest.MonkeyPatch
) -> None:
    frozen = datetime(2026, 3, 1, 9, 30, tzinfo=UTC)

    class FrozenDatetime(datetime):
        @classmethod
        def now(cls, tz=None):
            return frozen

    monkeypatch.setattr(memory_module, "datetime", FrozenDatetime)
    first = _create(service, "First")
    second = _create(service, "Second")
    third = _create(service, "Third")

    assert first.created_at == second.created_at == third.created_at
    assert [task.id for task in service.get_tasks()] == [third.id, second.id, first.id]
