from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from todo_api.app.service import TaskService
from todo_api.config.settings import Settings
from todo_api.main import create_app
from todo_api.storage.memory import InMemoryTaskStorage


@pytest.fixture
def storage() -> InMemoryTaskStorage:
    return InMemoryTaskStorage()


@pytest.fixture
def service(storage: InMemoryTaskStorage) -> TaskService:
    return TaskService(storage)


@pytest.fixture
def settings() -> Settings:
    return Settings(app_name="todo-api-test", storage_backend="memory", database_url="")


@pytest.fixture
def client(storage: InMemoryTaskStorage, settings: Settings) -> Iterator[TestClient]:
    app = create_app(storage=storage, settings_override=settings)
    with TestClient(app) as test_client:
        yield test_client
