import pytest
from fastapi.testclient import TestClient

from backend_fastapi.api.deps import task_repository
from backend_fastapi.main import app
from infrastructure.memory.task_repository import InMemoryTaskRepository


@pytest.fixture
def memory_repo():
    return InMemoryTaskRepository()


@pytest.fixture
def client(memory_repo):
    app.dependency_overrides[task_repository] = lambda: memory_repo
    # Los errores 500 deben llegar como respuesta JSON, no como excepción
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()
