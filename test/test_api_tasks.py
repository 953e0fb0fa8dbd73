"""
Tests de la API HTTP /api/tasks con TestClient y repositorio en memoria.
"""

from unittest.mock import Mock
from uuid import uuid4

import pytest

from backend_fastapi.api.deps import settings, task_repository
from backend_fastapi.main import app
from core.domain.errors import StorageUnavailableError
from infrastructure.config import Settings

EXAMPLE = {
    "title": "Implement user authentication",
    "description": "Add JWT-based authentication to the API",
    "status": "in_progress",
    "priority": "high",
    "dueDate": "2025-12-15T00:00:00Z",
}


def _create(client, **overrides):
    payload = {"title": "Tarea", **overrides}
    response = client.post("/api/tasks", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_create_task_returns_camel_case_body(client):
    response = client.post("/api/tasks", json=EXAMPLE)

    assert response.status_code == 201
    body = response.json()
    assert body["title"] == EXAMPLE["title"]
    assert body["status"] == "in_progress"
    assert body["priority"] == "high"
    assert body["dueDate"].startswith("2025-12-15T00:00:00")
    assert body["createdAt"] == body["updatedAt"]
    assert set(body) == {
        "id", "title", "description", "status", "priority",
        "createdAt", "updatedAt", "dueDate",
    }


def test_create_task_defaults(client):
    body = _create(client, title="Mínima")

    assert body["status"] == "todo"
    assert body["priority"] == "medium"
    assert body["description"] == ""
    assert body["dueDate"] is None


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"title": ""},
        {"title": "   "},
        {"title": "x" * 201},
        {"title": "ok", "status": "blocked"},
        {"title": "ok", "priority": "urgent"},
        {"title": "ok", "dueDate": "mañana"},
        {"title": "ok", "owner": "alguien"},
    ],
)
def test_create_task_validation_errors(client, payload):
    response = client.post("/api/tasks", json=payload)

    assert response.status_code == 422
    assert "detail" in response.json()


def test_get_task(client):
    created = _create(client, title="Buscar")

    response = client.get(f"/api/tasks/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created


def test_get_task_not_found(client):
    response = client.get(f"/api/tasks/{uuid4()}")

    assert response.status_code == 404
    assert "no encontrada" in response.json()["detail"]


def test_get_task_malformed_id(client):
    assert client.get("/api/tasks/no-es-un-uuid").status_code == 422


def test_update_task_is_partial(client):
    created = _create(client, title="Original", description="desc", priority="low")

    response = client.put(f"/api/tasks/{created['id']}", json={"status": "done"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "done"
    assert body["title"] == "Original"
    assert body["description"] == "desc"
    assert body["priority"] == "low"
    assert body["createdAt"] == created["createdAt"]


def test_update_task_clears_due_date(client):
    created = _create(client, dueDate="2030-01-01T00:00:00Z")

    body = client.put(f"/api/tasks/{created['id']}", json={"dueDate": None}).json()

    assert body["dueDate"] is None


@pytest.mark.parametrize(
    "payload", [{"title": None}, {"title": " "}, {"status": None}, {"priority": "max"}]
)
def test_update_task_validation_errors(client, payload):
    created = _create(client)

    response = client.put(f"/api/tasks/{created['id']}", json=payload)

    assert response.status_code == 422


def test_update_task_not_found(client):
    response = client.put(f"/api/tasks/{uuid4()}", json={"title": "x"})

    assert response.status_code == 404


def test_delete_task(client):
    created = _create(client)

    response = client.delete(f"/api/tasks/{created['id']}")

    assert response.status_code == 204
    assert response.content == b""
    assert client.get(f"/api/tasks/{created['id']}").status_code == 404
    assert client.delete(f"/api/tasks/{created['id']}").status_code == 404


def test_list_tasks_filters_and_paginates(client):
    for i, (status, priority) in enumerate(
        [("todo", "high"), ("done", "high"), ("todo", "low"), ("todo", "high")]
    ):
        _create(client, title=f"t{i}", status=status, priority=priority)

    response = client.get(
        "/api/tasks", params={"status": "todo", "priority": "high", "limit": 1, "page": 2}
    )

    assert response.status_code == 200
    body = response.json()
    assert [t["title"] for t in body["items"]] == ["t3"]
    assert body["total"] == 2
    assert body["page"] == 2
    assert body["limit"] == 1
    assert body["pages"] == 2


def test_list_tasks_default_page(client):
    _create(client, title="a")
    _create(client, title="b")

    body = client.get("/api/tasks").json()

    assert [t["title"] for t in body["items"]] == ["a", "b"]
    assert body["page"] == 1
    assert body["limit"] == 20


@pytest.mark.parametrize(
    "params",
    [{"page": 0}, {"limit": 0}, {"limit": 101}, {"status": "blocked"}, {"priority": "x"}],
)
def test_list_tasks_invalid_query(client, params):
    assert client.get("/api/tasks", params=params).status_code == 422


def test_stats(client):
    _create(client, status="done", priority="high")
    _create(client, status="todo", priority="high", dueDate="2000-01-01T00:00:00Z")
    _create(client, status="in_progress", priority="low")
    _create(client, status="done", priority="medium")

    response = client.get("/api/tasks/stats")

    assert response.status_code == 200
    assert response.json() == {
        "total": 4,
        "byStatus": {"todo": 1, "in_progress": 1, "done": 2},
        "byPriority": {"low": 1, "medium": 1, "high": 2},
        "completionRate": 0.5,
        "overdue": 1,
    }


def test_stats_empty(client):
    body = client.get("/api/tasks/stats").json()

    assert body["total"] == 0
    assert body["completionRate"] == 0.0


def test_storage_unavailable_maps_to_503(client):
    broken = Mock()
    broken.list.side_effect = StorageUnavailableError("ningún almacenamiento disponible")
    app.dependency_overrides[task_repository] = lambda: broken

    response = client.get("/api/tasks")

    assert response.status_code == 503
    assert "almacenamiento" in response.json()["detail"]


def test_unexpected_error_maps_to_500(client):
    broken = Mock()
    broken.list.side_effect = RuntimeError("boom")
    app.dependency_overrides[task_repository] = lambda: broken

    response = client.get("/api/tasks/stats")

    assert response.status_code == 500
    assert response.json() == {"detail": "Error interno del servidor"}


def test_limit_above_configured_max_maps_to_400(client):
    app.dependency_overrides[settings] = lambda: Settings(max_page_size=5, default_page_size=5)

    response = client.get("/api/tasks", params={"limit": 10})

    assert response.status_code == 400
    assert "detail" in response.json()
