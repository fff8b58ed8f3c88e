from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from task_tracker.database import create_database
from task_tracker.errors import StorageUnavailable
from task_tracker.main import create_app


def test_health_check(client):
    """Test the health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert "running" in response.json()["status"]


def test_health_check_without_store(unreachable_database):
    app = create_app(database=unreachable_database, schema_policy="lenient")
    with TestClient(app) as test_client:
        app.state.schema_initializer.join(timeout=5)
        response = test_client.get("/health")

    assert response.status_code == 200
    assert "running" in response.json()["status"]


def test_readiness_check(client):
    response = client.get("/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready", "database": "connected"}


def test_readiness_check_without_store(unreachable_database):
    app = create_app(database=unreachable_database, schema_policy="lenient")
    with TestClient(app) as test_client:
        app.state.schema_initializer.join(timeout=5)
        response = test_client.get("/health/ready")

    assert response.status_code == 503
    assert "error" in response.json()


def test_create_task(client):
    """Test creating a task"""
    response = client.post("/api/tasks", json={"title": "Buy milk", "description": ""})

    assert response.status_code == 201
    data = response.json()
    assert isinstance(data["id"], int)
    assert data["title"] == "Buy milk"
    assert data["description"] == ""
    assert data["completed"] is False
    datetime.fromisoformat(data["created_at"])


def test_create_task_without_description(client):
    response = client.post("/api/tasks", json={"title": "Solo"})
    assert response.status_code == 201
    assert response.json()["description"] is None


def test_read_tasks_empty(client):
    response = client.get("/api/tasks")
    assert response.status_code == 200
    assert response.json() == []


def test_read_tasks_newest_first(client):
    client.post("/api/tasks", json={"title": "A"})
    client.post("/api/tasks", json={"title": "B"})

    response = client.get("/api/tasks")

    assert response.status_code == 200
    assert [task["title"] for task in response.json()] == ["B", "A"]


def test_created_tasks_have_unique_ids(client):
    ids = {client.post("/api/tasks", json={"title": f"Task {i}"}).json()["id"] for i in range(5)}
    assert len(ids) == 5
    assert {task["id"] for task in client.get("/api/tasks").json()} == ids


def test_create_task_empty_title(client):
    response = client.post("/api/tasks", json={"title": "", "description": "x"})
    assert response.status_code == 422
    assert "error" in response.json()
    assert client.get("/api/tasks").json() == []


def test_create_task_null_title(client):
    response = client.post("/api/tasks", json={"title": None})
    assert response.status_code == 422
    assert response.json()["error"] == "Title is required"


def test_create_task_missing_title(client):
    response = client.post("/api/tasks", json={"description": "no title"})
    assert response.status_code == 422
    assert response.json()["error"] == "Title is required"


def test_create_task_title_too_long(client):
    response = client.post("/api/tasks", json={"title": "x" * 256})
    assert response.status_code == 422


def test_create_task_malformed_body(client):
    response = client.post(
        "/api/tasks",
        content="not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 422
    assert "error" in response.json()


def test_storage_failure_is_redacted(unreachable_database):
    app = create_app(database=unreachable_database, schema_policy="lenient")
    with TestClient(app) as test_client:
        app.state.schema_initializer.join(timeout=5)
        list_response = test_client.get("/api/tasks")
        create_response = test_client.post("/api/tasks", json={"title": "Lost"})

    assert list_response.status_code == 500
    assert list_response.json() == {"error": "Failed to fetch tasks"}
    assert create_response.status_code == 500
    assert create_response.json() == {"error": "Failed to create task"}


def test_storage_failure_details_exposed(unreachable_database):
    app = create_app(
        database=unreachable_database,
        schema_policy="lenient",
        expose_error_details=True,
    )
    with TestClient(app) as test_client:
        app.state.schema_initializer.join(timeout=5)
        response = test_client.get("/api/tasks")

    assert response.status_code == 500
    assert "unable to open database file" in response.json()["error"]


def test_strict_policy_creates_schema_on_startup():
    database = create_database("sqlite://")
    try:
        app = create_app(database=database, schema_policy="strict")
        with TestClient(app) as test_client:
            assert test_client.post("/api/tasks", json={"title": "Ready"}).status_code == 201
    finally:
        database.dispose()


def test_cors_headers(client):
    response = client.get("/health", headers={"Origin": "http://localhost:3000"})
    assert response.headers.get("access-control-allow-origin") in ("*", "http://localhost:3000")


def test_storage_failure_details_exposed_on_create(unreachable_database):
    app = create_app(
        database=unreachable_database,
        schema_policy="lenient",
        expose_error_details=True,
    )
    with TestClient(app) as test_client:
        app.state.schema_initializer.join(timeout=5)
        response = test_client.post("/api/tasks", json={"title": "Lost"})

    assert response.status_code == 500
    assert "unable to open database file" in response.json()["error"]


def test_storage_errors_are_answered_by_the_routes(unreachable_database):
    app = create_app(database=unreachable_database, schema_policy="lenient")
    assert StorageUnavailable not in app.exception_handlers


def test_strict_policy_failure_aborts_startup(unreachable_database):
    app = create_app(database=unreachable_database, schema_policy="strict")
    with pytest.raises(StorageUnavailable):
        with TestClient(app):
            pass
