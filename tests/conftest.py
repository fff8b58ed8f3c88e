import pytest
from fastapi.testclient import TestClient

from task_tracker.database import create_database, ensure_schema
from task_tracker.main import create_app
from task_tracker.services import TaskService


@pytest.fixture
def database():
    """In-memory SQLite database with the tasks table in place."""
    db = create_database("sqlite://")
    ensure_schema(db)
    yield db
    db.dispose()


@pytest.fixture
def unreachable_database(tmp_path):
    """Database whose file lives in a directory that does not exist."""
    db = create_database(f"sqlite:///{tmp_path / 'missing' / 'tasks.db'}")
    yield db
    db.dispose()


@pytest.fixture
def service(database):
    return TaskService(database)


@pytest.fixture
def client(database):
    """Create a test client around the in-memory database"""
    app = create_app(database=database, schema_policy="strict")
    with TestClient(app) as test_client:
        yield test_client
