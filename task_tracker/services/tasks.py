from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from ..database import Database
from ..errors import StorageUnavailable, TaskValidationError
from ..logger import logger
from ..models import TITLE_MAX_LENGTH, Task

SAMPLE_TASKS = [
    ("Setup CI/CD Pipeline", "Configure GitHub Actions for automated deployment"),
    ("Write Documentation", "Create comprehensive README for the project"),
    ("Add Monitoring", "Implement health checks and logging"),
]


def _validate(title, description) -> None:
    if title is None:
        raise TaskValidationError("Title is required")
    if not isinstance(title, str):
        raise TaskValidationError("Title must be a string")
    if not title.strip():
        raise TaskValidationError("Title cannot be empty or just whitespace")
    if len(title) > TITLE_MAX_LENGTH:
        raise TaskValidationError(
            f"Title must be at most {TITLE_MAX_LENGTH} characters"
        )
    if description is not None and not isinstance(description, str):
        raise TaskValidationError("Description must be a string")


class TaskService:
    """Reads and writes tasks through the pooled store.

    Every call checks out one connection, runs one statement and hands the
    connection back. Store failures surface as StorageUnavailable; nothing
    is retried.
    """

    def __init__(self, database: Database):
        self.database = database

    def list_tasks(self) -> List[Task]:
        """Return every task, newest first."""
        statement = select(Task).order_by(Task.created_at.desc(), Task.id.desc())
        try:
            with self.database.session() as session:
                return list(session.exec(statement).all())
        except SQLAlchemyError as e:
            logger.error(f"Database query error: {str(e)}")
            raise StorageUnavailable.from_exception(e) from e

    def create_task(self, title, description: Optional[str] = None) -> Task:
        """Insert a task and return it with its id and created_at filled in."""
        _validate(title, description)
        try:
            with self.database.session() as session:
                task = Task(title=title, description=description)
                session.add(task)
                session.commit()
                session.refresh(task)
                logger.info(f"Created task with ID: {task.id}")
                return task
        except SQLAlchemyError as e:
            logger.error(f"Database insert error: {str(e)}")
            raise StorageUnavailable.from_exception(e) from e

    def seed_sample_tasks(self) -> int:
        """Insert the sample tasks into an empty table.

        Returns the number of tasks inserted, 0 when tasks already exist.
        """
        try:
            with self.database.session() as session:
                existing = session.exec(select(func.count()).select_from(Task)).one()
                if existing:
                    return 0
                for title, description in SAMPLE_TASKS:
                    session.add(Task(title=title, description=description))
                session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Database seed error: {str(e)}")
            raise StorageUnavailable.from_exception(e) from e
        logger.info(f"Seeded {len(SAMPLE_TASKS)} sample tasks")
        return len(SAMPLE_TASKS)
