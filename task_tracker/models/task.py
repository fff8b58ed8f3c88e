from sqlalchemy import Column, DateTime, Index, Text, false, func
from sqlmodel import SQLModel, Field
from datetime import datetime, timezone
from typing import Optional

TITLE_MAX_LENGTH = 255


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Task(SQLModel, table=True):
    """Task model for todo items.

    Rows are only ever inserted; the service exposes no update or delete.
    """
    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=TITLE_MAX_LENGTH, nullable=False)
    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    completed: bool = Field(
        default=False,
        nullable=False,
        sa_column_kwargs={"server_default": false()},
    )
    created_at: datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False, server_default=func.now()),
    )


# Newest-first listing sorts on this index.
Index("idx_tasks_created_at", Task.__table__.c.created_at.desc())
