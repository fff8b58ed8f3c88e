from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Any, Optional


class TaskCreate(BaseModel):
    """Schema for creating new tasks.

    Title and description are checked by TaskService, not here.
    """
    title: Any = None
    description: Any = None


class Task(BaseModel):
    """Complete task schema with all fields."""
    id: int
    title: str
    description: Optional[str] = None
    completed: bool = False
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ErrorResponse(BaseModel):
    error: str
