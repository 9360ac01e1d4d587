"""Task Pydantic schemas."""
from datetime import datetime

from pydantic import BaseModel, Field


class TaskBase(BaseModel):
    """Base task schema."""

    title: str = Field(..., min_length=2, max_length=200, description="Task title")
    description: str = Field(..., min_length=2, max_length=1000, description="Task description")


class TaskCreate(TaskBase):
    """Schema for creating a task."""

    completed: bool = Field(default=False, description="Whether the task is done")


class TaskUpdate(TaskBase):
    """Schema for replacing a task. The id travels in the body."""

    id: int = Field(..., description="Task ID")
    completed: bool | None = Field(None, description="New completion state, unchanged if omitted")


class TaskResponse(TaskBase):
    """Schema for task response."""

    id: int
    user_id: int
    completed: bool
    created_at: datetime
    updated_at: datetime | None

    model_config = {"from_attributes": True}
