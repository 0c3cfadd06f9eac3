"""Pydantic schemas for task request/response validation."""

from pydantic import Field, field_validator
from datetime import datetime, timezone
from typing import Optional, List

from taskapi.models.task import TaskPriority, TaskStatus
from taskapi.schemas.common import CamelModel


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Les dates sont stockées en UTC naïf : une date avec fuseau est convertie."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class TaskCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    due_date: datetime
    priority: TaskPriority

    @field_validator("due_date")
    @classmethod
    def due_date_utc(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class TaskUpdate(CamelModel):
    """Schema for a partial update: only the fields sent by the client are applied."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    due_date: Optional[datetime] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None

    @field_validator("due_date")
    @classmethod
    def due_date_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)


class TaskResponse(CamelModel):
    id: int
    title: str
    description: Optional[str]
    due_date: datetime
    priority: TaskPriority
    status: TaskStatus
    created_at: datetime
    updated_at: Optional[datetime]


class TaskPage(CamelModel):
    tasks: List[TaskResponse]
    total_count: int
    page_number: int
    page_size: int
    total_pages: int
