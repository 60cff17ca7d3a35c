"""Task schemas."""

from datetime import UTC, datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator

from task_manager.models.enums import TaskPriority, TaskStatus


def _as_utc(value: datetime) -> datetime:
    """Normalize a due date to UTC; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class TaskCreate(BaseModel):
    """Create a new task."""

    model_config = ConfigDict(use_enum_values=True)

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=5000)
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: UtcDatetime | None = None
    category_id: int | None = None


class TaskUpdate(BaseModel):
    """Partial task update.

    Only fields present in the request body are applied. ``description``,
    ``due_date`` and ``category_id`` may be cleared with an explicit null.
    """

    model_config = ConfigDict(use_enum_values=True)

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=5000)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: UtcDatetime | None = None
    category_id: int | None = None

    @field_validator("title", "status", "priority")
    @classmethod
    def reject_null(cls, value):
        """Required columns cannot be cleared."""
        if value is None:
            raise ValueError("may not be null")
        return value


class TaskResponse(BaseModel):
    """Task response including the joined category name."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    category_id: int | None
    category_name: str | None
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime | None
    created_at: datetime
    updated_at: datetime


class TaskStatistics(BaseModel):
    """Aggregate task counts for one user."""

    total: int = 0
    pending: int = 0
    in_progress: int = 0
    completed: int = 0
    cancelled: int = 0
    high_priority: int = 0
    due_soon: int = 0
    overdue: int = 0
