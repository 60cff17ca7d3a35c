"""Category schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CategoryCreate(BaseModel):
    """Create a new category."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=2000)


class CategoryUpdate(BaseModel):
    """Update a category. Omitted fields are left untouched."""

    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=2000)

    @field_validator("name")
    @classmethod
    def reject_null(cls, value):
        """A category name cannot be cleared."""
        if value is None:
            raise ValueError("may not be null")
        return value


class CategoryResponse(BaseModel):
    """Category response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    description: str | None
    created_at: datetime
    updated_at: datetime


class CategoryDetailResponse(CategoryResponse):
    """Category response with the number of tasks filed under it."""

    task_count: int = 0
