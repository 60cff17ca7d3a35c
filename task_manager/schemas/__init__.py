"""Pydantic schemas for API requests and responses."""

from task_manager.schemas.auth import (
    AuthResponse,
    TokenClaims,
    UserLogin,
    UserRegister,
    UserResponse,
    UserUpdate,
)
from task_manager.schemas.category import (
    CategoryCreate,
    CategoryDetailResponse,
    CategoryResponse,
    CategoryUpdate,
)
from task_manager.schemas.envelope import Envelope
from task_manager.schemas.task import TaskCreate, TaskResponse, TaskStatistics, TaskUpdate

__all__ = [
    "Envelope",
    "UserRegister",
    "UserLogin",
    "UserUpdate",
    "UserResponse",
    "TokenClaims",
    "AuthResponse",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CategoryDetailResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "TaskStatistics",
]
