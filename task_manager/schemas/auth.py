"""Authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from task_manager.schemas.envelope import Envelope


class UserRegister(BaseModel):
    """User registration request."""

    username: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class UserLogin(BaseModel):
    """User login request."""

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class UserUpdate(BaseModel):
    """Profile update request. Both fields are required."""

    username: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., min_length=1, max_length=255)


class UserResponse(BaseModel):
    """Public user information (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    created_at: datetime
    updated_at: datetime


class TokenClaims(BaseModel):
    """Identity fields carried by a verified access token."""

    id: int
    username: str
    email: str


class AuthResponse(Envelope[UserResponse]):
    """Envelope returned by register and login, with the issued token."""

    token: str
