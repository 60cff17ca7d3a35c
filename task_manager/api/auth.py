"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from task_manager.api.dependencies import get_current_claims, get_user_service
from task_manager.config import get_settings
from task_manager.schemas.auth import (
    AuthResponse,
    TokenClaims,
    UserLogin,
    UserRegister,
    UserResponse,
    UserUpdate,
)
from task_manager.schemas.envelope import Envelope
from task_manager.services.auth import create_access_token
from task_manager.services.user_service import UserService

settings = get_settings()

router = APIRouter(prefix=f"{settings.api_prefix}/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    user_data: UserRegister,
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Register a new user."""
    user = users.register(user_data.username, user_data.email, user_data.password)

    return AuthResponse(
        success=True,
        message="User registered successfully",
        data=UserResponse.model_validate(user),
        token=create_access_token(user),
    )


@router.post("/login", response_model=AuthResponse, response_model_exclude_unset=True)
async def login(
    credentials: UserLogin,
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Login with email and password."""
    user = users.authenticate(credentials.email, credentials.password)

    return AuthResponse(
        success=True,
        message="Login successful",
        data=UserResponse.model_validate(user),
        token=create_access_token(user),
    )


@router.get("/me", response_model=Envelope[UserResponse], response_model_exclude_unset=True)
async def get_me(
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Get current user information."""
    user = users.get(claims.id)
    return Envelope[UserResponse](success=True, data=UserResponse.model_validate(user))


@router.put("/me", response_model=Envelope[UserResponse], response_model_exclude_unset=True)
async def update_me(
    profile: UserUpdate,
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Update the current user's username and email."""
    user = users.update_profile(claims.id, profile.username, profile.email)
    return Envelope[UserResponse](
        success=True,
        message="User profile updated successfully",
        data=UserResponse.model_validate(user),
    )


@router.delete("/me", response_model=Envelope, response_model_exclude_unset=True)
async def delete_me(
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Delete the current user's account with all their tasks and categories."""
    users.delete(claims.id)
    return Envelope(success=True, message="User account deleted successfully")
