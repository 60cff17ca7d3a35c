"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from task_manager.database import get_db
from task_manager.errors import UnauthorizedError
from task_manager.models.user import User
from task_manager.schemas.auth import TokenClaims
from task_manager.services.auth import InvalidTokenError, decode_access_token
from task_manager.services.category_service import CategoryService
from task_manager.services.task_service import TaskService
from task_manager.services.user_service import UserService

# auto_error=False so a missing header is reported in the response envelope
security = HTTPBearer(auto_error=False)


def get_current_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> TokenClaims:
    """Get the caller's identity from the Bearer token."""
    # Only the exact "Bearer" scheme is accepted
    if credentials is None or credentials.scheme != "Bearer" or not credentials.credentials:
        raise UnauthorizedError("Access denied. No token provided.")

    try:
        return decode_access_token(credentials.credentials)
    except InvalidTokenError:
        raise UnauthorizedError("Invalid token.") from None


def get_current_user_id(
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    db: Annotated[Session, Depends(get_db)],
) -> int:
    """Get the id of the authenticated user, who must still exist."""
    user_id = db.query(User.id).filter(User.id == claims.id).scalar()
    if user_id is None:
        raise UnauthorizedError("Invalid token.")
    return user_id


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
) -> UserService:
    """Get user service with dependencies."""
    return UserService(db)


def get_category_service(
    db: Annotated[Session, Depends(get_db)],
) -> CategoryService:
    """Get category service with dependencies."""
    return CategoryService(db)


def get_task_service(
    db: Annotated[Session, Depends(get_db)],
) -> TaskService:
    """Get task service with dependencies."""
    return TaskService(db)
