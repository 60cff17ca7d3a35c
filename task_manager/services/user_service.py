"""User account service."""

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from task_manager.database import is_unique_violation
from task_manager.errors import ConflictError, NotFoundError, UnauthorizedError
from task_manager.models.user import User
from task_manager.services.auth import get_password_hash, verify_password

logger = logging.getLogger(__name__)

DUPLICATE_USER_MESSAGE = "User already exists with that username or email"
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


class UserService:
    """Registration, login and self-service profile operations."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: int) -> User | None:
        """Get a user by id."""
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> User | None:
        """Get a user by email."""
        return self.db.query(User).filter(User.email == email).first()

    def get_by_username(self, username: str) -> User | None:
        """Get a user by username."""
        return self.db.query(User).filter(User.username == username).first()

    def register(self, username: str, email: str, password: str) -> User:
        """Create a new user.

        Raises:
            ConflictError: if the username or email is already taken.
        """
        if self.get_by_email(email) or self.get_by_username(username):
            raise ConflictError(DUPLICATE_USER_MESSAGE)

        user = User(
            username=username,
            email=email,
            password_hash=get_password_hash(password),
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if not is_unique_violation(e):
                raise
            raise ConflictError(DUPLICATE_USER_MESSAGE) from None
        self.db.refresh(user)

        logger.info(f"Registered user {user.id} ({user.username})")
        return user

    def authenticate(self, email: str, password: str) -> User:
        """Authenticate a user by email and password.

        Unknown email and wrong password fail identically.
        """
        user = self.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            logger.warning(f"Rejected login for {email!r}")
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)
        return user

    def get(self, user_id: int) -> User:
        """Get a user or raise NotFoundError."""
        user = self.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, user_id: int, username: str, email: str) -> User:
        """Change username and email of an existing user."""
        user = self.get(user_id)

        taken = (
            self.db.query(User.id)
            .filter(
                User.id != user_id,
                or_(User.username == username, User.email == email),
            )
            .first()
        )
        if taken:
            raise ConflictError("Username or email already in use")

        user.username = username
        user.email = email
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if not is_unique_violation(e):
                raise
            raise ConflictError("Username or email already in use") from None
        self.db.refresh(user)
        return user

    def delete(self, user_id: int) -> None:
        """Delete a user along with their tasks and categories."""
        user = self.get(user_id)
        self.db.delete(user)
        self.db.commit()
        logger.info(f"Deleted user {user_id}")
