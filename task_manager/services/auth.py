"""Authentication service for JWT and password handling."""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from task_manager.config import get_settings
from task_manager.models.user import User
from task_manager.schemas.auth import TokenClaims

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


class InvalidTokenError(Exception):
    """Raised when a token is malformed, tampered with, or expired."""


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user: User, issued_at: datetime | None = None) -> str:
    """Create a JWT access token carrying the user's identity claims."""
    issued_at = issued_at or datetime.now(UTC)
    expire = issued_at + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user.id),
        "username": user.username,
        "email": user.email,
        "iat": issued_at,
        "exp": expire,
    }
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> TokenClaims:
    """Decode and validate a JWT token.

    Raises:
        InvalidTokenError: if the signature or expiry check fails, or the
            payload lacks the identity claims.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise InvalidTokenError(str(e)) from e

    try:
        return TokenClaims(
            id=int(payload["sub"]),
            username=payload["username"],
            email=payload["email"],
        )
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidTokenError("Token is missing identity claims") from e
