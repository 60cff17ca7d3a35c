"""Application error taxonomy.

Each error is an ``HTTPException`` carrying its status code, so services can
raise them directly and the exception handlers in ``task_manager.api.errors``
shape them into the response envelope.
"""

from fastapi import HTTPException, status


class ValidationError(HTTPException):
    """Request is missing required data or references something invalid."""

    def __init__(self, detail: str = "Invalid request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class UnauthorizedError(HTTPException):
    """Caller could not be authenticated."""

    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class NotFoundError(HTTPException):
    """Resource does not exist or is not owned by the caller."""

    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictError(HTTPException):
    """A unique key (username, email, category name) is already taken."""

    def __init__(self, detail: str = "Already exists"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
