"""Uniform response envelope."""

from typing import Generic, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


class Envelope(BaseModel, Generic[DataT]):
    """Wrapper shared by every API response.

    Routes serialize with ``response_model_exclude_unset`` so ``message``,
    ``data`` and ``count`` only appear when a handler sets them.
    """

    success: bool
    message: str | None = None
    data: DataT | None = None
    count: int | None = None
