"""Backend response envelope models.

Every endpoint answers with the same JSON shape:
{ data: T, code: int, success: bool, message: str | None }
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ResponseEnvelope(BaseModel, Generic[T]):
    """JSON envelope wrapping every backend response."""

    success: bool
    code: int
    data: T | None = None
    message: str | None = None


class PaginatedData(BaseModel, Generic[T]):
    """Page of records nested inside an envelope's ``data``."""

    records: list[T] = Field(default_factory=list)
    page: int = Field(ge=0)
    size: int = Field(ge=0)
    total: int = Field(ge=0)
