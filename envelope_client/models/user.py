"""User resource models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class UserItem(BaseModel):
    """A user as returned by the backend."""

    id: int
    name: str
    age: int = Field(ge=0)


class UserPayload(BaseModel):
    """Fields accepted when creating or updating a user."""

    name: str = Field(min_length=1)
    age: int = Field(ge=0)
