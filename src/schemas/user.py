"""Pydantic schemas for user endpoints."""
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class UserRead(BaseModel):
    """Public view of a user (never includes password material)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str


class UserCredentials(BaseModel):
    """Body of /signup and /login."""

    email: str | None = None
    password: str | None = None


class UserResponse(BaseModel):
    """Signup response envelope."""

    user: UserRead
