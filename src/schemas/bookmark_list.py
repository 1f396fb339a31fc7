"""Pydantic schemas for list endpoints."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ListRead(BaseModel):
    """Schema for lists returned by the store."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None = None
    user_id: UUID
    created_at: datetime
    updated_at: datetime


class ListCreate(BaseModel):
    """Schema for creating a list."""

    name: str | None = None
    description: str | None = None


class ListUpdate(BaseModel):
    """Schema for updating a list. Only fields present in the body are applied."""

    name: str | None = None
    description: str | None = None


class ListBookmarkAdd(BaseModel):
    """Body of POST /lists/{list_id}/bookmarks."""

    model_config = ConfigDict(populate_by_name=True)

    bookmark_id: str | None = Field(default=None, alias="bookmarkId")


class ListResponse(BaseModel):
    """Single-list response envelope."""

    list: ListRead


class ListCollectionResponse(BaseModel):
    """List collection response envelope."""

    lists: list[ListRead]


class SuccessResponse(BaseModel):
    """Acknowledgement for relation writes."""

    success: bool = True
