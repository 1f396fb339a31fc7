"""Pydantic schemas for bookmark endpoints."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class LabelRef(BaseModel):
    """A label as projected onto a bookmark."""

    id: UUID
    name: str


class BookmarkRead(BaseModel):
    """
    Schema for bookmarks returned by the store.

    `labels` is filled only by the grouped read queries; freshly created or
    updated bookmarks carry an empty list.
    """

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    url: str
    title: str | None = None
    thumbnail: str | None = None
    user_id: UUID
    created_at: datetime
    updated_at: datetime
    labels: list[LabelRef] = []


class BookmarkCreate(BaseModel):
    """
    Schema for creating a bookmark.

    Every field is optional at the schema level so the handler can report
    missing-url / invalid-url rather than a generic validation failure.
    """

    url: str | None = None
    title: str | None = None
    thumbnail: str | None = None


class BookmarkUpdate(BaseModel):
    """Schema for updating a bookmark. Only fields present in the body are applied."""

    url: str | None = None
    title: str | None = None
    thumbnail: str | None = None


class BookmarkResponse(BaseModel):
    """Single-bookmark response envelope."""

    bookmark: BookmarkRead


class BookmarkListResponse(BaseModel):
    """Bookmark collection response envelope."""

    bookmarks: list[BookmarkRead]
