"""
Pydantic schemas for the portable export document and import summary.

The export document deliberately omits user_id everywhere and keeps label
membership only on the labels collection (bookmarks carry no labels array).
"""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

EXPORT_VERSION = "1.0"


class BookmarkRef(BaseModel):
    """Reference to a bookmark by its id within the same document."""

    id: UUID


class ExportedBookmark(BaseModel):
    """Bookmark row as written to an export document."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    url: str
    title: str | None = None
    thumbnail: str | None = None
    created_at: datetime
    updated_at: datetime


class ExportedLabel(BaseModel):
    """Label row plus the bookmarks carrying it."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    created_at: datetime
    updated_at: datetime
    bookmarks: list[BookmarkRef] = []


class ExportedList(BaseModel):
    """List row plus its member bookmarks."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime
    bookmarks: list[BookmarkRef] = []


class ExportDocument(BaseModel):
    """A user's full graph, ready for download."""

    model_config = ConfigDict(populate_by_name=True)

    bookmarks: list[ExportedBookmark]
    labels: list[ExportedLabel]
    lists: list[ExportedList]
    export_date: datetime = Field(alias="exportDate")
    version: str = EXPORT_VERSION


class ImportCounter(BaseModel):
    """Created/failed tally for one category of imported items."""

    created: int = 0
    errors: int = 0


class ImportResults(BaseModel):
    """Per-category tallies of an import run."""

    model_config = ConfigDict(populate_by_name=True)

    labels: ImportCounter = Field(default_factory=ImportCounter)
    bookmarks: ImportCounter = Field(default_factory=ImportCounter)
    lists: ImportCounter = Field(default_factory=ImportCounter)
    bookmark_labels: ImportCounter = Field(
        default_factory=ImportCounter, alias="bookmarkLabels",
    )
    list_bookmarks: ImportCounter = Field(
        default_factory=ImportCounter, alias="listBookmarks",
    )


class ImportResponse(BaseModel):
    """Import response envelope. Always success=True once the document is accepted."""

    success: bool = True
    results: ImportResults
