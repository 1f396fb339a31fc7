"""Bookmark model for storing user bookmarks."""
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from models.user import User


class Bookmark(Base, UUIDMixin, TimestampMixin):
    """Bookmark model - stores a URL with optional title and thumbnail."""

    __tablename__ = "bookmarks"
    __table_args__ = (
        # URLs are unique across all users, not per user
        UniqueConstraint("url", name="uq_bookmarks_url"),
    )

    # id provided by UUIDMixin
    url: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    thumbnail: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )

    user: Mapped["User"] = relationship(back_populates="bookmarks")
