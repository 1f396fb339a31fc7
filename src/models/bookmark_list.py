"""BookmarkList model for user-curated collections of bookmarks."""
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from models.user import User


class BookmarkList(Base, UUIDMixin, TimestampMixin):
    """BookmarkList model - a named collection of bookmarks with an optional description."""

    __tablename__ = "lists"

    # id provided by UUIDMixin
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )

    user: Mapped["User"] = relationship(back_populates="lists")


class ListBookmark(Base, UUIDMixin, TimestampMixin):
    """Join row placing a bookmark in a list. Removed when either parent is deleted."""

    __tablename__ = "lists_bookmarks"
    __table_args__ = (
        UniqueConstraint(
            "list_id", "bookmark_id", name="uq_lists_bookmarks_list_id_bookmark_id",
        ),
    )

    list_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("lists.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    bookmark_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("bookmarks.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
