"""Label model and the bookmark/label join table."""
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from models.user import User


class Label(Base, UUIDMixin, TimestampMixin):
    """Label model - a user-owned tag. Names are not unique, even per user."""

    __tablename__ = "labels"

    # id provided by UUIDMixin
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )

    user: Mapped["User"] = relationship(back_populates="labels")


class BookmarkLabel(Base, UUIDMixin, TimestampMixin):
    """
    Join row tagging a bookmark with a label.

    bookmark_id carries no foreign key: deleting a bookmark leaves its label rows
    behind, and every read joins from bookmarks so orphans never surface.
    Deleting a label removes its rows.
    """

    __tablename__ = "labels_bookmarks"
    __table_args__ = (
        UniqueConstraint(
            "bookmark_id", "label_id", name="uq_labels_bookmarks_bookmark_id_label_id",
        ),
    )

    bookmark_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        nullable=False,
        index=True,
    )
    label_id: Mapped[UUID] = mapped_column(
        ForeignKey("labels.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
