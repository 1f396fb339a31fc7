"""User model for storing registered users."""
from typing import TYPE_CHECKING

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from models.bookmark import Bookmark
    from models.bookmark_list import BookmarkList
    from models.label import Label


class User(Base, UUIDMixin, TimestampMixin):
    """User model - email/password account that owns bookmarks, labels and lists."""

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
    )

    # id provided by UUIDMixin
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    salt: Mapped[str] = mapped_column(String(255), nullable=False)

    bookmarks: Mapped[list["Bookmark"]] = relationship(back_populates="user")
    labels: Mapped[list["Label"]] = relationship(back_populates="user")
    lists: Mapped[list["BookmarkList"]] = relationship(back_populates="user")
