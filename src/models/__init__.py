"""SQLAlchemy models."""
from models.base import Base, TimestampMixin, UUIDMixin
from models.user import User
from models.bookmark import Bookmark
from models.label import BookmarkLabel, Label
from models.bookmark_list import BookmarkList, ListBookmark

__all__ = [
    "Base",
    "Bookmark",
    "BookmarkLabel",
    "BookmarkList",
    "Label",
    "ListBookmark",
    "TimestampMixin",
    "UUIDMixin",
    "User",
]
