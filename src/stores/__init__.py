"""Persistence stores, one per entity."""
from stores.bookmark_store import BookmarkStore
from stores.label_store import LabelStore
from stores.list_store import ListStore
from stores.user_store import UserStore

__all__ = [
    "BookmarkStore",
    "LabelStore",
    "ListStore",
    "UserStore",
]
