"""Service layer for bookmark operations."""
from uuid import UUID

from core.errors import DomainError
from schemas.bookmark import BookmarkRead
from stores.bookmark_store import BookmarkStore


class BookmarkService:
    """
    Bookmark operations exposed to handlers and the import orchestrator.

    Passes through to the store; ownership is checked by the caller.
    """

    def __init__(self, store: BookmarkStore) -> None:
        self._store = store

    async def get_bookmarks(
        self,
        user_id: UUID,
        label_id: UUID | None = None,
    ) -> list[BookmarkRead] | DomainError:
        return await self._store.get_bookmarks(user_id, label_id)

    async def add_bookmark(
        self,
        *,
        url: str,
        user_id: UUID,
        title: str | None = None,
        thumbnail: str | None = None,
    ) -> BookmarkRead | DomainError:
        return await self._store.add_bookmark(
            url=url, user_id=user_id, title=title, thumbnail=thumbnail,
        )

    async def update_bookmark(self, bookmark_id: UUID, fields: dict) -> BookmarkRead | DomainError:
        return await self._store.update_bookmark(bookmark_id, fields)

    async def delete_bookmark(self, bookmark_id: UUID) -> bool | DomainError:
        return await self._store.delete_bookmark(bookmark_id)

    async def add_label_to_bookmark(
        self,
        *,
        bookmark_id: UUID,
        label_id: UUID,
    ) -> bool | DomainError:
        return await self._store.add_label_to_bookmark(bookmark_id=bookmark_id, label_id=label_id)

    async def remove_label_from_bookmark(
        self,
        *,
        bookmark_id: UUID,
        label_id: UUID,
    ) -> bool | DomainError:
        return await self._store.remove_label_from_bookmark(
            bookmark_id=bookmark_id, label_id=label_id,
        )

    async def is_owner(self, *, bookmark_id: UUID, user_id: UUID) -> bool | DomainError:
        return await self._store.is_owner(bookmark_id=bookmark_id, user_id=user_id)
