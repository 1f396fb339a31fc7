"""Service layer for list operations."""
from uuid import UUID

from core.errors import DomainError
from schemas.bookmark import BookmarkRead
from schemas.bookmark_list import ListRead
from stores.list_store import ListStore


class ListService:
    """List operations; passes through to the store."""

    def __init__(self, store: ListStore) -> None:
        self._store = store

    async def get_lists(self, user_id: UUID) -> list[ListRead] | DomainError:
        return await self._store.get_lists(user_id)

    async def create_list(
        self,
        *,
        name: str,
        user_id: UUID,
        description: str | None = None,
    ) -> ListRead | DomainError:
        return await self._store.create_list(name=name, user_id=user_id, description=description)

    async def update_list(self, list_id: UUID, fields: dict) -> ListRead | DomainError:
        return await self._store.update_list(list_id, fields)

    async def delete_list(self, list_id: UUID) -> bool | DomainError:
        return await self._store.delete_list(list_id)

    async def is_owner(self, *, list_id: UUID | str, user_id: UUID) -> bool | DomainError:
        return await self._store.is_owner(list_id=list_id, user_id=user_id)

    async def add_bookmark_to_list(
        self,
        *,
        list_id: UUID,
        bookmark_id: UUID,
    ) -> bool | DomainError:
        return await self._store.add_bookmark_to_list(list_id=list_id, bookmark_id=bookmark_id)

    async def remove_bookmark_from_list(
        self,
        *,
        list_id: UUID,
        bookmark_id: UUID,
    ) -> bool | DomainError:
        return await self._store.remove_bookmark_from_list(list_id=list_id, bookmark_id=bookmark_id)

    async def get_bookmarks_in_list(self, list_id: UUID) -> list[BookmarkRead] | DomainError:
        return await self._store.get_bookmarks_in_list(list_id)
