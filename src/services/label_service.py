"""Service layer for label operations."""
from uuid import UUID

from core.errors import DomainError
from schemas.label import LabelRead
from stores.label_store import LabelStore


class LabelService:
    """Label operations; passes through to the store."""

    def __init__(self, store: LabelStore) -> None:
        self._store = store

    async def get_labels(self, user_id: UUID) -> list[LabelRead] | DomainError:
        return await self._store.get_labels(user_id)

    async def create_label(self, *, name: str, user_id: UUID) -> LabelRead | DomainError:
        return await self._store.create_label(name=name, user_id=user_id)

    async def update_label(self, label_id: UUID, fields: dict) -> LabelRead | DomainError:
        return await self._store.update_label(label_id, fields)

    async def delete_label(self, label_id: UUID) -> bool | DomainError:
        return await self._store.delete_label(label_id)

    async def is_owner(self, *, label_id: UUID, user_id: UUID) -> bool | DomainError:
        return await self._store.is_owner(label_id=label_id, user_id=user_id)
