"""Store layer for labels."""
import logging
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import DomainError
from models.label import Label
from schemas.label import LabelRead

logger = logging.getLogger(__name__)


class LabelStore:
    """Label persistence bound to one session."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def get_labels(self, user_id: UUID) -> list[LabelRead] | DomainError:
        """Get a user's labels, newest first."""
        try:
            result = await self._db.execute(
                select(Label)
                .where(Label.user_id == user_id)
                .order_by(Label.created_at.desc(), Label.id),
            )
        except SQLAlchemyError:
            logger.exception("Failed to fetch labels for user %s", user_id)
            return DomainError("label", "error", "There was an error fetching labels")
        return [LabelRead.model_validate(label) for label in result.scalars().all()]

    async def create_label(self, *, name: str, user_id: UUID) -> LabelRead | DomainError:
        """Insert a label. Names need not be unique."""
        label = Label(name=name, user_id=user_id)
        try:
            async with self._db.begin_nested():
                self._db.add(label)
            await self._db.refresh(label)
        except SQLAlchemyError:
            logger.exception("Failed to insert label")
            return DomainError("label", "error", "There was an error saving the label")
        return LabelRead.model_validate(label)

    async def update_label(self, label_id: UUID, fields: dict) -> LabelRead | DomainError:
        """Rename a label when `name` is in `fields`; always bumps updated_at."""
        try:
            async with self._db.begin_nested():
                label = await self._db.get(Label, label_id)
                if label is None:
                    return DomainError("label", "does-not-exist", "Label does not exist")
                if "name" in fields:
                    label.name = fields["name"]
                label.updated_at = func.clock_timestamp()
            await self._db.refresh(label)
        except SQLAlchemyError:
            logger.exception("Failed to update label %s", label_id)
            return DomainError("label", "error", "There was an error updating the label")
        return LabelRead.model_validate(label)

    async def delete_label(self, label_id: UUID) -> bool | DomainError:
        """Hard-delete a label; the database removes its bookmark join rows."""
        try:
            async with self._db.begin_nested():
                result = await self._db.execute(delete(Label).where(Label.id == label_id))
        except SQLAlchemyError:
            logger.exception("Failed to delete label %s", label_id)
            return DomainError("label", "error", "There was an error deleting the label")

        if result.rowcount == 0:
            return DomainError("label", "does-not-exist", "Label does not exist")
        if result.rowcount > 1:
            logger.error("Deleting label %s affected %d rows", label_id, result.rowcount)
            return DomainError("label", "error", "There was an error deleting the label")
        return True

    async def is_owner(self, *, label_id: UUID, user_id: UUID) -> bool | DomainError:
        """Return `does-not-exist` for an unknown id, otherwise whether `user_id` owns it."""
        try:
            result = await self._db.execute(select(Label.user_id).where(Label.id == label_id))
        except SQLAlchemyError:
            logger.exception("Failed to check owner of label %s", label_id)
            return DomainError("label", "error", "There was an error fetching the label")

        owner_id = result.scalar_one_or_none()
        if owner_id is None:
            return DomainError("label", "does-not-exist", "Label does not exist")
        return owner_id == user_id
