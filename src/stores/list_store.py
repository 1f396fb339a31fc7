"""Store layer for lists and list membership."""
import logging
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import DomainError
from models.bookmark import Bookmark
from models.bookmark_list import BookmarkList, ListBookmark
from models.label import Label
from schemas.bookmark import BookmarkRead
from schemas.bookmark_list import ListRead
from schemas.validators import parse_uuid
from stores.bookmark_store import bookmarks_with_labels_query, group_bookmark_rows

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "description")


class ListStore:
    """List persistence bound to one session."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def get_lists(self, user_id: UUID) -> list[ListRead] | DomainError:
        """Get a user's lists, newest first."""
        try:
            result = await self._db.execute(
                select(BookmarkList)
                .where(BookmarkList.user_id == user_id)
                .order_by(BookmarkList.created_at.desc(), BookmarkList.id),
            )
        except SQLAlchemyError:
            logger.exception("Failed to fetch lists for user %s", user_id)
            return DomainError("list", "error", "There was an error fetching lists")
        return [ListRead.model_validate(item) for item in result.scalars().all()]

    async def create_list(
        self,
        *,
        name: str,
        user_id: UUID,
        description: str | None = None,
    ) -> ListRead | DomainError:
        """Insert a list."""
        bookmark_list = BookmarkList(name=name, description=description, user_id=user_id)
        try:
            async with self._db.begin_nested():
                self._db.add(bookmark_list)
            await self._db.refresh(bookmark_list)
        except SQLAlchemyError:
            logger.exception("Failed to insert list")
            return DomainError("list", "error", "There was an error saving the list")
        return ListRead.model_validate(bookmark_list)

    async def update_list(self, list_id: UUID, fields: dict) -> ListRead | DomainError:
        """Apply a partial update of name/description; always bumps updated_at."""
        try:
            async with self._db.begin_nested():
                bookmark_list = await self._db.get(BookmarkList, list_id)
                if bookmark_list is None:
                    return DomainError("list", "does-not-exist", "List does not exist")
                for field in UPDATABLE_FIELDS:
                    if field in fields:
                        setattr(bookmark_list, field, fields[field])
                bookmark_list.updated_at = func.clock_timestamp()
            await self._db.refresh(bookmark_list)
        except SQLAlchemyError:
            logger.exception("Failed to update list %s", list_id)
            return DomainError("list", "error", "There was an error updating the list")
        return ListRead.model_validate(bookmark_list)

    async def delete_list(self, list_id: UUID) -> bool | DomainError:
        """Hard-delete a list; its membership rows cascade."""
        try:
            async with self._db.begin_nested():
                result = await self._db.execute(
                    delete(BookmarkList).where(BookmarkList.id == list_id),
                )
        except SQLAlchemyError:
            logger.exception("Failed to delete list %s", list_id)
            return DomainError("list", "error", "There was an error deleting the list")

        if result.rowcount == 0:
            return DomainError("list", "does-not-exist", "List does not exist")
        if result.rowcount > 1:
            logger.error("Deleting list %s affected %d rows", list_id, result.rowcount)
            return DomainError("list", "error", "There was an error deleting the list")
        return True

    async def is_owner(self, *, list_id: UUID | str, user_id: UUID) -> bool | DomainError:
        """
        Check ownership.

        `list_id` may arrive as a raw path segment; anything that is not a
        well-formed UUID is reported as `does-not-exist` without querying.
        """
        parsed_id = parse_uuid(list_id)
        if parsed_id is None:
            return DomainError("list", "does-not-exist", "List does not exist")
        try:
            result = await self._db.execute(
                select(BookmarkList.user_id).where(BookmarkList.id == parsed_id),
            )
        except SQLAlchemyError:
            logger.exception("Failed to check owner of list %s", parsed_id)
            return DomainError("list", "error", "There was an error fetching the list")

        owner_id = result.scalar_one_or_none()
        if owner_id is None:
            return DomainError("list", "does-not-exist", "List does not exist")
        return owner_id == user_id

    async def add_bookmark_to_list(
        self,
        *,
        list_id: UUID,
        bookmark_id: UUID,
    ) -> bool | DomainError:
        """Add a bookmark to a list. A repeated add returns `already-has-bookmark`."""
        try:
            async with self._db.begin_nested():
                self._db.add(ListBookmark(list_id=list_id, bookmark_id=bookmark_id))
        except IntegrityError as e:
            if "uq_lists_bookmarks_list_id_bookmark_id" in str(e):
                return DomainError(
                    "list", "already-has-bookmark", "List already has this bookmark",
                )
            logger.exception("Failed to add bookmark %s to list %s", bookmark_id, list_id)
            return DomainError("list", "error", "There was an error adding the bookmark")
        except SQLAlchemyError:
            logger.exception("Failed to add bookmark %s to list %s", bookmark_id, list_id)
            return DomainError("list", "error", "There was an error adding the bookmark")
        return True

    async def remove_bookmark_from_list(
        self,
        *,
        list_id: UUID,
        bookmark_id: UUID,
    ) -> bool | DomainError:
        """Remove a bookmark from a list. Returns `does-not-have-bookmark` for non-members."""
        try:
            async with self._db.begin_nested():
                result = await self._db.execute(
                    delete(ListBookmark).where(
                        ListBookmark.list_id == list_id,
                        ListBookmark.bookmark_id == bookmark_id,
                    ),
                )
        except SQLAlchemyError:
            logger.exception("Failed to remove bookmark %s from list %s", bookmark_id, list_id)
            return DomainError("list", "error", "There was an error removing the bookmark")

        if result.rowcount == 0:
            return DomainError(
                "list", "does-not-have-bookmark", "List does not have this bookmark",
            )
        return True

    async def get_bookmarks_in_list(self, list_id: UUID) -> list[BookmarkRead] | DomainError:
        """Get a list's bookmarks in the order they were added, each with its labels."""
        query = (
            bookmarks_with_labels_query()
            .join(ListBookmark, ListBookmark.bookmark_id == Bookmark.id)
            .where(ListBookmark.list_id == list_id)
            .order_by(ListBookmark.created_at, Bookmark.id, Label.created_at)
        )
        try:
            result = await self._db.execute(query)
        except SQLAlchemyError:
            logger.exception("Failed to fetch bookmarks in list %s", list_id)
            return DomainError("list", "error", "There was an error fetching the list")
        return group_bookmark_rows(result.all())
