"""
Store layer for bookmarks and the bookmark/label join table.

Methods return either their success payload or a DomainError. Writes run in a
SAVEPOINT so a translated constraint violation only rolls back the statement
that caused it; the request session stays usable.
"""
import logging
from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import Row, Select, delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import DomainError
from models.bookmark import Bookmark
from models.label import BookmarkLabel, Label
from schemas.bookmark import BookmarkRead, LabelRef

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("url", "title", "thumbnail")


def bookmarks_with_labels_query() -> Select:
    """
    Select bookmark columns left-joined to their labels, one row per (bookmark, label).

    Bookmarks without labels appear once with NULL label columns. Callers add
    their own WHERE clause and feed the rows to `group_bookmark_rows`.
    """
    return (
        select(
            Bookmark.id,
            Bookmark.url,
            Bookmark.title,
            Bookmark.thumbnail,
            Bookmark.user_id,
            Bookmark.created_at,
            Bookmark.updated_at,
            Label.id.label("label_id"),
            Label.name.label("label_name"),
        )
        .select_from(Bookmark)
        .outerjoin(BookmarkLabel, BookmarkLabel.bookmark_id == Bookmark.id)
        .outerjoin(Label, Label.id == BookmarkLabel.label_id)
    )


def group_bookmark_rows(rows: Iterable[Row]) -> list[BookmarkRead]:
    """Fold joined rows into bookmarks carrying their label projections, keeping row order."""
    grouped: dict[UUID, BookmarkRead] = {}
    for row in rows:
        bookmark = grouped.get(row.id)
        if bookmark is None:
            bookmark = BookmarkRead(
                id=row.id,
                url=row.url,
                title=row.title,
                thumbnail=row.thumbnail,
                user_id=row.user_id,
                created_at=row.created_at,
                updated_at=row.updated_at,
                labels=[],
            )
            grouped[row.id] = bookmark
        if row.label_id is not None:
            bookmark.labels.append(LabelRef(id=row.label_id, name=row.label_name))
    return list(grouped.values())


class BookmarkStore:
    """Bookmark persistence bound to one session."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def get_bookmarks(
        self,
        user_id: UUID,
        label_id: UUID | None = None,
    ) -> list[BookmarkRead] | DomainError:
        """
        Get a user's bookmarks, newest first, each with its labels.

        All bookmarks are fetched in one joined query; when `label_id` is given
        the grouped result is filtered to bookmarks carrying that label.
        """
        query = (
            bookmarks_with_labels_query()
            .where(Bookmark.user_id == user_id)
            .order_by(Bookmark.created_at.desc(), Bookmark.id, Label.created_at)
        )
        try:
            result = await self._db.execute(query)
        except SQLAlchemyError:
            logger.exception("Failed to fetch bookmarks for user %s", user_id)
            return DomainError("bookmark", "error", "There was an error fetching bookmarks")

        bookmarks = group_bookmark_rows(result.all())
        if label_id is not None:
            bookmarks = [
                b for b in bookmarks if any(label.id == label_id for label in b.labels)
            ]
        return bookmarks

    async def add_bookmark(
        self,
        *,
        url: str,
        user_id: UUID,
        title: str | None = None,
        thumbnail: str | None = None,
    ) -> BookmarkRead | DomainError:
        """
        Insert a bookmark.

        Returns an `already-exists` error when the URL is already bookmarked by
        anyone; URLs are unique across all users.
        """
        bookmark = Bookmark(url=url, title=title, thumbnail=thumbnail, user_id=user_id)
        try:
            async with self._db.begin_nested():
                self._db.add(bookmark)
            await self._db.refresh(bookmark)
        except IntegrityError as e:
            if "uq_bookmarks_url" in str(e):
                logger.debug("Bookmark URL already exists: %s", url)
                return DomainError("bookmark", "already-exists", "A bookmark with this URL already exists")
            logger.exception("Failed to insert bookmark")
            return DomainError("bookmark", "error", "There was an error saving the bookmark")
        except SQLAlchemyError:
            logger.exception("Failed to insert bookmark")
            return DomainError("bookmark", "error", "There was an error saving the bookmark")
        return BookmarkRead.model_validate(bookmark)

    async def update_bookmark(
        self,
        bookmark_id: UUID,
        fields: dict,
    ) -> BookmarkRead | DomainError:
        """
        Apply a partial update. Only keys present in `fields` are written.

        `updated_at` is bumped even when `fields` is empty.
        """
        try:
            async with self._db.begin_nested():
                bookmark = await self._db.get(Bookmark, bookmark_id)
                if bookmark is None:
                    return DomainError("bookmark", "does-not-exist", "Bookmark does not exist")
                for field in UPDATABLE_FIELDS:
                    if field in fields:
                        setattr(bookmark, field, fields[field])
                bookmark.updated_at = func.clock_timestamp()
            await self._db.refresh(bookmark)
        except IntegrityError as e:
            if "uq_bookmarks_url" in str(e):
                return DomainError("bookmark", "already-exists", "A bookmark with this URL already exists")
            logger.exception("Failed to update bookmark %s", bookmark_id)
            return DomainError("bookmark", "error", "There was an error updating the bookmark")
        except SQLAlchemyError:
            logger.exception("Failed to update bookmark %s", bookmark_id)
            return DomainError("bookmark", "error", "There was an error updating the bookmark")
        return BookmarkRead.model_validate(bookmark)

    async def delete_bookmark(self, bookmark_id: UUID) -> bool | DomainError:
        """
        Hard-delete a bookmark. Its list memberships go with it; its label rows stay.
        """
        try:
            async with self._db.begin_nested():
                result = await self._db.execute(
                    delete(Bookmark).where(Bookmark.id == bookmark_id),
                )
        except SQLAlchemyError:
            logger.exception("Failed to delete bookmark %s", bookmark_id)
            return DomainError("bookmark", "error", "There was an error deleting the bookmark")

        if result.rowcount == 0:
            return DomainError("bookmark", "does-not-exist", "Bookmark does not exist")
        if result.rowcount > 1:
            logger.error("Deleting bookmark %s affected %d rows", bookmark_id, result.rowcount)
            return DomainError("bookmark", "error", "There was an error deleting the bookmark")
        return True

    async def add_label_to_bookmark(
        self,
        *,
        bookmark_id: UUID,
        label_id: UUID,
    ) -> bool | DomainError:
        """Attach a label. A repeated attach returns `already-has-label`."""
        try:
            async with self._db.begin_nested():
                self._db.add(BookmarkLabel(bookmark_id=bookmark_id, label_id=label_id))
        except IntegrityError as e:
            if "uq_labels_bookmarks_bookmark_id_label_id" in str(e):
                return DomainError(
                    "bookmark", "already-has-label", "Bookmark already has this label",
                )
            logger.exception("Failed to add label %s to bookmark %s", label_id, bookmark_id)
            return DomainError("bookmark", "label-error", "There was an error adding the label")
        except SQLAlchemyError:
            logger.exception("Failed to add label %s to bookmark %s", label_id, bookmark_id)
            return DomainError("bookmark", "label-error", "There was an error adding the label")
        return True

    async def remove_label_from_bookmark(
        self,
        *,
        bookmark_id: UUID,
        label_id: UUID,
    ) -> bool | DomainError:
        """Detach a label. Returns `does-not-have-label` when nothing was attached."""
        try:
            async with self._db.begin_nested():
                result = await self._db.execute(
                    delete(BookmarkLabel).where(
                        BookmarkLabel.bookmark_id == bookmark_id,
                        BookmarkLabel.label_id == label_id,
                    ),
                )
        except SQLAlchemyError:
            logger.exception("Failed to remove label %s from bookmark %s", label_id, bookmark_id)
            return DomainError("bookmark", "label-error", "There was an error removing the label")

        if result.rowcount == 0:
            return DomainError(
                "bookmark", "does-not-have-label", "Bookmark does not have this label",
            )
        return True

    async def is_owner(self, *, bookmark_id: UUID, user_id: UUID) -> bool | DomainError:
        """
        Check ownership.

        Returns `does-not-exist` when no bookmark has this id, otherwise whether
        `user_id` owns it.
        """
        try:
            result = await self._db.execute(
                select(Bookmark.user_id).where(Bookmark.id == bookmark_id),
            )
        except SQLAlchemyError:
            logger.exception("Failed to check owner of bookmark %s", bookmark_id)
            return DomainError("bookmark", "error", "There was an error fetching the bookmark")

        owner_id = result.scalar_one_or_none()
        if owner_id is None:
            return DomainError("bookmark", "does-not-exist", "Bookmark does not exist")
        return owner_id == user_id
