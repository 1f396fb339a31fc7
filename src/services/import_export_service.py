"""
Export a user's whole graph to a portable document and rebuild it from one.

Import is best-effort and non-atomic: items are created one at a time, each
in its own savepoint, and a failed item only bumps that category's error
counter. Nothing already created is rolled back when a later item fails,
and the caller commits whatever was created even if the import aborts.

An export never fails because one list's membership could not be read;
that list is exported without bookmarks.
"""
import logging
from collections import defaultdict
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from core.errors import DomainError
from schemas.import_export import (
    BookmarkRef,
    ExportDocument,
    ExportedBookmark,
    ExportedLabel,
    ExportedList,
    ImportResults,
)
from services.bookmark_service import BookmarkService
from services.label_service import LabelService
from services.list_service import ListService

logger = logging.getLogger(__name__)


def _collection(document: dict, key: str) -> list:
    """Return document[key] when it is a list, otherwise an empty list."""
    value = document.get(key)
    return value if isinstance(value, list) else []


def _references(item: dict) -> list:
    """Return the old ids listed under item["bookmarks"], skipping malformed entries."""
    refs = item.get("bookmarks")
    if not isinstance(refs, list):
        return []
    return [ref["id"] for ref in refs if isinstance(ref, dict) and ref.get("id") is not None]


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


class ImportExportService:
    """Orchestrates the bookmark, label and list services for export and import."""

    def __init__(
        self,
        bookmarks: BookmarkService,
        labels: LabelService,
        lists: ListService,
    ) -> None:
        self._bookmarks = bookmarks
        self._labels = labels
        self._lists = lists

    async def export_user_data(self, user_id: UUID) -> ExportDocument | DomainError:
        """
        Build the export document for a user.

        Label membership is derived from the bookmarks' embedded labels rather
        than queried again, and appears only on the labels collection.
        """
        bookmarks = await self._bookmarks.get_bookmarks(user_id)
        if isinstance(bookmarks, DomainError):
            return bookmarks
        labels = await self._labels.get_labels(user_id)
        if isinstance(labels, DomainError):
            return labels
        lists = await self._lists.get_lists(user_id)
        if isinstance(lists, DomainError):
            return lists

        exported_lists = []
        for bookmark_list in lists:
            members = await self._lists.get_bookmarks_in_list(bookmark_list.id)
            if isinstance(members, DomainError):
                logger.error(
                    "Exporting list %s without bookmarks: %s", bookmark_list.id, members.message,
                )
                members = []
            exported_lists.append(
                ExportedList(
                    **bookmark_list.model_dump(exclude={"user_id"}),
                    bookmarks=[BookmarkRef(id=member.id) for member in members],
                ),
            )

        bookmarks_by_label: dict[UUID, list[BookmarkRef]] = defaultdict(list)
        for bookmark in bookmarks:
            for label in bookmark.labels:
                bookmarks_by_label[label.id].append(BookmarkRef(id=bookmark.id))

        return ExportDocument(
            bookmarks=[
                ExportedBookmark(**bookmark.model_dump(exclude={"user_id", "labels"}))
                for bookmark in bookmarks
            ],
            labels=[
                ExportedLabel(
                    **label.model_dump(exclude={"user_id"}),
                    bookmarks=bookmarks_by_label.get(label.id, []),
                )
                for label in labels
            ],
            lists=exported_lists,
            export_date=datetime.now(UTC),
        )

    async def import_user_data(self, user_id: UUID, document: dict) -> ImportResults:
        """
        Recreate a document's graph under `user_id`.

        Runs labels, bookmarks, label attachments, then lists with their
        members, remapping old ids to the ids created earlier in the run.
        Relations whose label, list or bookmark was not created are skipped
        without counting as errors. The caller validates `version`.
        """
        results = ImportResults()
        label_ids = await self._import_labels(user_id, document, results)
        bookmark_ids = await self._import_bookmarks(user_id, document, results)
        await self._import_bookmark_labels(document, label_ids, bookmark_ids, results)
        await self._import_lists(user_id, document, bookmark_ids, results)
        logger.info(
            "Import for user %s finished: %s",
            user_id,
            results.model_dump(by_alias=True),
        )
        return results

    async def _import_labels(
        self,
        user_id: UUID,
        document: dict,
        results: ImportResults,
    ) -> dict[str, UUID]:
        label_ids: dict[str, UUID] = {}
        for item in _collection(document, "labels"):
            name = item.get("name") if isinstance(item, dict) else None
            if not isinstance(name, str) or not name:
                results.labels.errors += 1
                continue
            created = await self._labels.create_label(name=name, user_id=user_id)
            if isinstance(created, DomainError):
                results.labels.errors += 1
                continue
            results.labels.created += 1
            if item.get("id") is not None:
                label_ids[str(item["id"])] = created.id
        return label_ids

    async def _import_bookmarks(
        self,
        user_id: UUID,
        document: dict,
        results: ImportResults,
    ) -> dict[str, UUID]:
        bookmark_ids: dict[str, UUID] = {}
        for item in _collection(document, "bookmarks"):
            url = item.get("url") if isinstance(item, dict) else None
            if not isinstance(url, str) or not url:
                results.bookmarks.errors += 1
                continue
            # A URL bookmarked by anyone else fails here and drops out of later steps
            created = await self._bookmarks.add_bookmark(
                url=url,
                user_id=user_id,
                title=_optional_str(item.get("title")),
                thumbnail=_optional_str(item.get("thumbnail")),
            )
            if isinstance(created, DomainError):
                results.bookmarks.errors += 1
                continue
            results.bookmarks.created += 1
            if item.get("id") is not None:
                bookmark_ids[str(item["id"])] = created.id
        return bookmark_ids

    async def _import_bookmark_labels(
        self,
        document: dict,
        label_ids: dict[str, UUID],
        bookmark_ids: dict[str, UUID],
        results: ImportResults,
    ) -> None:
        for item in _collection(document, "labels"):
            if not isinstance(item, dict):
                continue
            label_id = label_ids.get(str(item.get("id")))
            if label_id is None:
                continue
            for old_bookmark_id in _references(item):
                bookmark_id = bookmark_ids.get(str(old_bookmark_id))
                if bookmark_id is None:
                    continue
                attached = await self._bookmarks.add_label_to_bookmark(
                    bookmark_id=bookmark_id, label_id=label_id,
                )
                if isinstance(attached, DomainError):
                    results.bookmark_labels.errors += 1
                else:
                    results.bookmark_labels.created += 1

    async def _import_lists(
        self,
        user_id: UUID,
        document: dict,
        bookmark_ids: dict[str, UUID],
        results: ImportResults,
    ) -> None:
        for item in _collection(document, "lists"):
            name = item.get("name") if isinstance(item, dict) else None
            if not isinstance(name, str) or not name:
                results.lists.errors += 1
                continue
            created = await self._lists.create_list(
                name=name,
                user_id=user_id,
                description=_optional_str(item.get("description")),
            )
            if isinstance(created, DomainError):
                results.lists.errors += 1
                continue
            results.lists.created += 1

            for old_bookmark_id in _references(item):
                bookmark_id = bookmark_ids.get(str(old_bookmark_id))
                if bookmark_id is None:
                    continue
                added = await self._lists.add_bookmark_to_list(
                    list_id=created.id, bookmark_id=bookmark_id,
                )
                if isinstance(added, DomainError):
                    results.list_bookmarks.errors += 1
                else:
                    results.list_bookmarks.created += 1
