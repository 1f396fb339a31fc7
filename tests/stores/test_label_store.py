"""Tests for the label store."""
from uuid import uuid4

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import DomainError
from models.label import BookmarkLabel
from models.user import User
from stores.bookmark_store import BookmarkStore
from stores.label_store import LabelStore


async def test__create_label__names_may_repeat(db_session: AsyncSession, user: User) -> None:
    store = LabelStore(db_session)

    first = await store.create_label(name="Work", user_id=user.id)
    second = await store.create_label(name="Work", user_id=user.id)

    assert first.id != second.id
    assert [label.name for label in await store.get_labels(user.id)] == ["Work", "Work"]


async def test__get_labels__only_owned_newest_first(
    db_session: AsyncSession, user: User, other_user: User,
) -> None:
    store = LabelStore(db_session)
    older = await store.create_label(name="Older", user_id=user.id)
    newer = await store.create_label(name="Newer", user_id=user.id)
    await store.create_label(name="Theirs", user_id=other_user.id)

    labels = await store.get_labels(user.id)

    assert [label.id for label in labels] == [newer.id, older.id]


async def test__update_label__renames_and_bumps_updated_at(
    db_session: AsyncSession, user: User,
) -> None:
    store = LabelStore(db_session)
    label = await store.create_label(name="Wrok", user_id=user.id)

    updated = await store.update_label(label.id, {"name": "Work"})

    assert updated.name == "Work"
    assert updated.updated_at > label.updated_at


async def test__update_label__unknown_id_returns_does_not_exist(
    db_session: AsyncSession,
) -> None:
    result = await LabelStore(db_session).update_label(uuid4(), {"name": "x"})

    assert isinstance(result, DomainError)
    assert result.type == "label-does-not-exist"


async def test__delete_label__removes_join_rows(db_session: AsyncSession, user: User) -> None:
    store = LabelStore(db_session)
    bookmarks = BookmarkStore(db_session)
    bookmark = await bookmarks.add_bookmark(url="https://a.example", user_id=user.id)
    label = await store.create_label(name="Work", user_id=user.id)
    await bookmarks.add_label_to_bookmark(bookmark_id=bookmark.id, label_id=label.id)

    assert await store.delete_label(label.id) is True

    rows = await db_session.scalar(
        select(func.count()).select_from(BookmarkLabel).where(BookmarkLabel.label_id == label.id),
    )
    assert rows == 0
    assert (await bookmarks.get_bookmarks(user.id))[0].labels == []


async def test__delete_label__unknown_id_returns_does_not_exist(
    db_session: AsyncSession,
) -> None:
    result = await LabelStore(db_session).delete_label(uuid4())

    assert isinstance(result, DomainError)
    assert result.kind == "does-not-exist"


async def test__is_owner__distinguishes_missing_foreign_and_owned(
    db_session: AsyncSession, user: User, other_user: User,
) -> None:
    store = LabelStore(db_session)
    label = await store.create_label(name="Work", user_id=user.id)

    missing = await store.is_owner(label_id=uuid4(), user_id=user.id)
    assert isinstance(missing, DomainError)
    assert missing.type == "label-does-not-exist"

    assert await store.is_owner(label_id=label.id, user_id=other_user.id) is False
    assert await store.is_owner(label_id=label.id, user_id=user.id) is True
