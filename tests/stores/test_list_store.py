"""Tests for the list store and list membership."""
from uuid import uuid4

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import DomainError
from models.bookmark_list import ListBookmark
from models.user import User
from stores.bookmark_store import BookmarkStore
from stores.label_store import LabelStore
from stores.list_store import ListStore


async def test__create_list__with_and_without_description(
    db_session: AsyncSession, user: User,
) -> None:
    store = ListStore(db_session)

    described = await store.create_list(name="Reading", description="Later", user_id=user.id)
    plain = await store.create_list(name="Plain", user_id=user.id)

    assert described.description == "Later"
    assert plain.description is None
    assert [item.id for item in await store.get_lists(user.id)] == [plain.id, described.id]


async def test__update_list__partial_fields(db_session: AsyncSession, user: User) -> None:
    store = ListStore(db_session)
    created = await store.create_list(name="Reading", description="Later", user_id=user.id)

    updated = await store.update_list(created.id, {"description": None})

    assert updated.name == "Reading"
    assert updated.description is None
    assert updated.updated_at > created.updated_at


async def test__update_list__unknown_id_returns_does_not_exist(
    db_session: AsyncSession,
) -> None:
    result = await ListStore(db_session).update_list(uuid4(), {"name": "x"})

    assert isinstance(result, DomainError)
    assert result.type == "list-does-not-exist"


async def test__delete_list__cascades_membership_and_keeps_bookmarks(
    db_session: AsyncSession, user: User,
) -> None:
    store = ListStore(db_session)
    bookmarks = BookmarkStore(db_session)
    bookmark_list = await store.create_list(name="Reading", user_id=user.id)
    bookmark = await bookmarks.add_bookmark(url="https://a.example", user_id=user.id)
    await store.add_bookmark_to_list(list_id=bookmark_list.id, bookmark_id=bookmark.id)

    assert await store.delete_list(bookmark_list.id) is True

    rows = await db_session.scalar(
        select(func.count()).select_from(ListBookmark).where(
            ListBookmark.list_id == bookmark_list.id,
        ),
    )
    assert rows == 0
    assert len(await bookmarks.get_bookmarks(user.id)) == 1


@pytest.mark.parametrize("list_id", ["not-a-uuid", "1234", ""])
async def test__is_owner__malformed_id_returns_does_not_exist(
    db_session: AsyncSession, user: User, list_id: str,
) -> None:
    result = await ListStore(db_session).is_owner(list_id=list_id, user_id=user.id)

    assert isinstance(result, DomainError)
    assert result.type == "list-does-not-exist"


async def test__is_owner__distinguishes_missing_foreign_and_owned(
    db_session: AsyncSession, user: User, other_user: User,
) -> None:
    store = ListStore(db_session)
    bookmark_list = await store.create_list(name="Reading", user_id=user.id)

    missing = await store.is_owner(list_id=str(uuid4()), user_id=user.id)
    assert isinstance(missing, DomainError)
    assert missing.kind == "does-not-exist"

    assert await store.is_owner(list_id=str(bookmark_list.id), user_id=other_user.id) is False
    assert await store.is_owner(list_id=bookmark_list.id, user_id=user.id) is True


async def test__add_bookmark_to_list__twice_returns_already_has_bookmark(
    db_session: AsyncSession, user: User,
) -> None:
    store = ListStore(db_session)
    bookmark_list = await store.create_list(name="Reading", user_id=user.id)
    bookmark = await BookmarkStore(db_session).add_bookmark(url="https://a.example", user_id=user.id)

    assert await store.add_bookmark_to_list(
        list_id=bookmark_list.id, bookmark_id=bookmark.id,
    ) is True
    second = await store.add_bookmark_to_list(list_id=bookmark_list.id, bookmark_id=bookmark.id)

    assert isinstance(second, DomainError)
    assert second.type == "list-already-has-bookmark"


async def test__remove_bookmark_from_list__non_member_returns_does_not_have_bookmark(
    db_session: AsyncSession, user: User,
) -> None:
    store = ListStore(db_session)
    bookmark_list = await store.create_list(name="Reading", user_id=user.id)
    bookmark = await BookmarkStore(db_session).add_bookmark(url="https://a.example", user_id=user.id)

    result = await store.remove_bookmark_from_list(
        list_id=bookmark_list.id, bookmark_id=bookmark.id,
    )

    assert isinstance(result, DomainError)
    assert result.type == "list-does-not-have-bookmark"


async def test__get_bookmarks_in_list__members_in_insertion_order_with_labels(
    db_session: AsyncSession, user: User,
) -> None:
    store = ListStore(db_session)
    bookmarks = BookmarkStore(db_session)
    bookmark_list = await store.create_list(name="Reading", user_id=user.id)
    first = await bookmarks.add_bookmark(url="https://1.example", user_id=user.id)
    second = await bookmarks.add_bookmark(url="https://2.example", user_id=user.id)
    await bookmarks.add_bookmark(url="https://outside.example", user_id=user.id)
    label = await LabelStore(db_session).create_label(name="Work", user_id=user.id)
    await bookmarks.add_label_to_bookmark(bookmark_id=first.id, label_id=label.id)
    await store.add_bookmark_to_list(list_id=bookmark_list.id, bookmark_id=second.id)
    await store.add_bookmark_to_list(list_id=bookmark_list.id, bookmark_id=first.id)

    members = await store.get_bookmarks_in_list(bookmark_list.id)

    assert [m.id for m in members] == [second.id, first.id]
    assert members[0].labels == []
    assert [label.name for label in members[1].labels] == ["Work"]


async def test__remove_bookmark_from_list__removes_membership(
    db_session: AsyncSession, user: User,
) -> None:
    store = ListStore(db_session)
    bookmark_list = await store.create_list(name="Reading", user_id=user.id)
    bookmark = await BookmarkStore(db_session).add_bookmark(url="https://a.example", user_id=user.id)
    await store.add_bookmark_to_list(list_id=bookmark_list.id, bookmark_id=bookmark.id)

    assert await store.remove_bookmark_from_list(
        list_id=bookmark_list.id, bookmark_id=bookmark.id,
    ) is True
    assert await store.get_bookmarks_in_list(bookmark_list.id) == []
