"""Tests for the user store."""
from uuid import uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import DomainError
from stores.user_store import UserStore


async def test__signup__duplicate_email_returns_already_exists(db_session: AsyncSession) -> None:
    store = UserStore(db_session)
    await store.signup(email="a@example.com", hashed_password="h", salt="s")

    result = await store.signup(email="a@example.com", hashed_password="h2", salt="s2")

    assert isinstance(result, DomainError)
    assert result.type == "user-already-exists"


async def test__get_user_by_email__found_and_missing(db_session: AsyncSession) -> None:
    store = UserStore(db_session)
    created = await store.signup(email="a@example.com", hashed_password="h", salt="s")

    found = await store.get_user_by_email("a@example.com")
    missing = await store.get_user_by_email("b@example.com")

    assert found.id == created.id
    assert isinstance(missing, DomainError)
    assert missing.kind == "does-not-exist"


async def test__get_user_by_id__unknown_returns_does_not_exist(db_session: AsyncSession) -> None:
    result = await UserStore(db_session).get_user_by_id(uuid4())

    assert isinstance(result, DomainError)
    assert result.type == "user-does-not-exist"
