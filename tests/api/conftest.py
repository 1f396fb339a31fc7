"""Shared fixtures for API tests."""
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from api.main import app

# Constant for non-existent entity ID
FAKE_UUID = "00000000-0000-0000-0000-000000000000"

PASSWORD = "correct-horse-battery"


async def signup(client: AsyncClient, email: str) -> dict:
    """Sign up (which also logs in) and return the created user."""
    response = await client.post("/signup", json={"email": email, "password": PASSWORD})
    assert response.status_code == 200, response.text
    return response.json()["user"]


@pytest.fixture
async def auth_client(client: AsyncClient) -> AsyncClient:
    """The `client` fixture, logged in as user@example.com."""
    await signup(client, "user@example.com")
    return client


@pytest.fixture
async def other_client(client: AsyncClient) -> AsyncGenerator[AsyncClient]:
    """
    A second, separately logged-in client.

    Depends on `client` so the dependency overrides are already in place; the
    two clients keep separate cookie jars.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as second_client:
        await signup(second_client, "other@example.com")
        yield second_client
