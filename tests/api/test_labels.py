"""Tests for label endpoints."""
from httpx import AsyncClient

from tests.api.conftest import FAKE_UUID


async def test__create_label__success(auth_client: AsyncClient) -> None:
    response = await auth_client.post("/labels", json={"name": "Work"})

    assert response.status_code == 200
    label = response.json()["label"]
    assert label["name"] == "Work"
    assert set(label) == {"id", "name", "user_id", "created_at", "updated_at"}


async def test__create_label__missing_name(auth_client: AsyncClient) -> None:
    response = await auth_client.post("/labels", json={})

    assert response.status_code == 400
    assert response.json()["error"]["type"] == "missing-name"


async def test__create_label__duplicate_names_allowed(auth_client: AsyncClient) -> None:
    first = await auth_client.post("/labels", json={"name": "Work"})
    second = await auth_client.post("/labels", json={"name": "Work"})

    assert first.status_code == second.status_code == 200
    assert first.json()["label"]["id"] != second.json()["label"]["id"]


async def test__get_labels__newest_first_and_only_own(
    auth_client: AsyncClient, other_client: AsyncClient,
) -> None:
    await auth_client.post("/labels", json={"name": "First"})
    await auth_client.post("/labels", json={"name": "Second"})
    await other_client.post("/labels", json={"name": "Theirs"})

    response = await auth_client.get("/labels")

    assert response.status_code == 200
    assert [label["name"] for label in response.json()["labels"]] == ["Second", "First"]


async def test__get_labels__requires_login(client: AsyncClient) -> None:
    response = await client.get("/labels")

    assert response.status_code == 400
    assert response.json()["error"]["type"] == "not-logged-in"


async def test__update_label__rename(auth_client: AsyncClient) -> None:
    label = (await auth_client.post("/labels", json={"name": "Old"})).json()["label"]

    response = await auth_client.put(f"/labels/{label['id']}", json={"name": "New"})

    assert response.status_code == 200
    assert response.json()["label"]["name"] == "New"


async def test__update_label__empty_name(auth_client: AsyncClient) -> None:
    label = (await auth_client.post("/labels", json={"name": "Old"})).json()["label"]

    response = await auth_client.put(f"/labels/{label['id']}", json={"name": ""})

    assert response.status_code == 400
    assert response.json()["error"]["type"] == "invalid-name"


async def test__update_label__foreign_forbidden(
    auth_client: AsyncClient, other_client: AsyncClient,
) -> None:
    theirs = (await other_client.post("/labels", json={"name": "Theirs"})).json()["label"]

    response = await auth_client.put(f"/labels/{theirs['id']}", json={"name": "Mine"})

    assert response.status_code == 403
    assert response.json()["error"]["type"] == "forbidden-access-to-label"


async def test__delete_label__removes_it_from_bookmarks(auth_client: AsyncClient) -> None:
    bookmark = (await auth_client.post("/bookmarks", json={"url": "https://a.example"})).json()[
        "bookmark"
    ]
    label = (await auth_client.post("/labels", json={"name": "Work"})).json()["label"]
    await auth_client.post(f"/bookmarks/{bookmark['id']}/labels/{label['id']}")

    response = await auth_client.delete(f"/labels/{label['id']}")

    assert response.status_code == 200
    assert (await auth_client.get("/labels")).json() == {"labels": []}
    [listed] = (await auth_client.get("/bookmarks")).json()["bookmarks"]
    assert listed["labels"] == []


async def test__delete_label__not_found(auth_client: AsyncClient) -> None:
    response = await auth_client.delete(f"/labels/{FAKE_UUID}")

    assert response.status_code == 404
    assert response.json()["error"]["type"] == "label-does-not-exist"
