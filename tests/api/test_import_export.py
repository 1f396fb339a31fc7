"""Tests for export and import endpoints."""
from unittest.mock import patch

import pytest
from httpx import AsyncClient

from services.import_export_service import ImportExportService


async def _seed(client: AsyncClient) -> None:
    """One labelled bookmark that is also in a list."""
    bookmark = (await client.post("/bookmarks", json={"url": "https://a.example"})).json()[
        "bookmark"
    ]
    label = (await client.post("/labels", json={"name": "Work"})).json()["label"]
    reading = (await client.post("/lists", json={"name": "Reading"})).json()["list"]
    await client.post(f"/bookmarks/{bookmark['id']}/labels/{label['id']}")
    await client.post(f"/lists/{reading['id']}/bookmarks", json={"bookmarkId": bookmark["id"]})


async def test__export__attachment_with_full_graph(auth_client: AsyncClient) -> None:
    await _seed(auth_client)

    response = await auth_client.get("/export")

    assert response.status_code == 200
    assert response.headers["content-disposition"] == (
        "attachment; filename=bookmarks-export.json"
    )
    document = response.json()
    assert set(document) == {"bookmarks", "labels", "lists", "exportDate", "version"}
    [bookmark] = document["bookmarks"]
    [label] = document["labels"]
    [reading] = document["lists"]
    assert label["bookmarks"] == [{"id": bookmark["id"]}]
    assert reading["bookmarks"] == [{"id": bookmark["id"]}]


async def test__export__requires_login(client: AsyncClient) -> None:
    response = await client.get("/export")

    assert response.status_code == 400
    assert response.json()["error"]["type"] == "not-logged-in"


async def test__import__missing_version_creates_nothing(auth_client: AsyncClient) -> None:
    response = await auth_client.post(
        "/import", json={"labels": [{"id": "x", "name": "Work"}], "bookmarks": [], "lists": []},
    )

    assert response.status_code == 400
    assert response.json()["error"]["type"] == "invalid-import-format"
    assert (await auth_client.get("/labels")).json() == {"labels": []}


@pytest.mark.parametrize("version", [None, ""])
async def test__import__blank_version_creates_nothing(
    auth_client: AsyncClient, version: str | None,
) -> None:
    response = await auth_client.post(
        "/import",
        json={"version": version, "labels": [{"id": "x", "name": "Work"}]},
    )

    assert response.status_code == 400
    assert response.json()["error"]["type"] == "invalid-import-format"
    assert (await auth_client.get("/labels")).json() == {"labels": []}


async def test__import__non_object_body(auth_client: AsyncClient) -> None:
    response = await auth_client.post("/import", json=["not", "a", "document"])

    assert response.status_code == 400
    assert response.json()["error"]["type"] == "invalid-import-format"


async def test__import__rebuilds_graph_with_new_ids(auth_client: AsyncClient) -> None:
    document = {
        "version": "1.0",
        "bookmarks": [{"id": "old-b", "url": "https://imported.example", "title": "Imported"}],
        "labels": [{"id": "old-l", "name": "Work", "bookmarks": [{"id": "old-b"}]}],
        "lists": [{"id": "old-r", "name": "Reading", "bookmarks": [{"id": "old-b"}]}],
    }

    response = await auth_client.post("/import", json=document)

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "results": {
            "labels": {"created": 1, "errors": 0},
            "bookmarks": {"created": 1, "errors": 0},
            "lists": {"created": 1, "errors": 0},
            "bookmarkLabels": {"created": 1, "errors": 0},
            "listBookmarks": {"created": 1, "errors": 0},
        },
    }
    [bookmark] = (await auth_client.get("/bookmarks")).json()["bookmarks"]
    assert bookmark["id"] != "old-b"
    assert bookmark["title"] == "Imported"
    assert [label["name"] for label in bookmark["labels"]] == ["Work"]
    [reading] = (await auth_client.get("/lists")).json()["lists"]
    members = (await auth_client.get(f"/lists/{reading['id']}")).json()["bookmarks"]
    assert [b["id"] for b in members] == [bookmark["id"]]


async def test__import__another_users_export_collides_on_urls(
    auth_client: AsyncClient, other_client: AsyncClient,
) -> None:
    await _seed(auth_client)
    exported = (await auth_client.get("/export")).json()

    response = await other_client.post("/import", json=exported)

    assert response.status_code == 200
    results = response.json()["results"]
    assert results["bookmarks"] == {"created": 0, "errors": 1}
    assert results["labels"] == {"created": 1, "errors": 0}
    assert results["lists"] == {"created": 1, "errors": 0}
    # Relations pointing at the bookmark that was not created are skipped
    assert results["bookmarkLabels"] == {"created": 0, "errors": 0}
    assert results["listBookmarks"] == {"created": 0, "errors": 0}


async def test__import__unexpected_failure_is_import_error(auth_client: AsyncClient) -> None:
    with patch.object(
        ImportExportService, "import_user_data", side_effect=RuntimeError("boom"),
    ):
        response = await auth_client.post("/import", json={"version": "1.0"})

    assert response.status_code == 500
    assert response.json()["error"]["type"] == "import-error"


async def test__import__failure_keeps_items_created_before_it(auth_client: AsyncClient) -> None:
    document = {
        "version": "1.0",
        "bookmarks": [{"id": "old-b", "url": "https://kept.example"}],
        "labels": [{"id": "old-l", "name": "Work"}],
        "lists": [{"id": "old-r", "name": "Reading"}],
    }
    with patch.object(
        ImportExportService, "_import_lists", side_effect=RuntimeError("boom"),
    ):
        response = await auth_client.post("/import", json=document)

    assert response.status_code == 500
    assert response.json()["error"]["type"] == "import-error"
    labels = (await auth_client.get("/labels")).json()["labels"]
    assert [label["name"] for label in labels] == ["Work"]
    bookmarks = (await auth_client.get("/bookmarks")).json()["bookmarks"]
    assert [bookmark["url"] for bookmark in bookmarks] == ["https://kept.example"]
    assert (await auth_client.get("/lists")).json()["lists"] == []
