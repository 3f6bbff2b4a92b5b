"""Integration tests for the blogs API.

Tests:
    - Create, read, update, delete round trip
    - Auth gate on mutating endpoints
    - Listing: paging, sorting, publicOnly, search
"""

import re

import pytest

from blogapi.pagination import MAX_PAGE

pytestmark = pytest.mark.integration


async def create_post(client, headers, **fields):
    body = {"title": "Hello World", "content": "x", **fields}
    response = await client.post("/api/blogs", json=body, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


class TestCreateAndRead:
    """Tests for POST /api/blogs and the two GET-one endpoints."""

    async def test_create_then_fetch_by_slug(self, client, auth_headers):
        created = await create_post(client, auth_headers)

        assert created["slug"] == "hello-world"
        assert created["published"] is False
        assert created["created_at"]
        assert created["updated_at"]

        response = await client.get("/api/blogs/hello-world")
        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

    async def test_fetch_by_id(self, client, auth_headers):
        created = await create_post(client, auth_headers)

        response = await client.get(f"/api/blogs/id/{created['id']}")

        assert response.status_code == 200
        assert response.json()["slug"] == "hello-world"

    async def test_duplicate_title_gets_suffixed_slug(self, client, auth_headers):
        await create_post(client, auth_headers)
        second = await create_post(client, auth_headers)

        assert re.match(r"^hello-world-\d+$", second["slug"])

    async def test_camel_case_cover_image_and_tag_list(self, client, auth_headers):
        created = await create_post(
            client,
            auth_headers,
            coverImage="/uploads/abc.png",
            tags=["python", " fastapi "],
        )

        assert created["cover_image"] == "/uploads/abc.png"
        assert created["tags"] == "python,fastapi"

    async def test_blank_title_rejected(self, client, auth_headers):
        response = await client.post(
            "/api/blogs", json={"title": " ", "content": "x"}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Title is required"

    async def test_oversized_tags_rejected(self, client, auth_headers):
        response = await client.post(
            "/api/blogs",
            json={"title": "t", "content": "c", "tags": "a" * 513},
            headers=auth_headers,
        )

        assert response.status_code == 422
        assert response.json()["error"] == "Request validation failed"

    async def test_unknown_slug_is_404(self, client):
        response = await client.get("/api/blogs/no-such-post")

        assert response.status_code == 404
        assert "no-such-post" in response.json()["error"]

    async def test_unknown_id_is_404(self, client):
        response = await client.get("/api/blogs/id/9999")
        assert response.status_code == 404


class TestAuthGate:
    """Mutating endpoints need a valid admin token."""

    async def test_create_without_token(self, client):
        response = await client.post("/api/blogs", json={"title": "t", "content": "c"})
        assert response.status_code == 401

    async def test_create_with_tampered_token(self, client, admin_token):
        header, payload, signature = admin_token.split(".")
        middle = len(signature) // 2
        flipped = "A" if signature[middle] != "A" else "B"
        tampered = ".".join([header, payload, signature[:middle] + flipped + signature[middle + 1:]])

        response = await client.post(
            "/api/blogs",
            json={"title": "t", "content": "c"},
            headers={"Authorization": f"Bearer {tampered}"},
        )

        assert response.status_code == 401

    async def test_update_and_delete_without_token(self, client, auth_headers):
        created = await create_post(client, auth_headers)

        put = await client.put(f"/api/blogs/{created['id']}", json={"title": "t", "content": "c"})
        delete = await client.delete(f"/api/blogs/{created['id']}")

        assert put.status_code == 401
        assert delete.status_code == 401

    async def test_reads_are_public(self, client, auth_headers):
        await create_post(client, auth_headers)

        assert (await client.get("/api/blogs")).status_code == 200
        assert (await client.get("/api/blogs/hello-world")).status_code == 200


class TestUpdateAndDelete:
    """Tests for PUT and DELETE /api/blogs/{id}."""

    async def test_update_keeps_slug(self, client, auth_headers):
        created = await create_post(client, auth_headers, tags="a", published=True)

        response = await client.put(
            f"/api/blogs/{created['id']}",
            json={"title": "Renamed", "content": "new body"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["slug"] == "hello-world"
        assert data["title"] == "Renamed"
        assert data["content"] == "new body"
        # omitted optional fields are cleared
        assert data["tags"] is None
        assert data["published"] is False

    async def test_update_missing_post(self, client, auth_headers):
        response = await client.put(
            "/api/blogs/9999", json={"title": "t", "content": "c"}, headers=auth_headers
        )
        assert response.status_code == 404

    async def test_delete(self, client, auth_headers):
        created = await create_post(client, auth_headers)

        response = await client.delete(f"/api/blogs/{created['id']}", headers=auth_headers)

        assert response.status_code == 204
        assert response.content == b""
        assert (await client.get("/api/blogs/hello-world")).status_code == 404

    async def test_delete_missing_post(self, client, auth_headers):
        response = await client.delete("/api/blogs/9999", headers=auth_headers)
        assert response.status_code == 404


class TestListing:
    """Tests for GET /api/blogs."""

    @pytest.fixture
    async def posts(self, client, auth_headers):
        await create_post(client, auth_headers, title="The Art of Clean Code", tags="coding,clean-code", published=True)
        await create_post(client, auth_headers, title="Why I Love Framer Motion", tags="frontend,react", published=True)
        await create_post(client, auth_headers, title="Draft Notes", tags="misc")

    async def test_defaults(self, client, posts):
        response = await client.get("/api/blogs")

        data = response.json()
        assert data["total"] == 3
        assert data["page"] == 0
        assert data["size"] == 10
        assert data["total_pages"] == 1
        assert data["has_next"] is False
        assert data["items"][0]["title"] == "Draft Notes"

    async def test_public_only(self, client, posts):
        response = await client.get("/api/blogs", params={"publicOnly": "true"})

        items = response.json()["items"]
        assert len(items) == 2
        assert all(item["published"] for item in items)

    async def test_search(self, client, posts):
        response = await client.get("/api/blogs", params={"search": "clean"})

        assert [p["title"] for p in response.json()["items"]] == ["The Art of Clean Code"]

    async def test_search_takes_precedence_over_public_only(self, client, posts):
        response = await client.get("/api/blogs", params={"search": "draft", "publicOnly": "true"})

        assert [p["title"] for p in response.json()["items"]] == ["Draft Notes"]

    async def test_sort_ascending_by_title(self, client, posts):
        response = await client.get("/api/blogs", params={"sort": "title,asc"})

        titles = [p["title"] for p in response.json()["items"]]
        assert titles == sorted(titles)

    async def test_paging(self, client, posts):
        response = await client.get("/api/blogs", params={"page": 1, "size": 2})

        data = response.json()
        assert len(data["items"]) == 1
        assert data["total_pages"] == 2
        assert data["has_next"] is False

    async def test_out_of_range_values_are_clamped(self, client, posts):
        response = await client.get("/api/blogs", params={"page": -1, "size": 1000, "sort": "bogus,sideways"})

        assert response.status_code == 200
        data = response.json()
        assert data["page"] == 0
        assert data["size"] == 100
        assert data["total"] == 3

    async def test_huge_page_returns_empty_page(self, client, posts):
        response = await client.get("/api/blogs", params={"page": 10**18, "size": 100})

        assert response.status_code == 200
        data = response.json()
        assert data["items"] == []
        assert data["page"] == MAX_PAGE
        assert data["total"] == 3
        assert data["has_next"] is False
