"""
Unit tests for the blog endpoints.
"""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def _create(client: AsyncClient, admin, **overrides) -> dict:
    payload = {"title": "Hello World", "content": "First post", "tags": ["career"], "status": "PUBLISHED"}
    payload.update(overrides)
    response = await client.post("/api/blog", json=payload, headers=admin.headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestAuthoring:
    async def test_create_published_post(self, client: AsyncClient, admin):
        post = await _create(client, admin)
        assert post["slug"] == "hello-world"
        assert post["publishedAt"] is not None
        assert post["authorId"] == admin.id

    async def test_draft_has_no_publish_date(self, client: AsyncClient, admin):
        post = await _create(client, admin, status="DRAFT")
        assert post["publishedAt"] is None

    async def test_slug_collisions_get_suffix(self, client: AsyncClient, admin):
        slugs = [(await _create(client, admin, title="Hello, World!"))["slug"] for _ in range(3)]
        assert slugs == ["hello-world", "hello-world-2", "hello-world-3"]

    async def test_only_admins_author(self, client: AsyncClient, student):
        response = await client.post("/api/blog", json={"title": "x", "content": "y"}, headers=student.headers)
        assert response.status_code == 403

    async def test_first_publish_stamps_date(self, client: AsyncClient, admin):
        post = await _create(client, admin, status="DRAFT")
        published = await client.patch(f"/api/blog/{post['id']}", json={"status": "PUBLISHED"}, headers=admin.headers)
        assert published.status_code == 200
        first_date = published.json()["publishedAt"]
        assert first_date is not None

        await client.patch(f"/api/blog/{post['id']}", json={"status": "ARCHIVED"}, headers=admin.headers)
        again = await client.patch(f"/api/blog/{post['id']}", json={"status": "PUBLISHED"}, headers=admin.headers)
        assert again.json()["publishedAt"] == first_date

    async def test_update_keeps_slug(self, client: AsyncClient, admin):
        post = await _create(client, admin)
        response = await client.patch(f"/api/blog/{post['id']}", json={"title": "Renamed"}, headers=admin.headers)
        assert response.json()["title"] == "Renamed"
        assert response.json()["slug"] == "hello-world"

    async def test_delete(self, client: AsyncClient, admin):
        post = await _create(client, admin)
        response = await client.delete(f"/api/blog/{post['id']}", headers=admin.headers)
        assert response.status_code == 204
        assert (await client.delete(f"/api/blog/{post['id']}", headers=admin.headers)).status_code == 404


class TestReading:
    async def test_public_list_shows_published_only(self, client: AsyncClient, admin):
        await _create(client, admin)
        await _create(client, admin, title="Secret Draft", status="DRAFT")
        response = await client.get("/api/blog")
        assert response.status_code == 200
        data = response.json()
        assert [p["title"] for p in data["posts"]] == ["Hello World"]
        assert data["posts"][0]["author"]["name"] == "Ada Admin"

    async def test_tag_filter(self, client: AsyncClient, admin):
        await _create(client, admin)
        await _create(client, admin, title="Study Tips", tags=["study"])
        response = await client.get("/api/blog", params={"tag": "study"})
        assert [p["title"] for p in response.json()["posts"]] == ["Study Tips"]

    async def test_get_by_slug(self, client: AsyncClient, admin):
        await _create(client, admin)
        response = await client.get("/api/blog/hello-world")
        assert response.status_code == 200
        assert response.json()["content"] == "First post"

    async def test_drafts_hidden_from_public(self, client: AsyncClient, admin, student):
        await _create(client, admin, title="Secret Draft", status="DRAFT")
        assert (await client.get("/api/blog/secret-draft")).status_code == 404
        assert (await client.get("/api/blog/secret-draft", headers=student.headers)).status_code == 404
        assert (await client.get("/api/blog/secret-draft", headers=admin.headers)).status_code == 200

    async def test_admin_list_includes_drafts(self, client: AsyncClient, admin):
        await _create(client, admin)
        await _create(client, admin, title="Secret Draft", status="DRAFT")
        response = await client.get("/api/blog/admin/list", headers=admin.headers)
        assert {p["title"] for p in response.json()} == {"Hello World", "Secret Draft"}
