"""
Unit tests for the community feed endpoints.
"""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def _post(client: AsyncClient, account, content: str = "Hello community") -> dict:
    response = await client.post("/api/community", json={"content": content}, headers=account.headers)
    assert response.status_code == 201
    return response.json()


class TestPosts:
    async def test_create_and_list(self, client: AsyncClient, student):
        post = await _post(client, student)
        assert post["author"]["name"] == "Stu Dent"
        response = await client.get("/api/community")
        assert response.status_code == 200
        data = response.json()
        assert [p["id"] for p in data["posts"]] == [post["id"]]
        assert data["pagination"]["limit"] == 20

    async def test_author_without_student_profile(self, client: AsyncClient, employer):
        post = await _post(client, employer)
        assert post["author"]["name"] == "User"

    async def test_content_length_limit(self, client: AsyncClient, student):
        response = await client.post("/api/community", json={"content": "x" * 5001}, headers=student.headers)
        assert response.status_code == 400

    async def test_create_requires_auth(self, client: AsyncClient):
        response = await client.post("/api/community", json={"content": "hi"})
        assert response.status_code == 401

    async def test_only_author_deletes(self, client: AsyncClient, student, make_account):
        post = await _post(client, student)
        other = await make_account()
        response = await client.delete(f"/api/community/{post['id']}", headers=other.headers)
        assert response.status_code == 404
        response = await client.delete(f"/api/community/{post['id']}", headers=student.headers)
        assert response.status_code == 204
        assert (await client.get(f"/api/community/{post['id']}")).status_code == 404


class TestLikesAndComments:
    async def test_like_flow(self, client: AsyncClient, student, make_account):
        post = await _post(client, student)
        fan = await make_account()
        response = await client.post(f"/api/community/{post['id']}/like", headers=fan.headers)
        assert response.status_code == 201
        assert response.json() == {"liked": True}

        duplicate = await client.post(f"/api/community/{post['id']}/like", headers=fan.headers)
        assert duplicate.status_code == 409

        feed = await client.get("/api/community", headers=fan.headers)
        assert feed.json()["posts"][0]["likeCount"] == 1
        assert feed.json()["posts"][0]["isLiked"] is True

        removed = await client.delete(f"/api/community/{post['id']}/like", headers=fan.headers)
        assert removed.status_code == 204
        missing = await client.delete(f"/api/community/{post['id']}/like", headers=fan.headers)
        assert missing.status_code == 404
        assert missing.json()["error"] == "Like not found"

    async def test_like_missing_post(self, client: AsyncClient, student):
        response = await client.post("/api/community/missing/like", headers=student.headers)
        assert response.status_code == 404

    async def test_comments(self, client: AsyncClient, student, make_account):
        post = await _post(client, student)
        commenter = await make_account(full_name="Kim Commenter")
        response = await client.post(
            f"/api/community/{post['id']}/comments", json={"content": "Nice!"}, headers=commenter.headers
        )
        assert response.status_code == 201
        comment = response.json()
        assert comment["author"]["name"] == "Kim Commenter"

        detail = await client.get(f"/api/community/{post['id']}")
        data = detail.json()
        assert data["commentCount"] == 1
        assert [c["content"] for c in data["comments"]] == ["Nice!"]

        denied = await client.delete(f"/api/community/comments/{comment['id']}", headers=student.headers)
        assert denied.status_code == 404
        assert denied.json()["error"] == "Comment not found"

        removed = await client.delete(f"/api/community/comments/{comment['id']}", headers=commenter.headers)
        assert removed.status_code == 204
        assert (await client.get(f"/api/community/{post['id']}")).json()["comments"] == []

    async def test_delete_post_removes_comments_and_likes(self, client: AsyncClient, student):
        post = await _post(client, student)
        await client.post(f"/api/community/{post['id']}/comments", json={"content": "me"}, headers=student.headers)
        await client.post(f"/api/community/{post['id']}/like", headers=student.headers)
        response = await client.delete(f"/api/community/{post['id']}", headers=student.headers)
        assert response.status_code == 204
        feed = await client.get("/api/community")
        assert feed.json()["posts"] == []
