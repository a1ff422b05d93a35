"""
Postboard Backend — API Endpoint Tests
========================================

What:  End-to-end tests of every route against a real SQLite database.
How:   `test_client` talks to an app bound to a fresh database per test
       (see conftest.py); requests go through middleware, resolvers,
       services and exception handlers exactly as in production.
"""

import pytest
from uuid import uuid4

from httpx import AsyncClient, ASGITransport
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.database import Database


async def _create_post(client, **fields):
    payload = {"title": "Hello", **fields}
    response = await client.post("/posts", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def _create_comment(client, post_id, **fields):
    payload = {"text": "Nice", **fields}
    response = await client.post(f"/posts/{post_id}/comments", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestPosts:
    """GET /posts, POST /posts, GET /posts/{post}."""

    @pytest.mark.asyncio
    async def test_list_posts_empty(self, test_client):
        response = await test_client.get("/posts")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_create_then_get_round_trip(self, test_client):
        """Fields come back as sent, plus an id, zero upvotes, no comments."""
        fields = {"title": "Hello", "link": "https://example.com", "author": "ada", "body": "Hi all"}
        created = await _create_post(test_client, **fields)

        response = await test_client.get(f"/posts/{created['id']}")

        assert response.status_code == 200
        post = response.json()
        for key, value in fields.items():
            assert post[key] == value
        assert post["id"] == created["id"]
        assert post["upvotes"] == 0
        assert post["comments"] == []

    @pytest.mark.asyncio
    async def test_create_ignores_store_owned_fields(self, test_client):
        created = await _create_post(test_client, upvotes=99, id=str(uuid4()), unknown="x")

        assert created["upvotes"] == 0
        assert "unknown" not in created

    @pytest.mark.asyncio
    async def test_create_post_without_title_rejected(self, test_client):
        response = await test_client.post("/posts", json={"body": "no title"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert any(f["field"].endswith("title") for f in body["details"]["fields"])

    @pytest.mark.asyncio
    async def test_get_missing_post_is_404(self, test_client):
        response = await test_client.get(f"/posts/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_get_malformed_post_id_is_404(self, test_client):
        response = await test_client.get("/posts/not-an-id")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_list_is_stable_without_writes(self, test_client):
        for title in ("one", "two", "three"):
            await _create_post(test_client, title=title)

        first = (await test_client.get("/posts")).json()
        second = (await test_client.get("/posts")).json()

        assert first == second
        assert [p["title"] for p in first] == ["one", "two", "three"]


class TestUpvotes:
    """PUT /posts/{post}/upvote and PUT /posts/{post}/comments/{comment}/upvote."""

    @pytest.mark.asyncio
    async def test_post_upvotes_accumulate(self, test_client):
        post = await _create_post(test_client)

        for expected in (1, 2, 3):
            response = await test_client.put(f"/posts/{post['id']}/upvote")
            assert response.status_code == 200
            assert response.json()["upvotes"] == expected

        fetched = (await test_client.get(f"/posts/{post['id']}")).json()
        assert fetched["upvotes"] == 3

    @pytest.mark.asyncio
    async def test_upvote_missing_post_is_404(self, test_client):
        response = await test_client.put(f"/posts/{uuid4()}/upvote")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_comment_upvotes_accumulate(self, test_client):
        post = await _create_post(test_client)
        comment = await _create_comment(test_client, post["id"])

        url = f"/posts/{post['id']}/comments/{comment['id']}/upvote"
        await test_client.put(url)
        response = await test_client.put(url)

        assert response.status_code == 200
        assert response.json()["upvotes"] == 2
        fetched = (await test_client.get(f"/posts/{post['id']}")).json()
        assert fetched["comments"][0]["upvotes"] == 2

    @pytest.mark.asyncio
    async def test_upvote_missing_comment_is_404(self, test_client):
        post = await _create_post(test_client)

        response = await test_client.put(f"/posts/{post['id']}/comments/{uuid4()}/upvote")

        assert response.status_code == 404
        assert "comment" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_comment_upvote_through_other_post_still_applies(self, test_client):
        """The post in the URL is resolved but not checked against the comment."""
        owner = await _create_post(test_client, title="owner")
        other = await _create_post(test_client, title="other")
        comment = await _create_comment(test_client, owner["id"])

        response = await test_client.put(
            f"/posts/{other['id']}/comments/{comment['id']}/upvote"
        )

        assert response.status_code == 200
        assert response.json()["upvotes"] == 1
        assert response.json()["post"] == owner["id"]


class TestComments:
    """POST /posts/{post}/comments and comment expansion."""

    @pytest.mark.asyncio
    async def test_comment_belongs_to_its_post_only(self, test_client):
        post_a = await _create_post(test_client, title="A")
        post_b = await _create_post(test_client, title="B")
        comment = await _create_comment(test_client, post_a["id"], text="On A")

        a = (await test_client.get(f"/posts/{post_a['id']}")).json()
        b = (await test_client.get(f"/posts/{post_b['id']}")).json()

        assert [c["id"] for c in a["comments"]] == [comment["id"]]
        assert b["comments"] == []

    @pytest.mark.asyncio
    async def test_comments_listed_as_ids_in_insertion_order(self, test_client):
        post = await _create_post(test_client)
        first = await _create_comment(test_client, post["id"], text="first")
        second = await _create_comment(test_client, post["id"], text="second")

        listed = (await test_client.get("/posts")).json()
        detail = (await test_client.get(f"/posts/{post['id']}")).json()

        assert listed[0]["comments"] == [first["id"], second["id"]]
        assert [c["text"] for c in detail["comments"]] == ["first", "second"]

    @pytest.mark.asyncio
    async def test_comment_on_missing_post_is_404(self, test_client):
        response = await test_client.post(f"/posts/{uuid4()}/comments", json={"text": "Nice"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_comment_without_text_rejected(self, test_client):
        post = await _create_post(test_client)

        response = await test_client.post(f"/posts/{post['id']}/comments", json={"author": "bob"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_forum_scenario(self, test_client):
        """Create, upvote, comment, then read the whole thing back."""
        post = await _create_post(test_client, title="Hello")
        assert post["upvotes"] == 0

        upvoted = (await test_client.put(f"/posts/{post['id']}/upvote")).json()
        assert upvoted["upvotes"] == 1

        response = await test_client.post(f"/posts/{post['id']}/comments", json={"text": "Nice"})
        assert response.status_code == 201
        comment = response.json()
        assert comment["text"] == "Nice"
        assert comment["post"] == post["id"]
        assert comment["upvotes"] == 0

        fetched = (await test_client.get(f"/posts/{post['id']}")).json()
        assert fetched["upvotes"] == 1
        assert len(fetched["comments"]) == 1
        assert fetched["comments"][0]["text"] == "Nice"
        assert fetched["comments"][0]["id"] == comment["id"]


class TestServiceRoutes:
    """Health, root and cross-cutting headers."""

    @pytest.mark.asyncio
    async def test_health_reports_database(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_root_banner(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.json()["docs_url"] == "/docs"

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/posts", headers={"X-Request-ID": "abc12345"})

        assert response.headers["X-Request-ID"] == "abc12345"

    @pytest.mark.asyncio
    async def test_error_body_carries_request_id(self, test_client):
        response = await test_client.get(
            f"/posts/{uuid4()}", headers={"X-Request-ID": "trace-me"}
        )

        assert response.json()["request_id"] == "trace-me"


class TestStoreFailures:
    """Store errors become generic 500s; an unreachable database fails /health."""

    @staticmethod
    def _break(monkeypatch, method):
        async def fail(self, *args, **kwargs):
            raise OperationalError("STATEMENT", {}, Exception("disk I/O error at /var/lib/db"))
        monkeypatch.setattr(AsyncSession, method, fail)

    @pytest.mark.asyncio
    async def test_failed_commit_is_not_reported_as_created(self, test_client, monkeypatch):
        self._break(monkeypatch, "commit")

        response = await test_client.post("/posts", json={"title": "x"})

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"

        monkeypatch.undo()
        assert (await test_client.get("/posts")).json() == []

    @pytest.mark.asyncio
    async def test_failed_comment_commit_leaves_post_without_comments(
        self, test_client, monkeypatch
    ):
        post = await _create_post(test_client)
        self._break(monkeypatch, "commit")

        response = await test_client.post(f"/posts/{post['id']}/comments", json={"text": "Nice"})

        assert response.status_code == 500
        monkeypatch.undo()
        fetched = (await test_client.get(f"/posts/{post['id']}")).json()
        assert fetched["comments"] == []

    @pytest.mark.asyncio
    async def test_store_error_body_is_generic(self, test_client, monkeypatch):
        self._break(monkeypatch, "execute")

        response = await test_client.get("/posts", headers={"X-Request-ID": "db-down"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert body["request_id"] == "db-down"
        assert "disk I/O" not in response.text
        assert "STATEMENT" not in response.text

    @pytest.mark.asyncio
    async def test_health_unhealthy_when_database_unreachable(self, tmp_path):
        from app.main import create_app

        unreachable = Database(Settings(
            database_url=f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'postboard.db'}"
        ))
        app = create_app(database=unreachable)
        try:
            async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
                response = await client.get("/health")
        finally:
            await unreachable.dispose()

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "unhealthy"
        assert body["database"] == "disconnected"
