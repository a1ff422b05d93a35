"""
Postboard Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock AsyncSession for service unit tests
    ├── make_post / make_comment: Transient ORM objects with ids filled in
    ├── database: Database handle on a fresh SQLite file, tables created
    └── test_client: HTTPX AsyncClient talking to an app bound to `database`
"""

import os

# Override settings for testing BEFORE any app imports
# Why: app.config builds its singleton at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.config import Settings
from app.database import Database
from app.models import Comment, Post


# ══════════════════════════════════════════════════════════════════════════
# Service-level fixtures (no database)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_post(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = post
            result = await post_service.get_post(mock_db_session, str(post.id))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def make_post():
    """Factory for transient Post objects as if loaded from the store."""
    def _make(**overrides):
        fields = {
            "id": uuid4(),
            "title": "Hello",
            "link": None,
            "author": "ada",
            "body": "First post",
            "upvotes": 0,
            "created_at": datetime.now(timezone.utc),
            "comments": [],
        }
        fields.update(overrides)
        return Post(**fields)
    return _make


@pytest.fixture
def make_comment():
    """Factory for transient Comment objects attached to a given post id."""
    def _make(post_id=None, **overrides):
        fields = {
            "id": uuid4(),
            "text": "Nice",
            "author": None,
            "upvotes": 0,
            "created_at": datetime.now(timezone.utc),
            "post_id": post_id or uuid4(),
        }
        fields.update(overrides)
        return Comment(**fields)
    return _make


# ══════════════════════════════════════════════════════════════════════════
# API-level fixtures (real SQLite database per test)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def database(tmp_path):
    """
    A Database handle on a throwaway SQLite file with tables created.

    Why a file (not :memory:): every pooled connection sees the same data.
    """
    config = Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'postboard.db'}")
    db = Database(config)
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def test_client(database):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from app.main import create_app

    app = create_app(database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
