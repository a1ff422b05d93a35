"""
Postboard Backend — Database Handle & Session Management
==========================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   A `Database` handle owns the engine and session factory. The app
       factory creates one per application and stores it on `app.state`;
       the session dependency reads it from there on each request.
Who:   Used by route handlers and resolvers via FastAPI's dependency injection.
When:  Handle is created with the app; sessions are created per-request.

Connection Pooling Strategy (PostgreSQL):
    pool_size=20:     Persistent connections for normal load
    max_overflow=10:  Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:    Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour

    SQLite (development and tests) keeps the dialect's default pool.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class so they share one metadata object,
    which Alembic and `Database.create_all()` read.
    """
    pass


class Database:
    """
    Process-wide store handle: one engine, one session factory.

    Opened once when the application is built and disposed on shutdown.
    Passed around explicitly (app.state) rather than imported as a global.
    """

    def __init__(self, config: Optional[Settings] = None):
        config = config or default_settings
        self.url = config.database_url

        engine_kwargs = {
            "pool_pre_ping": config.db_pool_pre_ping,
            # Echo SQL queries in DEBUG mode for development visibility
            "echo": config.log_level == "DEBUG",
        }
        if not config.is_sqlite:
            engine_kwargs.update(
                pool_size=config.db_pool_size,
                max_overflow=config.db_max_overflow,
                pool_recycle=3600,
            )

        self.engine = create_async_engine(self.url, **engine_kwargs)

        # expire_on_commit=False: Prevents lazy-loading issues after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Unit of work: rolls back on any error, always closes.

        Services commit their own writes before returning, so a failed commit
        reaches the client as an error instead of after the response is sent.
        Both steps of comment creation share one transaction and one commit.
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise  # Re-raise so the global error handler can respond

    async def create_all(self) -> None:
        """Create all tables known to Base.metadata (dev / tests only)."""
        # Registers posts and comments with Base.metadata
        import app.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    async def health_check(self) -> bool:
        """Run SELECT 1 against the store; False if it is unreachable."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database health check failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Close all pooled connections (application shutdown)."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Reads the Database handle the app factory stored on app.state
        2. Opens a unit-of-work session and yields it to the resolvers/handler
        3. On error: rolls back whatever the services left uncommitted

    Example usage in a route:
        @router.get("/posts")
        async def list_posts(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
