"""
Shared test fixtures for the todo service test suite.

Provides: in-memory async database session, database settings
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import pytest


@pytest.fixture
def database_settings(monkeypatch):
    """DatabaseSettings built from a clean DB_* environment."""
    from todo_service.configs.database import DatabaseSettings

    for key in ("DB_HOST", "DB_PORT", "DB_USERNAME", "DB_PASSWORD", "DB_NAME", "DB_SSL"):
        monkeypatch.delenv(key, raising=False)
    return DatabaseSettings(_env_file=None)


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Tables come from model metadata here; the running service relies on
    Alembic migrations instead.

    Yields:
        AsyncSession: Test database session, rolled back afterwards
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from todo_service.boundary.db.base import Base
    from todo_service.boundary.db.models import TodoModel  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        yield session
        await session.rollback()

    await engine.dispose()
