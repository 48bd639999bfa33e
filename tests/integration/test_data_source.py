"""
Test suite for the DataSource lifecycle.

Runs against a file-backed SQLite database through aiosqlite; tables are
created from metadata for the test only.

System role: Verification of database connection lifecycle
"""

from pathlib import Path

import pytest
from sqlalchemy import text

from todo_service.boundary.db.base import Base
from todo_service.boundary.db.connection import DataSource
from todo_service.boundary.db.CRUD.todo_crud import todo_crud
from todo_service.boundary.db.models import TodoModel
from todo_service.configs.database import DatabaseSettings
from todo_service.core.exceptions import DataSourceAlreadyOpenError, DataSourceNotOpenError


@pytest.fixture
def sqlite_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'todo.db'}"


@pytest.fixture
async def data_source(database_settings: DatabaseSettings, sqlite_url: str):
    """Open data source with the todos table created."""
    source = DataSource(database_settings, url=sqlite_url)
    await source.open()
    async with source.engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    yield source
    await source.close()


class TestDataSourceLifecycle:

    def test_new_data_source_is_closed(self, database_settings: DatabaseSettings) -> None:
        """Test construction does not connect."""
        source = DataSource(database_settings)

        assert source.is_open is False
        assert source.url.drivername == "postgresql+asyncpg"

    def test_registers_only_todo_entity(self, database_settings: DatabaseSettings) -> None:
        """Test exactly one entity is known to the data source."""
        source = DataSource(database_settings)

        assert source.entities == (TodoModel,)
        assert set(source.metadata.tables) == {"todos"}

    def test_engine_requires_open(self, database_settings: DatabaseSettings) -> None:
        """Test the engine is unavailable before open()."""
        with pytest.raises(DataSourceNotOpenError):
            _ = DataSource(database_settings).engine

    @pytest.mark.asyncio
    async def test_session_requires_open(self, database_settings: DatabaseSettings) -> None:
        """Test sessions are refused before open()."""
        source = DataSource(database_settings)

        with pytest.raises(DataSourceNotOpenError):
            async with source.session():
                pass

    @pytest.mark.asyncio
    async def test_open_twice_raises(
        self, database_settings: DatabaseSettings, sqlite_url: str
    ) -> None:
        """Test double open is rejected."""
        source = DataSource(database_settings, url=sqlite_url)
        await source.open()

        try:
            with pytest.raises(DataSourceAlreadyOpenError):
                await source.open()
        finally:
            await source.close()

    @pytest.mark.asyncio
    async def test_close_is_idempotent(
        self, database_settings: DatabaseSettings, sqlite_url: str
    ) -> None:
        """Test closing twice is harmless and the source can reopen."""
        source = DataSource(database_settings, url=sqlite_url)
        await source.open()

        await source.close()
        await source.close()
        assert source.is_open is False

        await source.open()
        assert source.is_open is True
        await source.close()

    @pytest.mark.asyncio
    async def test_async_context_manager(
        self, database_settings: DatabaseSettings, sqlite_url: str
    ) -> None:
        """Test async with opens and closes the data source."""
        async with DataSource(database_settings, url=sqlite_url) as source:
            assert source.is_open
            await source.ping()

        assert source.is_open is False


class TestDataSourceSessions:

    @pytest.mark.asyncio
    async def test_session_commits(self, data_source: DataSource) -> None:
        """Test a clean exit commits the transaction."""
        # Act
        async with data_source.session() as session:
            todo = await todo_crud.create(session, title="Persist me")

        # Assert
        async with data_source.session() as session:
            stored = await todo_crud.get_by_id(session, todo.id)
        assert stored is not None
        assert stored.title == "Persist me"

    @pytest.mark.asyncio
    async def test_session_rolls_back_on_error(self, data_source: DataSource) -> None:
        """Test an exception rolls back and propagates."""
        # Act
        with pytest.raises(RuntimeError):
            async with data_source.session() as session:
                await todo_crud.create(session, title="Never stored")
                raise RuntimeError("boom")

        # Assert
        async with data_source.session() as session:
            result = await session.execute(text("SELECT COUNT(*) FROM todos"))
        assert result.scalar_one() == 0
