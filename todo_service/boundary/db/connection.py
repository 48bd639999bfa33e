"""
Database connection management.

DataSource owns the async engine and session factory of the todo service.
It is constructed explicitly from DatabaseSettings and has an open/close
lifecycle; nothing is connected at import time and the schema is never
synchronized from the models (see migrate.upgrade_database).

Dependencies: sqlalchemy, todo_service.configs
System role: Database connection lifecycle management
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from sqlalchemy import text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from todo_service.boundary.db.base import Base
from todo_service.boundary.db.models import ENTITIES
from todo_service.configs.database import DatabaseSettings
from todo_service.core.exceptions import (
    DataSourceAlreadyOpenError,
    DataSourceNotOpenError,
)
from todo_service.observability import get_logger

logger = get_logger(__name__)


class DataSource:
    """
    Async PostgreSQL data source with exactly one registered entity.

    Usage:
        async with DataSource(get_settings().database) as data_source:
            async with data_source.session() as session:
                await todo_crud.create(session, title="Write docs")

    Attributes:
        settings: Connection settings read from the DB_* environment
        entities: Mapped entity classes known to this data source
    """

    entities = ENTITIES
    metadata = Base.metadata

    def __init__(
        self,
        settings: DatabaseSettings,
        url: URL | str | None = None,
        engine_options: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize a closed data source.

        Args:
            settings: Database settings (host, port, credentials, pool tuning)
            url: Connection URL overriding the one built from settings,
                e.g. a local sqlite+aiosqlite database
            engine_options: Extra keyword arguments for create_async_engine
        """
        self.settings = settings
        self._url = make_url(url) if url is not None else settings.url
        self._engine_options = engine_options or {}
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def url(self) -> URL:
        return self._url

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        """
        Engine of the open data source.

        Raises:
            DataSourceNotOpenError: If open() has not been called
        """
        if self._engine is None:
            raise DataSourceNotOpenError({"url": self._safe_url()})
        return self._engine

    def _safe_url(self) -> str:
        return self._url.render_as_string(hide_password=True)

    def _build_engine_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {"echo": self.settings.echo_sql}
        # Pool sizing only applies to the queue pool of a real server
        if self._url.get_backend_name() == "postgresql":
            options.update(
                pool_size=self.settings.pool_size,
                max_overflow=self.settings.max_overflow,
                pool_timeout=self.settings.pool_timeout,
                pool_pre_ping=True,
            )
        options.update(self._engine_options)
        return options

    async def open(self) -> None:
        """
        Create the engine and session factory.

        Connections are established lazily by the pool; call ping() to
        verify reachability.

        Raises:
            DataSourceAlreadyOpenError: If the data source is already open
        """
        if self._engine is not None:
            raise DataSourceAlreadyOpenError({"url": self._safe_url()})

        self._engine = create_async_engine(self._url, **self._build_engine_options())
        self._session_factory = async_sessionmaker(
            bind=self._engine,
            autoflush=False,
            expire_on_commit=False,
        )
        logger.info(
            "Data source opened: %s (entities: %s)",
            self._safe_url(),
            ", ".join(entity.__tablename__ for entity in self.entities),
        )

    async def ping(self) -> None:
        """Run a trivial query to check that the database answers."""
        async with self.engine.connect() as connection:
            await connection.execute(text("SELECT 1"))

    async def close(self) -> None:
        """Dispose the engine. Closing a closed data source is a no-op."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Data source closed: %s", self._safe_url())

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Transactional session scope.

        Commits when the block exits normally; rolls back and re-raises on error.

        Raises:
            DataSourceNotOpenError: If the data source is not open
        """
        if self._session_factory is None:
            raise DataSourceNotOpenError({"url": self._safe_url()})

        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                logger.exception("Session rolled back")
                raise

    async def __aenter__(self) -> "DataSource":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
