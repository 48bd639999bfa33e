"""
Alembic environment for the todo service.

The connection URL comes from ``config.attributes["url"]`` when migrations are
run programmatically (see migrate.upgrade_database), otherwise from the DB_*
environment variables, so credentials never live in alembic.ini.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from todo_service.boundary.db.base import Base
from todo_service.boundary.db.models import ENTITIES  # noqa: F401  (registers tables)
from todo_service.configs.database import DatabaseSettings

config = context.config

if config.config_file_name is not None and config.attributes.get("configure_logger", True):
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _database_url():
    url = config.attributes.get("url")
    if url is None:
        url = DatabaseSettings().url
    return url


def run_migrations_offline() -> None:
    """Emit SQL to stdout instead of executing it."""
    url = _database_url()
    if not isinstance(url, str):
        url = url.render_as_string(hide_password=False)
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    connectable = create_async_engine(_database_url(), poolclass=pool.NullPool)

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())
