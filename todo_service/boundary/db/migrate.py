"""
Versioned schema migrations.

Replaces schema synchronization at start-up: the todos table is created and
changed only by the Alembic revisions under ``migrations/versions``.

Run before the service starts (outside any running event loop), e.g.:

    upgrade_database(get_settings().database)

or from the repository root with ``alembic upgrade head``.

Dependencies: alembic, sqlalchemy, todo_service.configs
System role: Schema lifecycle of the todo database
"""

from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.script import ScriptDirectory
from alembic.util import CommandError
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import SQLAlchemyError

from todo_service.configs.database import DatabaseSettings
from todo_service.core.exceptions import MigrationError
from todo_service.observability import get_logger

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"


def build_alembic_config(url: URL | str | None = None) -> Config:
    """
    Alembic config pointing at the packaged migration scripts.

    The URL is handed to env.py through config attributes, not the ini
    options, so passwords are never interpolated into configparser values.

    Args:
        url: Target database URL (None to read DB_* variables in env.py)
    """
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    if url is not None:
        config.attributes["url"] = make_url(url)
    return config


def head_revision() -> str | None:
    """Latest revision known to the migration scripts."""
    return ScriptDirectory.from_config(build_alembic_config()).get_current_head()


def _resolve_url(target: DatabaseSettings | URL | str) -> URL:
    if isinstance(target, DatabaseSettings):
        return target.url
    return make_url(target)


def upgrade_database(
    target: DatabaseSettings | URL | str,
    revision: str = "head",
) -> None:
    """
    Apply migrations up to ``revision``.

    Args:
        target: Database settings or an explicit connection URL
        revision: Alembic revision identifier

    Raises:
        MigrationError: If Alembic or the database rejects the upgrade
    """
    url = _resolve_url(target)
    safe_url = url.render_as_string(hide_password=True)
    logger.info("Upgrading database %s to %s", safe_url, revision)
    try:
        command.upgrade(build_alembic_config(url), revision)
    except (CommandError, SQLAlchemyError) as exc:
        raise MigrationError(
            f"Database upgrade failed: {exc}",
            revision=revision,
            details={"url": safe_url},
        ) from exc


def downgrade_database(target: DatabaseSettings | URL | str, revision: str) -> None:
    """
    Revert migrations down to ``revision`` (``base`` drops everything).

    Raises:
        MigrationError: If Alembic or the database rejects the downgrade
    """
    url = _resolve_url(target)
    safe_url = url.render_as_string(hide_password=True)
    logger.info("Downgrading database %s to %s", safe_url, revision)
    try:
        command.downgrade(build_alembic_config(url), revision)
    except (CommandError, SQLAlchemyError) as exc:
        raise MigrationError(
            f"Database downgrade failed: {exc}",
            revision=revision,
            details={"url": safe_url},
        ) from exc
