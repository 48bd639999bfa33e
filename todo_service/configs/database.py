"""
Database configuration settings.

Reads the five DB_* variables the ECS task definition injects from the
credentials secret (DB_HOST, DB_PORT, DB_USERNAME, DB_PASSWORD, DB_NAME),
plus pool tuning knobs with the same prefix.

Dependencies: pydantic, pydantic_settings, sqlalchemy
System role: Database connection configuration for ORM
"""

from pydantic import Field, SecretStr
from pydantic_settings import SettingsConfigDict
from sqlalchemy.engine import URL

from todo_service.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """PostgreSQL connection settings for the todo service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DB_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="localhost", description="PostgreSQL host")
    port: int = Field(default=5432, description="PostgreSQL port")
    username: str = Field(default="postgres", description="PostgreSQL user")
    password: SecretStr = Field(default=SecretStr("postgres"), description="PostgreSQL password")
    name: str = Field(default="postgres", description="PostgreSQL database name")

    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Connection pool timeout in seconds")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    ssl: str = Field(default="prefer", description="asyncpg ssl mode (disable, prefer, require)")

    @property
    def url(self) -> URL:
        """
        Construct the async PostgreSQL connection URL.

        URL.create escapes the generated password, which may contain
        characters that are not valid in a raw URL.

        Returns:
            URL: SQLAlchemy URL for the asyncpg driver
        """
        query = {} if self.ssl == "disable" else {"ssl": self.ssl}
        return URL.create(
            drivername="postgresql+asyncpg",
            username=self.username,
            password=self.password.get_secret_value(),
            host=self.host,
            port=self.port,
            database=self.name,
            query=query,
        )

    def render_url(self) -> str:
        """Connection URL with the password masked, safe for logs."""
        return self.url.render_as_string(hide_password=True)
