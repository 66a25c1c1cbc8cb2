"""
Database configuration settings.

Manages the connection target, credentials and timeouts of the Users store.
Defaults point at the local development database; every field can be
overridden with a POSTGRES_* environment variable.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for the data gateway
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from userstore.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """Relational store configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POSTGRES_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="127.0.0.1", description="Database host")
    port: int = Field(default=5432, description="Database port")
    user: str = Field(default="dbuser", description="Database user")
    password: str = Field(default="dbpass", description="Database password")
    db: str = Field(default="db", description="Database name")
    url: str | None = Field(
        default=None,
        description="Full SQLAlchemy URL; takes precedence over host/port/user/password/db",
    )

    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Connection pool timeout in seconds")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    statement_timeout_ms: int = Field(
        default=5000,
        ge=0,
        description="Per-statement timeout in milliseconds (0 disables it)",
    )
    transaction_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Upper bound in seconds for a whole batch insert transaction",
    )

    @property
    def database_url(self) -> str:
        """
        Construct the SQLAlchemy connection URL.

        Returns:
            str: Explicit url when configured, otherwise a PostgreSQL URL
                 built from the individual fields
        """
        if self.url:
            return self.url
        return (
            f"postgresql://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.db}"
        )

    @property
    def is_sqlite(self) -> bool:
        """True when the configured URL targets SQLite."""
        return self.database_url.startswith("sqlite")
