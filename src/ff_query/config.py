"""
Connection configuration for ff-query.

Settings are read from ``FF_QUERY_DB_*`` environment variables (or a .env
file) and turned into a connection handle on demand.
"""

from typing import Any, Optional, Union

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .db.mysql import MySQL, MySQLPool
from .exceptions import ConfigurationError


class DatabaseSettings(BaseSettings):
    """
    MySQL connection settings using Pydantic Settings.

    Example:
        # FF_QUERY_DB_DATABASE=shop FF_QUERY_DB_USER=app FF_QUERY_DB_PASSWORD=secret
        db = DatabaseSettings().connect()
    """

    model_config = SettingsConfigDict(
        env_prefix="FF_QUERY_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "localhost"
    port: int = Field(default=3306, ge=1, le=65535)
    database: Optional[str] = None
    user: Optional[str] = None
    password: SecretStr = SecretStr("")
    charset: str = "utf8mb4"
    autocommit: bool = True

    # Pooling
    pooled: bool = False
    pool_name: str = "ff_query_pool"
    pool_size: int = Field(default=5, ge=1, le=32)

    def create_handle(self, logger: Any = None) -> Union[MySQL, MySQLPool]:
        """
        Build an unconnected handle from these settings.

        Args:
            logger: Optional structlog-compatible logger for the handle

        Returns:
            MySQLPool when ``pooled`` is set, MySQL otherwise

        Raises:
            ConfigurationError: If database or user is missing
        """
        missing = [name for name in ("database", "user") if not getattr(self, name)]
        if missing:
            env_names = ", ".join(f"FF_QUERY_DB_{name.upper()}" for name in missing)
            raise ConfigurationError(f"Missing database settings: {env_names}")

        common = {
            "dbname": self.database,
            "user": self.user,
            "password": self.password.get_secret_value(),
            "host": self.host,
            "port": self.port,
            "charset": self.charset,
            "autocommit": self.autocommit,
            "logger": logger,
        }
        if self.pooled:
            return MySQLPool(pool_name=self.pool_name, pool_size=self.pool_size, **common)
        return MySQL(**common)

    def connect(self, logger: Any = None) -> Union[MySQL, MySQLPool]:
        """Build a handle and open its connection."""
        handle = self.create_handle(logger=logger)
        handle.connect()
        return handle
