"""
ff-query: Fluent MySQL query building on server-side prepared statements.

Features:
- Chainable SELECT/JOIN/WHERE/GROUP BY/HAVING/ORDER BY/LIMIT construction
- INSERT, UPDATE, DELETE, COUNT and EXISTS shortcuts
- Positional parameter binding throughout; values never touch SQL text
- Direct and pooled connection handles
- Environment-driven configuration via pydantic-settings
"""

# Version is read from package metadata (pyproject.toml is the single source of truth)
try:
    from importlib.metadata import version

    __version__ = version("ff-query")
except Exception:
    __version__ = "0.1.0"

from .config import DatabaseSettings

# Database exports
from .db import MySQL, MySQLBase, MySQLPool, QueryBuilder, close_pools, connect

# Exceptions
from .exceptions import (
    ConfigurationError,
    ConnectionError,
    FFQueryError,
    QueryError,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "DatabaseSettings",
    # MySQL
    "MySQL",
    "MySQLPool",
    "MySQLBase",
    "connect",
    "close_pools",
    # Query building
    "QueryBuilder",
    # Exceptions
    "FFQueryError",
    "ConnectionError",
    "QueryError",
    "ConfigurationError",
]
