"""
Exception hierarchy for ff-query.

Driver errors never leak out of the package unwrapped: connection failures
become ConnectionError, statement failures become QueryError. Both keep the
driver's diagnostic text and chain the original exception.
"""

from typing import Optional


class FFQueryError(Exception):
    """Base class for all ff-query errors."""


class ConnectionError(FFQueryError):
    """Raised when a database connection cannot be established."""

    def __init__(self, message: str, dsn: Optional[str] = None):
        super().__init__(message)
        self.dsn = dsn


class QueryError(FFQueryError):
    """
    Raised when preparing or executing a statement fails.

    Covers syntax errors, constraint violations, type mismatches and lost
    connections alike; the driver message is preserved verbatim.
    """

    def __init__(self, message: str, query: Optional[str] = None):
        super().__init__(message)
        self.query = query


class ConfigurationError(FFQueryError):
    """Raised when settings are insufficient to build a connection handle."""
