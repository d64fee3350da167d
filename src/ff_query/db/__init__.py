"""
Database connection and query building modules.
"""

from .mysql import MySQL, MySQLBase, MySQLPool, close_pools, connect
from .query_builder import QueryBuilder

__all__ = [
    # MySQL
    "MySQL",
    "MySQLPool",
    "MySQLBase",
    "connect",
    "close_pools",
    # Query building
    "QueryBuilder",
]
