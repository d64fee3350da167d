"""
Shared fixtures for ff-query tests.
"""

from unittest.mock import MagicMock

import pytest
from ff_query.db import MySQL, MySQLBase, QueryBuilder, close_pools


@pytest.fixture(autouse=True)
def shared_pools():
    """Drop pools shared between MySQLPool handles after each test."""
    yield
    close_pools()


@pytest.fixture
def db():
    """Connection handle double recording the statements it receives."""
    handle = MagicMock(spec=MySQLBase)
    handle.read_query.return_value = []
    handle.fetch_one.return_value = None
    handle.execute.return_value = 1
    handle.last_insert_id = None
    handle.affected_rows = 0
    return handle


@pytest.fixture
def users(db):
    """Query builder targeting the users table."""
    return QueryBuilder(db, "users")


@pytest.fixture
def cursor():
    """Prepared dictionary cursor double."""
    cur = MagicMock()
    cur.description = [("id",), ("name",)]
    cur.fetchall.return_value = []
    cur.rowcount = 0
    cur.lastrowid = None
    return cur


@pytest.fixture
def connection(cursor):
    """Driver connection double handing out the cursor fixture."""
    conn = MagicMock()
    conn.cursor.return_value = cursor
    return conn


@pytest.fixture
def mysql_handle(connection):
    """MySQL handle that is already 'connected' to the connection double."""
    handle = MySQL(dbname="shop", user="app", password="secret", logger=MagicMock())
    handle.connection = connection
    return handle
