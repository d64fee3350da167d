"""
Pytest configuration for integration tests.

Integration tests need a live MySQL server and are skipped unless
FF_QUERY_TEST_MYSQL_HOST is set. The remaining connection values default to
a local docker container (root/mysql on port 3306, database test_ff_query).
"""

import os

import pytest
from ff_query.db import connect


@pytest.fixture(scope="session")
def mysql_db():
    """Session-wide handle to the integration database."""
    host = os.getenv("FF_QUERY_TEST_MYSQL_HOST")
    if not host:
        pytest.skip("FF_QUERY_TEST_MYSQL_HOST not set")

    handle = connect(
        host,
        os.getenv("FF_QUERY_TEST_MYSQL_DATABASE", "test_ff_query"),
        os.getenv("FF_QUERY_TEST_MYSQL_USER", "root"),
        os.getenv("FF_QUERY_TEST_MYSQL_PASSWORD", "mysql"),
        port=int(os.getenv("FF_QUERY_TEST_MYSQL_PORT", "3306")),
    )
    yield handle
    handle.close_connection()


@pytest.fixture
def products(mysql_db):
    """Fresh products table for each test."""
    mysql_db.execute("DROP TABLE IF EXISTS test_products")
    mysql_db.execute(
        """
        CREATE TABLE test_products (
            id INT AUTO_INCREMENT PRIMARY KEY,
            name VARCHAR(100) NOT NULL UNIQUE,
            category VARCHAR(50),
            price INT NOT NULL
        )
        """
    )
    yield mysql_db.table("test_products")
    mysql_db.execute("DROP TABLE IF EXISTS test_products")
