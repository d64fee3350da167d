"""
MySQL connection handles.
Provides both direct connections and connection pooling on top of mysql-connector-python.
"""

import threading
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Dict, List, Optional, Sequence

import mysql.connector
import structlog
from mysql.connector import pooling

from ..exceptions import ConnectionError, QueryError
from .query_builder import QueryBuilder

Row = Dict[str, Any]

# Shared pools keyed by pool_name; handles with the same name borrow from one pool
_POOLS: Dict[str, Any] = {}
_POOLS_LOCK = threading.Lock()

# Supplied positionally to connect(), so they cannot also come in as options
_CONNECT_ARGUMENTS = frozenset({"dbname", "user", "password", "host", "charset"})


@dataclass
class MySQLBase:
    """
    Base class for MySQL operations.

    Every statement goes through a server-side prepared cursor that returns
    rows as dictionaries; values are always bound, never interpolated.
    Connections are opened lazily and are not closed automatically, leaving
    the lifecycle to the application.

    A handle wraps a single connection and must only be used by one caller
    at a time. With autocommit disabled every statement, reads included, is
    committed on success so no transaction is left open between calls.
    """

    db_type = "mysql"

    dbname: str
    user: str
    password: str = field(repr=False)
    host: str = "localhost"
    port: int = 3306
    charset: str = "utf8mb4"
    autocommit: bool = True
    options: Dict[str, Any] = field(default_factory=dict)
    logger: Any = field(default=None, repr=False, compare=False)

    connection: Any = field(default=None, init=False, repr=False, compare=False)
    last_insert_id: Optional[int] = field(default=None, init=False, compare=False)
    affected_rows: int = field(default=0, init=False, compare=False)

    def __post_init__(self):
        if self.logger is None:
            self.logger = structlog.get_logger("ff_query")

    @property
    def dsn(self) -> str:
        """Connection string without credentials, safe to log."""
        return f"mysql://{self.host}:{self.port}/{self.dbname}?charset={self.charset}"

    def connect(self) -> Any:
        raise NotImplementedError

    def connection_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments handed to the driver when opening a connection."""
        return {
            "host": self.host,
            "port": self.port,
            "database": self.dbname,
            "user": self.user,
            "password": self.password,
            "charset": self.charset,
            "autocommit": self.autocommit,
            **self.options,
        }

    def table(self, name: str) -> QueryBuilder:
        """Return a query builder bound to this handle and the given table."""
        return QueryBuilder(self, name)

    def read_query(self, query: str, params: Optional[Sequence[Any]] = None) -> List[Row]:
        """
        Execute a read query and fetch all rows.

        :param query: SQL text with ``?`` placeholders.
        :param params: Values bound to the placeholders, in order.
        :return: A list of column-name to value mappings.
        :raises QueryError: If preparing or executing the statement fails.
        """
        return self._run(query, params, self._read_rows)

    def fetch_one(self, query: str, params: Optional[Sequence[Any]] = None) -> Optional[Row]:
        """
        Execute a read query and return the first row, or None when empty.

        :raises QueryError: If preparing or executing the statement fails.
        """
        rows = self.read_query(query, params)
        return rows[0] if rows else None

    def execute(self, query: str, params: Optional[Sequence[Any]] = None) -> int:
        """
        Execute a non-returning statement (INSERT, UPDATE, DELETE).

        Commits when autocommit is disabled and rolls back on failure.
        Records ``affected_rows`` and ``last_insert_id`` for the caller.

        :return: Number of affected rows.
        :raises QueryError: If the statement fails.
        """
        try:
            return self._run(query, params, self._record_write)
        except QueryError:
            if not self.autocommit and self.connection:
                self.connection.rollback()
            raise

    def close_connection(self) -> None:
        """Close the connection if one is open."""
        if self.connection:
            self.connection.close()
            self.connection = None
            self.logger.debug("Closed MySQL connection", dsn=self.dsn)

    def _run(
        self,
        query: str,
        params: Optional[Sequence[Any]],
        handler: Callable[[Any], Any],
    ) -> Any:
        if not self.connection:
            self.connect()

        bound = tuple(params or ())
        self.logger.debug("Executing statement", query=query, param_count=len(bound))

        try:
            cursor = self.connection.cursor(prepared=True, dictionary=True)
            try:
                cursor.execute(query, bound)
                return handler(cursor)
            finally:
                cursor.close()
        except mysql.connector.Error as e:
            self.logger.error(f"Database query error: {e}", query=query)
            raise QueryError(f"Query execution failed: {e}", query=query) from e

    def _read_rows(self, cursor) -> List[Row]:
        rows = self._fetch_all(cursor)
        # Ends the read transaction so later reads see fresh data
        if not self.autocommit:
            self.connection.commit()
        return rows

    @staticmethod
    def _fetch_all(cursor) -> List[Row]:
        # Statements without a result set have no description
        if cursor.description is None:
            return []
        return [dict(row) for row in cursor.fetchall()]

    def _record_write(self, cursor) -> int:
        if not self.autocommit:
            self.connection.commit()
        self.affected_rows = cursor.rowcount
        self.last_insert_id = cursor.lastrowid or None
        return self.affected_rows


@dataclass
class MySQL(MySQLBase):
    """
    Direct MySQL connection without pooling.

    Suitable for scripts and simple applications.

    :param dbname: Database name.
    :param user: Database username.
    :param password: Database password.
    :param host: Database host.
    :param port: Database port (default: 3306).
    :param charset: Connection character set (default: utf8mb4).
    """

    def connect(self) -> Any:
        """
        Establish a direct connection to the MySQL database.

        :return: The open driver connection.
        :raises ConnectionError: If connecting fails.
        """
        if self.connection:
            return self.connection

        try:
            self.connection = mysql.connector.connect(**self.connection_kwargs())
            self.logger.info(f"Connected to MySQL database: {self.dbname}", dsn=self.dsn)
        except mysql.connector.Error as e:
            self.logger.error(f"Failed to connect to MySQL: {e}", dsn=self.dsn)
            raise ConnectionError(f"Database connection failed: {e}", dsn=self.dsn) from e
        return self.connection


@dataclass
class MySQLPool(MySQLBase):
    """
    MySQL connection borrowed from a mysql.connector pool.

    Pools are process-wide and keyed by ``pool_name``: the first handle to
    connect creates the pool with its settings, later handles with the same
    name borrow from it. ``close_connection`` hands the connection back to
    the pool rather than closing the socket.

    :param pool_name: The name of the connection pool (default: ff_query_pool).
    :param pool_size: Maximum number of pooled connections (default: 5).
    """

    pool_name: str = "ff_query_pool"
    pool_size: int = 5

    @property
    def pool(self) -> Any:
        """The shared pool for ``pool_name``, or None before the first connect."""
        return _POOLS.get(self.pool_name)

    def connect(self) -> Any:
        """
        Acquire a connection from the shared pool, creating the pool if needed.

        :raises ConnectionError: If the pool cannot be created or is exhausted.
        """
        if self.connection:
            return self.connection

        try:
            self.connection = self._get_or_create_pool().get_connection()
        except mysql.connector.Error as e:
            self.logger.error(f"Failed to connect to MySQL pool: {e}", dsn=self.dsn)
            raise ConnectionError(
                f"Error acquiring pooled connection: {e}", dsn=self.dsn
            ) from e
        return self.connection

    def close_connection(self) -> None:
        """Return the connection to the pool."""
        if self.connection:
            self.connection.close()
            self.connection = None
            self.logger.debug("Returned connection to pool", pool=self.pool_name)

    def _get_or_create_pool(self) -> Any:
        with _POOLS_LOCK:
            pool = _POOLS.get(self.pool_name)
            if pool is None:
                pool = pooling.MySQLConnectionPool(
                    pool_name=self.pool_name,
                    pool_size=self.pool_size,
                    **self.connection_kwargs(),
                )
                _POOLS[self.pool_name] = pool
                self.logger.info(
                    f"Created MySQL pool '{self.pool_name}' (size: {self.pool_size})",
                    dsn=self.dsn,
                )
            return pool


def close_pools() -> None:
    """
    Forget every shared pool.

    Idle pooled connections are closed; connections still held by handles
    are closed when those handles release them.
    """
    with _POOLS_LOCK:
        for pool in _POOLS.values():
            pool._remove_connections()
        _POOLS.clear()


def connect(
    host: str,
    database: str,
    username: str,
    password: str,
    charset: str = "utf8mb4",
    **options: Any,
) -> MySQL:
    """
    Open a direct MySQL connection and return its handle.

    Keyword options matching MySQL fields (``port``, ``autocommit``,
    ``logger``) configure the handle; anything else is passed to the driver.

    Example:
        db = connect("localhost", "shop", "app", "secret")
        rows = db.table("products").where("price", 10, ">").execute()

    :raises ValueError: If an option repeats a positional argument.
    :raises ConnectionError: If the driver cannot connect.
    """
    duplicated = sorted(_CONNECT_ARGUMENTS.intersection(options))
    if duplicated:
        raise ValueError(
            f"connect() options repeat positional arguments: {', '.join(duplicated)}"
        )

    handle_fields = {f.name for f in fields(MySQL) if f.init} - _CONNECT_ARGUMENTS
    handle_kwargs = {k: options.pop(k) for k in list(options) if k in handle_fields}
    handle_kwargs["options"] = {**handle_kwargs.get("options", {}), **options}

    handle = MySQL(
        dbname=database,
        user=username,
        password=password,
        host=host,
        charset=charset,
        **handle_kwargs,
    )
    handle.connect()
    return handle
