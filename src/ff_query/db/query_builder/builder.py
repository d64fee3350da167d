"""
Fluent MySQL query builder.

Clause methods record structured state and return the builder for chaining;
terminal methods render SQL with positional ``?`` placeholders, execute it
through a connection handle and reset the builder for reuse.
"""

from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ...utils.validation import validate_direction, validate_non_negative_int, validate_operator
from .clauses import PLACEHOLDER, InPredicate, Join, Predicate, render_conditions

if TYPE_CHECKING:
    from ..mysql import MySQLBase

Row = Dict[str, Any]


class QueryBuilder:
    """
    Mutable, single-owner query builder bound to one table and one handle.

    Clauses are rendered in a fixed order (SELECT, JOIN, WHERE, GROUP BY,
    HAVING, ORDER BY, LIMIT, OFFSET) no matter in which order they were
    chained. Values are always bound; table and column names are spliced in
    as given and must come from trusted code.

    A failed terminal call raises QueryError and leaves the accumulated state
    untouched, so the query can be inspected or retried.

    Usage:
        users = QueryBuilder(db, "users")
        rows = users.select(["id", "name"]).where("age", 18, ">=").limit(10).execute()
        users.where("id", 7).update({"name": "Ada"})
    """

    def __init__(self, db: "MySQLBase", table: str):
        """
        Initialize the builder.

        Args:
            db: Connection handle providing read_query, fetch_one and execute
            table: Table the builder targets
        """
        self.db = db
        self.table = table
        self.reset()

    # ==================== Clause Building ====================

    def select(self, columns: Optional[Union[str, Iterable[str]]] = None) -> "QueryBuilder":
        """Set the select list, replacing any earlier one. Defaults to ``*``."""
        if isinstance(columns, str):
            columns = [columns]
        self._columns = list(columns) if columns else ["*"]
        return self

    def from_(self, table: str) -> "QueryBuilder":
        """Retarget the builder at another table."""
        self.table = table
        return self

    def where(self, column: str, value: Any, operator: str = "=") -> "QueryBuilder":
        """
        Add a predicate joined to earlier ones with AND.

        A None value compares with IS NULL (for ``=``) or IS NOT NULL
        (for ``!=``/``<>``).
        """
        self._wheres.append(Predicate(column, validate_operator(operator), value))
        return self

    def where_in(self, column: str, values: Iterable[Any]) -> "QueryBuilder":
        """
        Add a ``column IN (...)`` predicate with one placeholder per value.

        An empty list renders an always-false condition instead of the
        invalid ``IN ()``.
        """
        self._wheres.append(InPredicate(column, tuple(values)))
        return self

    def join(
        self,
        table: str,
        foreign_column: str,
        operator: str = "=",
        local_column: Optional[str] = None,
    ) -> "QueryBuilder":
        """INNER JOIN ``table`` on ``<current>.<local_column> op table.foreign_column``."""
        return self._add_join("INNER", table, foreign_column, operator, local_column)

    def left_join(
        self,
        table: str,
        foreign_column: str,
        operator: str = "=",
        local_column: Optional[str] = None,
    ) -> "QueryBuilder":
        """LEFT JOIN counterpart of join()."""
        return self._add_join("LEFT", table, foreign_column, operator, local_column)

    def order_by(self, column: str, direction: str = "ASC") -> "QueryBuilder":
        self._order_by.append((column, validate_direction(direction)))
        return self

    def group_by(self, *columns: str) -> "QueryBuilder":
        if not columns:
            raise ValueError("group_by() requires at least one column")
        self._group_by.extend(columns)
        return self

    def having(self, column: str, value: Any, operator: str = "=") -> "QueryBuilder":
        """Add a HAVING predicate joined to earlier ones with AND."""
        self._havings.append(Predicate(column, validate_operator(operator), value))
        return self

    def limit(self, limit: int) -> "QueryBuilder":
        self._limit = validate_non_negative_int(limit, "limit")
        return self

    def offset(self, offset: int) -> "QueryBuilder":
        self._offset = validate_non_negative_int(offset, "offset")
        return self

    def reset(self) -> "QueryBuilder":
        """Clear all accumulated clauses, keeping the table and handle."""
        self._columns: Optional[List[str]] = None
        self._joins: List[Join] = []
        self._wheres: List[Union[Predicate, InPredicate]] = []
        self._group_by: List[str] = []
        self._havings: List[Predicate] = []
        self._order_by: List[Tuple[str, str]] = []
        self._limit: Optional[int] = None
        self._offset: Optional[int] = None
        return self

    # ==================== Inspection ====================

    @property
    def is_empty(self) -> bool:
        """True when no clause has been added since the last reset."""
        return not (
            self._columns is not None
            or self._joins
            or self._wheres
            or self._group_by
            or self._havings
            or self._order_by
            or self._limit is not None
            or self._offset is not None
        )

    def to_sql(self) -> Tuple[str, List[Any]]:
        """
        Render the SELECT statement that execute() would send.

        Returns:
            Tuple of (query, params) with params in placeholder order
        """
        columns = ", ".join(self._columns or ["*"])
        where_sql, params = self._where_clause()

        query = f"SELECT {columns} FROM {self.table}{self._join_clause()}{where_sql}"

        if self._group_by:
            query += f" GROUP BY {', '.join(self._group_by)}"

        having_sql, having_params = render_conditions("HAVING", self._havings)
        query += having_sql
        params.extend(having_params)

        if self._order_by:
            order_parts = [f"{column} {direction}" for column, direction in self._order_by]
            query += f" ORDER BY {', '.join(order_parts)}"

        if self._limit is not None:
            query += f" LIMIT {self._limit}"
        if self._offset is not None:
            query += f" OFFSET {self._offset}"

        return query, params

    def get_raw_query(self) -> str:
        """Return the accumulated SELECT without executing it; empty when idle."""
        if self.is_empty:
            return ""
        return self.to_sql()[0]

    def get_params(self) -> List[Any]:
        """Return the values bound to get_raw_query()'s placeholders."""
        if self.is_empty:
            return []
        return self.to_sql()[1]

    @property
    def last_insert_id(self) -> Optional[int]:
        """AUTO_INCREMENT id generated by the handle's most recent write."""
        return self.db.last_insert_id

    @property
    def affected_rows(self) -> int:
        """Row count reported for the handle's most recent write."""
        return self.db.affected_rows

    # ==================== Terminal Operations ====================

    def execute(self) -> List[Row]:
        """
        Run the accumulated SELECT and return all rows.

        Raises:
            QueryError: If the driver rejects the statement
        """
        query, params = self.to_sql()
        rows = self.db.read_query(query, params)
        self.reset()
        return rows

    def insert(self, data: Mapping[str, Any]) -> bool:
        """
        Insert one row built from a column -> value mapping.

        Accumulated WHERE state is ignored and cleared.

        Raises:
            ValueError: If data is empty
            QueryError: If the insert fails
        """
        if not data:
            raise ValueError("insert() requires at least one column")

        columns = ", ".join(data.keys())
        placeholders = ", ".join(PLACEHOLDER for _ in data)
        query = f"INSERT INTO {self.table} ({columns}) VALUES ({placeholders})"

        self.db.execute(query, list(data.values()))
        self.reset()
        return True

    def update(self, data: Mapping[str, Any]) -> bool:
        """
        Update rows matching the accumulated WHERE predicates.

        Without predicates every row in the table is updated.

        Raises:
            ValueError: If data is empty
            QueryError: If the update fails
        """
        if not data:
            raise ValueError("update() requires at least one column")

        set_clause = ", ".join(f"{column} = {PLACEHOLDER}" for column in data)
        where_sql, where_params = self._where_clause()
        query = f"UPDATE {self.table} SET {set_clause}{where_sql}"

        self.db.execute(query, [*data.values(), *where_params])
        self.reset()
        return True

    def delete(self) -> bool:
        """Delete rows matching the accumulated WHERE predicates."""
        where_sql, params = self._where_clause()
        query = f"DELETE FROM {self.table}{where_sql}"

        self.db.execute(query, params)
        self.reset()
        return True

    def count(self, column: str = "*") -> int:
        """
        Count rows matching the accumulated joins and WHERE predicates.

        Returns:
            The count, 0 when nothing matched
        """
        where_sql, params = self._where_clause()
        query = (
            f"SELECT COUNT({column}) AS count FROM {self.table}"
            f"{self._join_clause()}{where_sql}"
        )

        row = self.db.fetch_one(query, params)
        self.reset()
        if not row or row.get("count") is None:
            return 0
        return int(row["count"])

    def exists(self) -> bool:
        """True iff at least one row matches; equivalent to ``count() > 0``."""
        where_sql, params = self._where_clause()
        query = f"SELECT EXISTS(SELECT 1 FROM {self.table}{self._join_clause()}{where_sql}) AS result"

        row = self.db.fetch_one(query, params)
        self.reset()
        if not row or row.get("result") is None:
            return False
        return int(row["result"]) == 1

    def execute_raw(self, query: str, params: Optional[Iterable[Any]] = None) -> List[Row]:
        """
        Run caller-supplied SQL verbatim.

        The builder's accumulated state is neither used nor reset.
        """
        return self.db.read_query(query, list(params or []))

    # ==================== Helpers ====================

    def _add_join(
        self,
        kind: str,
        table: str,
        foreign_column: str,
        operator: str,
        local_column: Optional[str],
    ) -> "QueryBuilder":
        if local_column is None:
            local_column = f"{self.table}_id"
        self._joins.append(
            Join(kind, table, foreign_column, validate_operator(operator), self.table, local_column)
        )
        return self

    def _join_clause(self) -> str:
        return "".join(f" {join.render()}" for join in self._joins)

    def _where_clause(self) -> Tuple[str, List[Any]]:
        return render_conditions("WHERE", self._wheres)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(table={self.table!r}, query={self.get_raw_query()!r})"
