"""
Structured clause records for the query builder.

Each record renders its own SQL fragment together with the values bound to
that fragment's placeholders, so placeholders and parameters can never drift
apart.
"""

from dataclasses import dataclass, field
from typing import Any, List, Tuple

PLACEHOLDER = "?"

# Rendered for an empty IN list; always false and binds nothing
ALWAYS_FALSE = "1 = 0"


@dataclass(frozen=True)
class Predicate:
    """A single ``column operator ?`` comparison."""

    column: str
    operator: str
    value: Any

    def render(self) -> Tuple[str, List[Any]]:
        if self.value is None and self.operator == "=":
            return f"{self.column} IS NULL", []
        if self.value is None and self.operator in ("!=", "<>"):
            return f"{self.column} IS NOT NULL", []
        return f"{self.column} {self.operator} {PLACEHOLDER}", [self.value]


@dataclass(frozen=True)
class InPredicate:
    """A ``column IN (?, ?, ...)`` membership test."""

    column: str
    values: Tuple[Any, ...] = field(default_factory=tuple)

    def render(self) -> Tuple[str, List[Any]]:
        if not self.values:
            return ALWAYS_FALSE, []
        placeholders = ", ".join(PLACEHOLDER for _ in self.values)
        return f"{self.column} IN ({placeholders})", list(self.values)


@dataclass(frozen=True)
class Join:
    """An INNER or LEFT join against the builder's current table."""

    kind: str
    table: str
    foreign_column: str
    operator: str
    local_table: str
    local_column: str

    def render(self) -> str:
        return (
            f"{self.kind} JOIN {self.table} ON {self.local_table}.{self.local_column} "
            f"{self.operator} {self.table}.{self.foreign_column}"
        )


def render_conditions(keyword: str, predicates) -> Tuple[str, List[Any]]:
    """
    Render predicates as `` KEYWORD a AND b ...``.

    Args:
        keyword: WHERE or HAVING
        predicates: Sequence of Predicate/InPredicate records

    Returns:
        Tuple of (clause, values); clause is empty when there are no predicates
    """
    if not predicates:
        return "", []

    parts = []
    values: List[Any] = []
    for predicate in predicates:
        sql, bound = predicate.render()
        parts.append(sql)
        values.extend(bound)

    return f" {keyword} {' AND '.join(parts)}", values
