"""
Argument validation for query builder clauses.

Identifiers are passed through unescaped; only the fixed vocabulary that the
builder splices into SQL text (comparison operators, sort directions and
LIMIT/OFFSET literals) is checked here.
"""

from typing import Any

ALLOWED_OPERATORS = frozenset(
    {"=", "!=", "<>", "<", "<=", ">", ">=", "<=>", "LIKE", "NOT LIKE"}
)

ALLOWED_DIRECTIONS = frozenset({"ASC", "DESC"})


def validate_operator(operator: str) -> str:
    """
    Normalize and check a comparison operator.

    Args:
        operator: Comparison operator such as "=" or "like"

    Returns:
        The operator with keywords upper-cased and surrounding whitespace removed

    Raises:
        ValueError: If the operator is not in ALLOWED_OPERATORS
    """
    normalized = " ".join(str(operator).split()).upper()
    if normalized not in ALLOWED_OPERATORS:
        raise ValueError(
            f"Unsupported operator: {operator!r}. Allowed: {', '.join(sorted(ALLOWED_OPERATORS))}"
        )
    return normalized


def validate_direction(direction: str) -> str:
    """Return the upper-cased sort direction, rejecting anything but ASC/DESC."""
    normalized = str(direction).strip().upper()
    if normalized not in ALLOWED_DIRECTIONS:
        raise ValueError(f"Unsupported sort direction: {direction!r}. Use ASC or DESC")
    return normalized


def validate_non_negative_int(value: Any, name: str) -> int:
    """
    Check a LIMIT/OFFSET literal.

    bool is rejected explicitly because it is an int subclass.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value
