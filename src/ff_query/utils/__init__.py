"""
ff-query utility modules.
"""

from .validation import (
    ALLOWED_DIRECTIONS,
    ALLOWED_OPERATORS,
    validate_direction,
    validate_non_negative_int,
    validate_operator,
)

__all__ = [
    "ALLOWED_DIRECTIONS",
    "ALLOWED_OPERATORS",
    "validate_direction",
    "validate_non_negative_int",
    "validate_operator",
]
