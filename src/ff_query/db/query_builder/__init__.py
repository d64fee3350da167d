"""
Query builder module for MySQL SQL generation.

Provides the fluent QueryBuilder and the clause records it renders.
"""

from .builder import QueryBuilder
from .clauses import ALWAYS_FALSE, PLACEHOLDER, InPredicate, Join, Predicate

__all__ = [
    "QueryBuilder",
    "Predicate",
    "InPredicate",
    "Join",
    "PLACEHOLDER",
    "ALWAYS_FALSE",
]
