"""
Unified operator definitions.

This module provides a single source of truth for all operators
understood by the chat store.
"""

from enum import Enum


class SearchOperator(Enum):
    """Field comparison operators."""

    # Equality operators
    EQUALS = "EQUALS"
    NOT_EQUAL = "NOT_EQUAL"

    # Null checks
    IS_NULL = "IS_NULL"
    NOT_NULL = "NOT_NULL"

    # Comparison operators
    GREATER_THAN = "GREATER_THAN"
    GREATER_OR_EQUAL = "GREATER_OR_EQUAL"
    LESS_THAN = "LESS_THAN"
    LESS_OR_EQUAL = "LESS_OR_EQUAL"


class LogicalOperator(Enum):
    """Logical operators for combining search conditions."""

    AND = "and"
    OR = "or"


class SortDirection(Enum):
    """Sort direction for ordered searches."""

    ASC = "asc"
    DESC = "desc"
