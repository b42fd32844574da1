"""
Unified search module for handling all search-related operations.

This module provides a single source of truth for search operations,
using SearchOperator directly throughout the codebase.
"""

from common.search.condition_builder import (
    SearchCondition,
    SearchConditionRequest,
    SearchConditionRequestBuilder,
)
from common.search.condition_evaluator import (
    SearchConditionEvaluator,
)
from common.search.operators import (
    LogicalOperator,
    SearchOperator,
    SortDirection,
)

__all__ = [
    "LogicalOperator",
    "SearchCondition",
    "SearchConditionRequest",
    "SearchConditionRequestBuilder",
    "SearchConditionEvaluator",
    "SearchOperator",
    "SortDirection",
]
