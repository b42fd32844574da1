"""
Search condition evaluator for in-process stores.

Applies a SearchConditionRequest (filter, ordering, offset, limit) to a
sequence of row dictionaries.
"""

import logging
from functools import cmp_to_key
from typing import Any, Dict, Iterable, List

from common.search.condition_builder import SearchCondition, SearchConditionRequest
from common.search.operators import SearchOperator, SortDirection

logger = logging.getLogger(__name__)


class SearchConditionEvaluator:
    """Evaluates search conditions against plain dictionaries."""

    @staticmethod
    def matches(request: SearchConditionRequest, row: Dict[str, Any]) -> bool:
        """Check whether a row satisfies the request's conditions."""
        if not request.conditions:
            return True

        results = (
            SearchConditionEvaluator.matches(cond, row)
            if isinstance(cond, SearchConditionRequest)
            else SearchConditionEvaluator._condition_matches(cond, row)
            for cond in request.conditions
        )
        if request.operator.lower() == "or":
            return any(results)
        return all(results)

    @staticmethod
    def _condition_matches(condition: SearchCondition, row: Dict[str, Any]) -> bool:
        """Evaluate a single SearchCondition."""
        actual = row.get(condition.field)
        expected = condition.value
        op = condition.operator

        if op == SearchOperator.IS_NULL:
            return actual is None
        if op == SearchOperator.NOT_NULL:
            return actual is not None
        if op == SearchOperator.EQUALS:
            return actual == expected
        if op == SearchOperator.NOT_EQUAL:
            return actual != expected

        # Ordered comparisons never match missing values
        if actual is None or expected is None:
            return False
        if op == SearchOperator.GREATER_THAN:
            return actual > expected
        if op == SearchOperator.GREATER_OR_EQUAL:
            return actual >= expected
        if op == SearchOperator.LESS_THAN:
            return actual < expected
        if op == SearchOperator.LESS_OR_EQUAL:
            return actual <= expected

        raise ValueError(f"Unsupported operator: {op}")

    @staticmethod
    def _compare(request: SearchConditionRequest, left: Dict, right: Dict) -> int:
        for field, direction in request.order_by:
            a, b = left.get(field), right.get(field)
            if a == b:
                continue
            result = -1 if a < b else 1
            return -result if direction == SortDirection.DESC else result
        return 0

    @staticmethod
    def apply(
        request: SearchConditionRequest, rows: Iterable[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        """Filter, sort and slice rows according to the request."""
        matched = [row for row in rows if SearchConditionEvaluator.matches(request, row)]

        if request.order_by:
            matched.sort(
                key=cmp_to_key(
                    lambda a, b: SearchConditionEvaluator._compare(request, a, b)
                )
            )

        start = request.offset or 0
        end = start + request.limit if request.limit is not None else None
        return matched[start:end]
