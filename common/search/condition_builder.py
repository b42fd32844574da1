"""
Search condition builder for constructing search queries.

Provides a fluent API for building search conditions, including nested
and/or groups and ordering, using SearchOperator.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple, Union

from common.search.operators import LogicalOperator, SearchOperator, SortDirection


@dataclass
class SearchCondition:
    """A single search condition."""

    field: str
    operator: SearchOperator
    value: Any = None


@dataclass
class SearchConditionRequest:
    """Complex search request with multiple conditions."""

    conditions: List[Union[SearchCondition, "SearchConditionRequest"]]
    operator: str = "and"
    limit: Optional[int] = None
    offset: Optional[int] = None
    order_by: List[Tuple[str, SortDirection]] = field(default_factory=list)

    @classmethod
    def builder(cls) -> "SearchConditionRequestBuilder":
        """Create a builder for SearchConditionRequest."""
        return SearchConditionRequestBuilder()


class SearchConditionRequestBuilder:
    """Fluent builder for SearchConditionRequest."""

    def __init__(self) -> None:
        self._conditions: List[Union[SearchCondition, SearchConditionRequest]] = []
        self._operator = "and"
        self._limit: Optional[int] = None
        self._offset: Optional[int] = None
        self._order_by: List[Tuple[str, SortDirection]] = []

    def add_condition(
        self, field: str, operator: SearchOperator, value: Any = None
    ) -> "SearchConditionRequestBuilder":
        """Add a search condition."""
        self._conditions.append(SearchCondition(field, operator, value))
        return self

    def equals(self, field: str, value: Any) -> "SearchConditionRequestBuilder":
        """Add equals condition."""
        return self.add_condition(field, SearchOperator.EQUALS, value)

    def less_than(self, field: str, value: Any) -> "SearchConditionRequestBuilder":
        """Add less-than condition."""
        return self.add_condition(field, SearchOperator.LESS_THAN, value)

    def greater_than(self, field: str, value: Any) -> "SearchConditionRequestBuilder":
        """Add greater-than condition."""
        return self.add_condition(field, SearchOperator.GREATER_THAN, value)

    def group(self, request: SearchConditionRequest) -> "SearchConditionRequestBuilder":
        """Add a nested condition group."""
        self._conditions.append(request)
        return self

    def operator(self, op: LogicalOperator) -> "SearchConditionRequestBuilder":
        """Set logical operator (and/or)."""
        self._operator = op.value
        return self

    def order_by(
        self, field: str, direction: SortDirection = SortDirection.ASC
    ) -> "SearchConditionRequestBuilder":
        """Append a sort key; earlier keys take precedence."""
        self._order_by.append((field, direction))
        return self

    def limit(self, limit: int) -> "SearchConditionRequestBuilder":
        """Set result limit."""
        self._limit = limit
        return self

    def offset(self, offset: int) -> "SearchConditionRequestBuilder":
        """Set result offset."""
        self._offset = offset
        return self

    def build(self) -> SearchConditionRequest:
        """Build the search request."""
        return SearchConditionRequest(
            conditions=self._conditions,
            operator=self._operator,
            limit=self._limit,
            offset=self._offset,
            order_by=self._order_by,
        )
