# src/storefront/core/query/refiner.py
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple

from rich.markup import escape

from storefront.core.logging import log
from storefront.core.query.filters import (
    FieldFilter,
    build_predicate,
    merge_filters,
    parse_filters,
)


class RefinableQuery(Protocol):
    """An unexecuted store query that can be narrowed step by step."""

    def with_text_match(self, field: str, substring: str) -> "RefinableQuery": ...

    def with_filters(self, predicate: Mapping[str, Any]) -> "RefinableQuery": ...

    def skip(self, count: int) -> "RefinableQuery": ...

    def limit(self, count: int) -> "RefinableQuery": ...

    def execute(self) -> List[Any]: ...

    def count(self) -> int: ...


def parse_page(value: Any) -> int:
    """Page number from a raw parameter; anything missing, non-numeric or below 1 is page 1."""
    if isinstance(value, bool):
        return 1
    if isinstance(value, int):
        page = value
    else:
        try:
            page = int(str(value).strip())
        except (TypeError, ValueError):
            if value is not None:
                log.warn(f"Ignoring non-numeric page {escape(repr(value))}")
            return 1
    return page if page >= 1 else 1


@dataclass(frozen=True)
class Refinement:
    """Accumulated refinement steps, independent of the store."""

    keyword: Optional[str] = None
    filters: Tuple[FieldFilter, ...] = ()
    skip: Optional[int] = None
    limit: Optional[int] = None

    @property
    def predicate(self) -> Dict[str, Any]:
        return build_predicate(self.filters)


class QueryRefiner:
    """
    Narrows a store query from request parameters.

    Each step returns a new refiner, so a partially refined instance can be
    reused (e.g. to count the filtered set before paginating it). The query is
    always assembled as search, then filter, then pagination, whatever order
    the steps were called in.
    """

    SEARCH_FIELD = "name"

    def __init__(
        self,
        query: RefinableQuery,
        params: Mapping[str, Any],
        refinement: Optional[Refinement] = None,
    ):
        self.base_query = query
        self.params = dict(params)
        self.refinement = refinement or Refinement()

    def _refine(self, **changes: Any) -> "QueryRefiner":
        return QueryRefiner(self.base_query, self.params, replace(self.refinement, **changes))

    def search(self) -> "QueryRefiner":
        """Match records whose name contains `keyword`, ignoring case."""
        keyword = self.params.get("keyword")
        if not isinstance(keyword, str) or not keyword:
            return self
        return self._refine(keyword=keyword)

    def filter(self) -> "QueryRefiner":
        """Apply every non-reserved parameter as an equality or range filter."""
        filters = merge_filters(self.refinement.filters, parse_filters(self.params))
        return self._refine(filters=filters)

    def pagination(self, results_per_page: int) -> "QueryRefiner":
        """Restrict to one page of `results_per_page` records."""
        page = parse_page(self.params.get("page", 1))
        return self._refine(skip=results_per_page * (page - 1), limit=results_per_page)

    @property
    def predicate(self) -> Dict[str, Any]:
        return self.refinement.predicate

    @property
    def query(self) -> RefinableQuery:
        """The base query with all refinements applied, not yet executed."""
        query = self.base_query
        state = self.refinement

        if state.keyword is not None:
            query = query.with_text_match(self.SEARCH_FIELD, state.keyword)
        if state.filters:
            query = query.with_filters(state.predicate)
        if state.skip:
            query = query.skip(state.skip)
        if state.limit is not None:
            query = query.limit(state.limit)
        return query

    def execute(self) -> List[Any]:
        return self.query.execute()

    def count(self) -> int:
        return self.query.count()
