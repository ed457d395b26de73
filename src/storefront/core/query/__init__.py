"""Turning request query parameters into refined store queries."""

from storefront.core.query.filters import (
    EXCLUDED_KEYS,
    FieldFilter,
    RangeFilter,
    ScalarFilter,
    build_predicate,
    coerce_number,
    parse_filters,
)
from storefront.core.query.params import QueryParameters, parse_query_params
from storefront.core.query.refiner import QueryRefiner, RefinableQuery, Refinement, parse_page

__all__ = [
    "EXCLUDED_KEYS",
    "FieldFilter",
    "RangeFilter",
    "ScalarFilter",
    "build_predicate",
    "coerce_number",
    "parse_filters",
    "QueryParameters",
    "parse_query_params",
    "QueryRefiner",
    "RefinableQuery",
    "Refinement",
    "parse_page",
]
