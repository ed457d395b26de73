# src/storefront/core/query/params.py
"""Parsing of raw query-string pairs into nested query parameters."""

import re
from typing import Any, Dict, Iterable, Tuple

# `price[gte]` -> ("price", "gte"). Only one level of nesting is recognised.
_BRACKET_KEY = re.compile(r"^(?P<field>[^\[\]]+)\[(?P<operator>[^\[\]]+)\]$")

QueryParameters = Dict[str, Any]


def parse_query_params(items: Iterable[Tuple[str, Any]]) -> QueryParameters:
    """
    Fold `(key, value)` pairs into a parameter mapping.

    Bracketed keys nest under their field: `price[gte]=100&price[lte]=1000`
    becomes `{"price": {"gte": "100", "lte": "1000"}}`. A repeated plain key
    keeps its last value. When a field appears both plain and bracketed, the
    bracketed (range) form wins.
    """
    params: QueryParameters = {}
    for key, value in items:
        match = _BRACKET_KEY.match(key)
        if match is None:
            if isinstance(params.get(key), dict):
                continue
            params[key] = value
            continue

        field, operator = match.group("field"), match.group("operator")
        nested = params.get(field)
        if not isinstance(nested, dict):
            nested = {}
            params[field] = nested
        nested[operator] = value
    return params
