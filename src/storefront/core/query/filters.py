# src/storefront/core/query/filters.py
"""
Typed field filters built from query parameters.

A parameter is either a plain value (`category=Electronics`), which becomes a
`ScalarFilter` matched by equality, or a mapping of comparison operators
(`price[gte]=100`), which becomes a `RangeFilter`. Range operands are coerced
to numbers here; scalar values are handed to the store untouched.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from rich.markup import escape

from storefront.core.logging import log
from storefront.core.query.operators import is_range_operator, to_store_operator

Number = Union[int, float]
Scalar = Union[str, int, float, bool]

# Parameters consumed by search and pagination, never used as filters.
EXCLUDED_KEYS = frozenset({"keyword", "page", "limit"})


@dataclass(frozen=True)
class ScalarFilter:
    """Exact-match equality on a single field."""

    field: str
    value: Scalar

    def predicate(self) -> Scalar:
        return self.value


@dataclass(frozen=True)
class RangeFilter:
    """One or more comparison bounds on a single field, keyed by `$`-operator."""

    field: str
    bounds: Tuple[Tuple[str, Number], ...]

    def predicate(self) -> Dict[str, Number]:
        return dict(self.bounds)


FieldFilter = Union[ScalarFilter, RangeFilter]


def coerce_number(value: Any) -> Optional[Number]:
    """Return `value` as an int or float, or None when it is not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    # nan/inf never compare usefully against stored values
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return number


def _range_filter(field: str, operators: Mapping[str, Any]) -> Optional[RangeFilter]:
    bounds = {}
    for operator, operand in operators.items():
        if not is_range_operator(str(operator)):
            log.warn(f"Ignoring unknown operator '{escape(str(operator))}' on field '{escape(field)}'")
            continue
        number = coerce_number(operand)
        if number is None:
            log.warn(
                f"Ignoring non-numeric bound {escape(repr(operand))} "
                f"for '{escape(field)}' ({escape(str(operator))})"
            )
            continue
        bounds[to_store_operator(str(operator))] = number

    if not bounds:
        return None
    return RangeFilter(field=field, bounds=tuple(sorted(bounds.items())))


def parse_filters(params: Mapping[str, Any]) -> Tuple[FieldFilter, ...]:
    """Build filters from every parameter except the reserved ones."""
    remaining = {k: v for k, v in params.items() if k not in EXCLUDED_KEYS}

    filters = []
    for field, value in remaining.items():
        if isinstance(value, Mapping):
            range_filter = _range_filter(field, value)
            if range_filter is not None:
                filters.append(range_filter)
        elif isinstance(value, (str, int, float, bool)):
            filters.append(ScalarFilter(field=field, value=value))
        else:
            log.warn(f"Ignoring filter '{escape(field)}' with unsupported value {escape(repr(value))}")
    return tuple(filters)


def merge_filters(
    existing: Iterable[FieldFilter], incoming: Iterable[FieldFilter]
) -> Tuple[FieldFilter, ...]:
    """Combine two filter sets; a field in `incoming` replaces the same field in `existing`."""
    by_field: Dict[str, FieldFilter] = {f.field: f for f in existing}
    for item in incoming:
        by_field[item.field] = item
    return tuple(by_field.values())


def build_predicate(filters: Iterable[FieldFilter]) -> Dict[str, Any]:
    """Render filters as the store predicate, e.g. `{"price": {"$gte": 100}}`."""
    return {f.field: f.predicate() for f in filters}
