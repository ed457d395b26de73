# src/storefront/core/query/operators.py

# Range operators accepted in API query params, e.g. `?price[gte]=100`.
RANGE_OPERATORS = ('gt', 'gte', 'lt', 'lte')

# Prefix marking a comparison operator inside a refined filter predicate.
OPERATOR_PREFIX = '$'

# Maps refined operators to SQLAlchemy column methods.
# For example, `{"price": {"$gte": 100}}` will call `Column.__ge__(100)`.
OPERATOR_MAP = {
    '$gt': '__gt__',     # Greater Than
    '$gte': '__ge__',    # Greater Than or Equal
    '$lt': '__lt__',     # Less Than
    '$lte': '__le__',    # Less Than or Equal
}


def to_store_operator(operator: str) -> str:
    """`gte` -> `$gte`; already-prefixed operators keep a single prefix."""
    return f"{OPERATOR_PREFIX}{operator.lstrip(OPERATOR_PREFIX)}"


def is_range_operator(operator: str) -> bool:
    return operator.lstrip(OPERATOR_PREFIX) in RANGE_OPERATORS
