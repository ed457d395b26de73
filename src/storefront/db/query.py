# src/storefront/db/query.py
"""SQLAlchemy-backed refinable queries and the product store."""

from typing import Any, Dict, List, Mapping, Optional, Type

from pydantic.alias_generators import to_camel
from sqlalchemy import false, inspect
from sqlalchemy.orm import Query, Session

from storefront.core.query.filters import coerce_number
from storefront.core.query.operators import OPERATOR_MAP
from storefront.db.models import Product


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ModelQuery:
    """
    Wraps a `sqlalchemy.orm.Query` for one mapped model.

    Every refinement returns a new ModelQuery; the wrapped Query is generative
    so earlier instances stay usable.
    """

    def __init__(self, model: Type[Any], query: Query):
        self.model = model
        self._query = query
        self._columns = {attr.key: attr for attr in inspect(model).column_attrs}
        # camelCase names as rendered by the API schemas, e.g. cuttedPrice
        self._aliases = {to_camel(key): key for key in self._columns}

    def _derive(self, query: Query) -> "ModelQuery":
        return ModelQuery(self.model, query)

    def _resolve(self, field: str) -> Optional[str]:
        if field in self._columns:
            return field
        return self._aliases.get(field)

    def _column(self, field: str):
        key = self._resolve(field)
        if key is None:
            return None
        return getattr(self.model, key)

    def _python_type(self, field: str) -> Optional[type]:
        column = self._columns[self._resolve(field)].columns[0]
        try:
            return column.type.python_type
        except NotImplementedError:
            return None

    def with_text_match(self, field: str, substring: str) -> "ModelQuery":
        column = self._column(field)
        if column is None:
            return self._derive(self._query.filter(false()))
        pattern = f"%{_escape_like(substring)}%"
        return self._derive(self._query.filter(column.ilike(pattern, escape="\\")))

    def with_filters(self, predicate: Mapping[str, Any]) -> "ModelQuery":
        """
        Apply `{field: value}` equality and `{field: {"$op": bound}}` range filters.

        Unknown fields match nothing. Unknown operators raise ValueError.
        """
        query = self._query
        for field, condition in predicate.items():
            column = self._column(field)
            if column is None:
                query = query.filter(false())
                continue

            if isinstance(condition, Mapping):
                for operator, operand in condition.items():
                    method = OPERATOR_MAP.get(operator)
                    if method is None:
                        raise ValueError(f"Unsupported filter operator '{operator}' on '{field}'")
                    query = query.filter(getattr(column, method)(operand))
                continue

            value = self._bind_scalar(field, condition)
            if value is None:
                query = query.filter(false())
            else:
                query = query.filter(column == value)
        return self._derive(query)

    def _bind_scalar(self, field: str, value: Any) -> Any:
        """Convert a string operand to the column's numeric type; None when it cannot match."""
        python_type = self._python_type(field)
        if python_type not in (int, float) or not isinstance(value, str):
            return value
        return coerce_number(value)

    def skip(self, count: int) -> "ModelQuery":
        return self._derive(self._query.offset(count))

    def limit(self, count: int) -> "ModelQuery":
        return self._derive(self._query.limit(count))

    def execute(self) -> List[Any]:
        return self._query.all()

    def count(self) -> int:
        return self._query.order_by(None).count()


class ProductStore:
    """Product persistence for a single request session."""

    def __init__(self, db: Session):
        self.db = db

    def find_all(self) -> ModelQuery:
        return ModelQuery(Product, self.db.query(Product).order_by(Product.id))

    def count_all(self) -> int:
        return self.db.query(Product).count()

    def get(self, product_id: int) -> Optional[Product]:
        return self.db.get(Product, product_id)

    def create(self, data: Dict[str, Any]) -> Product:
        product = Product(**data)
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def update(self, product: Product, changes: Dict[str, Any]) -> Product:
        for key, value in changes.items():
            setattr(product, key, value)
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete(self, product: Product) -> None:
        self.db.delete(product)
        self.db.commit()
