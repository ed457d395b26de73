"""
storefront: e-commerce catalog API with searchable, filterable product listings.
"""

from storefront.core.config import StoreConfig
from storefront.core.query import QueryRefiner, parse_query_params
from storefront.store import Storefront, create_app

__version__ = "1.0.0"

__all__ = ["StoreConfig", "QueryRefiner", "parse_query_params", "Storefront", "create_app"]
