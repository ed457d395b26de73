"""Database interaction components for the storefront API."""

from storefront.db.client import DbClient, DbConfig, PoolConfig
from storefront.db.models import Base, Product, Review, User
from storefront.db.query import ModelQuery, ProductStore

__all__ = [
    "DbClient",
    "DbConfig",
    "PoolConfig",
    "Base",
    "Product",
    "Review",
    "User",
    "ModelQuery",
    "ProductStore",
]
