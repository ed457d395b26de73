"""API route components for the storefront."""

from storefront.api.auth import AuthGuard
from storefront.api.health import health_router
from storefront.api.products import ProductRoutes
from storefront.api.reviews import ReviewRoutes

__all__ = ["AuthGuard", "ProductRoutes", "ReviewRoutes", "health_router"]
