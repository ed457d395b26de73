# src/storefront/api/reviews.py
"""Product review routes."""

from typing import Callable

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.api.auth import AuthGuard
from storefront.api.schemas import ReviewIn, ReviewOut, ReviewsResponse, SuccessResponse
from storefront.core.logging import color_palette, log
from storefront.db.models import Product, Review, User
from storefront.services.catalog import average_rating


def refresh_review_stats(product: Product) -> None:
    """Recompute the cached average rating and review count of a product."""
    product.ratings = average_rating(r.rating for r in product.reviews)
    product.num_of_reviews = len(product.reviews)


class ReviewRoutes:
    """Registers the review endpoints on a router."""

    def __init__(self, router: APIRouter, db_dependency: Callable[..., Session], auth: AuthGuard):
        self.router = router
        self.db_dependency = db_dependency
        self.auth = auth

    @staticmethod
    def _get_product_or_404(db: Session, product_id: int) -> Product:
        product = db.get(Product, product_id)
        if product is None:
            raise HTTPException(status_code=404, detail="Product Not Found")
        return product

    def upsert(self) -> None:
        @self.router.put("/review", response_model=SuccessResponse, summary="Create or update a review")
        def create_product_review(
            review: ReviewIn,
            db: Session = Depends(self.db_dependency),
            user: User = Depends(self.auth.current_user),
        ) -> SuccessResponse:
            product = self._get_product_or_404(db, review.product_id)

            existing = next((r for r in product.reviews if r.user_id == user.id), None)
            if existing is not None:
                existing.rating = review.rating
                existing.comment = review.comment
            else:
                product.reviews.append(
                    Review(user_id=user.id, name=user.name, rating=review.rating, comment=review.comment)
                )

            refresh_review_stats(product)
            db.commit()
            log.info(
                f"{color_palette['user'](user.name)} rated product #{product.id} "
                f"{review.rating} (avg {product.ratings:.2f})"
            )
            return SuccessResponse()

    def read(self) -> None:
        @self.router.get(
            "/admin/reviews", response_model=ReviewsResponse, summary="Get all reviews of a product"
        )
        def get_product_reviews(
            product_id: int = Query(..., alias="id"),
            db: Session = Depends(self.db_dependency),
        ) -> ReviewsResponse:
            product = self._get_product_or_404(db, product_id)
            return ReviewsResponse(reviews=[ReviewOut.model_validate(r) for r in product.reviews])

    def delete(self) -> None:
        @self.router.delete("/admin/reviews", response_model=SuccessResponse, summary="Delete a review")
        def delete_review(
            product_id: int = Query(..., alias="productId"),
            review_id: int = Query(..., alias="id"),
            db: Session = Depends(self.db_dependency),
            _: User = Depends(self.auth.current_user),
        ) -> SuccessResponse:
            product = self._get_product_or_404(db, product_id)

            product.reviews = [r for r in product.reviews if r.id != review_id]
            refresh_review_stats(product)
            db.commit()
            log.info(f"Removed review #{review_id} from product #{product.id}")
            return SuccessResponse()

    def generate_all(self) -> None:
        self.upsert()
        self.read()
        self.delete()
