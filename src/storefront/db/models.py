# src/storefront/db/models.py
"""ORM models for users, products and reviews."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(255), unique=True)
    role: Mapped[str] = mapped_column(String(20), default="user")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)


class Product(Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), index=True)
    description: Mapped[str] = mapped_column(Text)
    highlights: Mapped[List[str]] = mapped_column(JSON, default=list)
    # [{"title": ..., "description": ...}]
    specifications: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, default=list)
    price: Mapped[float] = mapped_column(Float)
    cutted_price: Mapped[float] = mapped_column(Float)
    # [{"public_id": ..., "url": ...}]
    images: Mapped[List[Dict[str, str]]] = mapped_column(JSON, default=list)
    brand_name: Mapped[str] = mapped_column(String(100))
    brand_logo: Mapped[Dict[str, str]] = mapped_column(JSON, default=dict)
    category: Mapped[str] = mapped_column(String(100), index=True)
    stock: Mapped[int] = mapped_column(Integer, default=1)
    warranty: Mapped[int] = mapped_column(Integer, default=1)
    ratings: Mapped[float] = mapped_column(Float, default=0)
    num_of_reviews: Mapped[int] = mapped_column(Integer, default=0)
    user_id: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    reviews: Mapped[List["Review"]] = relationship(
        back_populates="product",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="Review.id",
    )

    @property
    def brand(self) -> Dict[str, Any]:
        return {"name": self.brand_name, "logo": self.brand_logo or None}


class Review(Base):
    __tablename__ = "reviews"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id", ondelete="CASCADE"))
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"))
    name: Mapped[str] = mapped_column(String(100))
    rating: Mapped[float] = mapped_column(Float)
    comment: Mapped[str] = mapped_column(Text, default="")

    product: Mapped[Product] = relationship(back_populates="reviews")
