# src/storefront/api/schemas.py
"""Request and response models. JSON keys are camelCase."""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class StoreBaseModel(BaseModel):
    """Base model reading ORM attributes and emitting camelCase keys."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ===== Products =====


class Image(BaseModel):
    """Stored media reference; keys match the media service (`public_id`)."""

    model_config = ConfigDict(from_attributes=True)

    public_id: str
    url: str


class Specification(StoreBaseModel):
    title: Optional[str] = None
    description: Any = None


class Brand(StoreBaseModel):
    name: str
    logo: Optional[Image] = None


class ReviewOut(StoreBaseModel):
    id: int
    user_id: int
    name: str
    rating: float
    comment: str = ""


class ProductOut(StoreBaseModel):
    id: int
    name: str
    description: str
    highlights: List[str] = []
    specifications: List[Specification] = []
    price: float
    cutted_price: float
    images: List[Image] = []
    brand: Brand
    category: str
    stock: int
    warranty: int
    ratings: float = 0
    num_of_reviews: int = 0
    reviews: List[ReviewOut] = []
    user_id: Optional[int] = None
    created_at: Optional[datetime] = None


class ProductUpdate(StoreBaseModel):
    """Partial update; `images` and `logo` are URLs or data URIs to upload."""

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    cutted_price: Optional[float] = Field(default=None, ge=0)
    category: Optional[str] = None
    stock: Optional[int] = Field(default=None, ge=0)
    warranty: Optional[int] = Field(default=None, ge=0)
    highlights: Optional[List[str]] = None
    specifications: Optional[List[Union[str, Dict[str, Any]]]] = None
    images: Optional[List[str]] = None
    logo: Optional[str] = None
    brandname: Optional[str] = Field(default=None, alias="brandname")


class ProductsResponse(StoreBaseModel):
    success: bool = True
    products: List[ProductOut]
    products_count: Optional[int] = None
    result_per_page: Optional[int] = None
    filtered_products_count: Optional[int] = None


class ProductResponse(StoreBaseModel):
    success: bool = True
    message: Optional[str] = None
    product: ProductOut


# ===== Reviews =====


class ReviewIn(StoreBaseModel):
    product_id: int
    rating: float = Field(ge=0, le=5)
    comment: str = ""


class ReviewsResponse(StoreBaseModel):
    success: bool = True
    reviews: List[ReviewOut]


# ===== Misc =====


class SuccessResponse(StoreBaseModel):
    success: bool = True


class UserOut(StoreBaseModel):
    id: int
    name: str
    email: str
    role: str


class AuthCheckResponse(StoreBaseModel):
    success: bool = True
    message: str = "Authentication successful"
    user: UserOut


class HealthResponse(StoreBaseModel):
    status: str
    timestamp: datetime
    version: str
    uptime: float
    database_connected: bool
