# src/storefront/api/products.py
"""Product catalog routes."""

from typing import Callable, List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from sqlalchemy.orm import Session

from storefront.api.auth import AuthGuard
from storefront.api.schemas import (
    ProductOut,
    ProductResponse,
    ProductsResponse,
    ProductUpdate,
    SuccessResponse,
)
from storefront.core.logging import color_palette, log
from storefront.core.query import QueryRefiner, parse_query_params
from storefront.db.models import Product, User
from storefront.db.query import ProductStore
from storefront.services.catalog import (
    DEFAULT_WARRANTY,
    normalize_highlights,
    parse_specifications,
    replace_brand_logo,
    replace_product_images,
    resolve_product_media,
)
from storefront.services.media import FileUpload, MediaService


def _to_file_upload(upload: UploadFile) -> FileUpload:
    return FileUpload(
        filename=upload.filename or "upload",
        content=upload.file.read(),
        content_type=upload.content_type or "application/octet-stream",
    )


class ProductRoutes:
    """Registers the product catalog endpoints on a router."""

    def __init__(
        self,
        router: APIRouter,
        db_dependency: Callable[..., Session],
        auth: AuthGuard,
        media: MediaService,
        results_per_page: int = 12,
    ):
        self.router = router
        self.db_dependency = db_dependency
        self.auth = auth
        self.media = media
        self.results_per_page = results_per_page
        self.admin = auth.require_roles("admin")

    @staticmethod
    def _get_or_404(store: ProductStore, product_id: int) -> Product:
        product = store.get(product_id)
        if product is None:
            raise HTTPException(status_code=404, detail="Product Not Found")
        return product

    @staticmethod
    def _serialize(products: List[Product]) -> List[ProductOut]:
        return [ProductOut.model_validate(p) for p in products]

    def list_products(self) -> None:
        """Add the searchable, filterable, paginated listing."""

        @self.router.get(
            "/products",
            response_model=ProductsResponse,
            response_model_exclude_none=True,
            summary="Get all products with pagination and filtering",
            description=(
                "Query parameters: `keyword` (name search), `page`, field filters such as "
                "`category=Electronics` and ranges such as `price[gte]=100&price[lte]=1000`."
            ),
        )
        def get_all_products(
            request: Request, db: Session = Depends(self.db_dependency)
        ) -> ProductsResponse:
            store = ProductStore(db)
            params = parse_query_params(request.query_params.multi_items())

            if not params:
                products = store.find_all().execute()
                return ProductsResponse(
                    products=self._serialize(products), products_count=len(products)
                )

            products_count = store.count_all()
            refiner = QueryRefiner(store.find_all(), params).search().filter()
            filtered_products_count = refiner.count()
            products = refiner.pagination(self.results_per_page).execute()

            log.info(
                f"Listed {len(products)}/{filtered_products_count} products "
                f"for {color_palette['value'](refiner.predicate or '{}')}"
            )
            return ProductsResponse(
                products=self._serialize(products),
                products_count=products_count,
                result_per_page=self.results_per_page,
                filtered_products_count=filtered_products_count,
            )

    def list_all(self) -> None:
        @self.router.get(
            "/products/all",
            response_model=ProductsResponse,
            response_model_exclude_none=True,
            summary="Get all products without pagination",
        )
        def get_products(db: Session = Depends(self.db_dependency)) -> ProductsResponse:
            return ProductsResponse(products=self._serialize(ProductStore(db).find_all().execute()))

        @self.router.get(
            "/admin/products",
            response_model=ProductsResponse,
            response_model_exclude_none=True,
            summary="Get all products (admin)",
        )
        def get_admin_products(
            db: Session = Depends(self.db_dependency), _: User = Depends(self.admin)
        ) -> ProductsResponse:
            return ProductsResponse(products=self._serialize(ProductStore(db).find_all().execute()))

    def read(self) -> None:
        @self.router.get(
            "/product/{product_id}",
            response_model=ProductResponse,
            response_model_exclude_none=True,
            summary="Get product details by ID",
        )
        def get_product_details(
            product_id: int, db: Session = Depends(self.db_dependency)
        ) -> ProductResponse:
            product = self._get_or_404(ProductStore(db), product_id)
            return ProductResponse(product=ProductOut.model_validate(product))

    def create(self) -> None:
        @self.router.post(
            "/admin/product/new",
            response_model=ProductResponse,
            response_model_exclude_none=True,
            status_code=201,
            summary="Create a new product (admin)",
        )
        def create_product(
            name: str = Form(...),
            description: str = Form(...),
            price: float = Form(..., ge=0),
            discount_price: Optional[float] = Form(None, alias="discountPrice"),
            category: str = Form(...),
            stock: int = Form(..., ge=0),
            brandname: str = Form(...),
            warranty: Optional[int] = Form(None),
            highlights: Optional[List[str]] = Form(None),
            specifications: Optional[List[str]] = Form(None),
            images: Optional[List[UploadFile]] = File(None),
            logo: Optional[UploadFile] = File(None),
            db: Session = Depends(self.db_dependency),
            user: User = Depends(self.admin),
        ) -> ProductResponse:
            log.info(f"Creating product {color_palette['value'](name)} as {color_palette['user'](user.name)}")

            image_sources = [_to_file_upload(f) for f in images or [] if f.filename]
            logo_source = _to_file_upload(logo) if logo is not None and logo.filename else None
            images_link, brand_logo = resolve_product_media(self.media, image_sources, logo_source)

            product = ProductStore(db).create(
                {
                    "name": name,
                    "description": description,
                    "price": price,
                    "cutted_price": discount_price or price,
                    "category": category,
                    "stock": stock,
                    "warranty": warranty or DEFAULT_WARRANTY,
                    "images": images_link,
                    "brand_name": brandname,
                    "brand_logo": brand_logo,
                    "user_id": user.id,
                    "highlights": normalize_highlights(highlights),
                    "specifications": parse_specifications(specifications),
                }
            )
            log.success(f"Created product #{product.id}")
            return ProductResponse(
                message="Product created successfully", product=ProductOut.model_validate(product)
            )

    def update(self) -> None:
        @self.router.put(
            "/admin/product/{product_id}",
            response_model=ProductResponse,
            response_model_exclude_none=True,
            status_code=201,
            summary="Update a product (admin)",
        )
        def update_product(
            product_id: int,
            payload: ProductUpdate,
            db: Session = Depends(self.db_dependency),
            user: User = Depends(self.admin),
        ) -> ProductResponse:
            store = ProductStore(db)
            product = self._get_or_404(store, product_id)

            changes = payload.model_dump(
                exclude_none=True, exclude={"images", "logo", "brandname", "specifications"}
            )
            if payload.images is not None:
                changes["images"] = replace_product_images(self.media, product.images or [], payload.images)
            if payload.logo:
                changes["brand_logo"] = replace_brand_logo(self.media, product.brand_logo or {}, payload.logo)
            if payload.brandname:
                changes["brand_name"] = payload.brandname
            if payload.specifications is not None:
                changes["specifications"] = parse_specifications(payload.specifications)
            changes["user_id"] = user.id

            product = store.update(product, changes)
            log.success(f"Updated product #{product.id}: {', '.join(sorted(changes))}")
            return ProductResponse(product=ProductOut.model_validate(product))

    def delete(self) -> None:
        @self.router.delete(
            "/admin/product/{product_id}",
            response_model=SuccessResponse,
            status_code=201,
            summary="Delete a product (admin)",
        )
        def delete_product(
            product_id: int,
            db: Session = Depends(self.db_dependency),
            _: User = Depends(self.admin),
        ) -> SuccessResponse:
            store = ProductStore(db)
            product = self._get_or_404(store, product_id)
            self.media.destroy_many(product.images or [])
            store.delete(product)
            log.success(f"Deleted product #{product_id}")
            return SuccessResponse()

    def generate_all(self) -> None:
        """Register every product route. Static paths go before parameterised ones."""
        self.list_products()
        self.list_all()
        self.read()
        self.create()
        self.update()
        self.delete()
