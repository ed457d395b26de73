"""Main storefront API application."""

import logging
import time
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from rich.markup import escape
from starlette.exceptions import HTTPException

from storefront.api.auth import AuthGuard
from storefront.api.health import health_router
from storefront.api.products import ProductRoutes
from storefront.api.reviews import ReviewRoutes
from storefront.core.config import StoreConfig
from storefront.core.logging import color_palette, log
from storefront.db.client import DbClient, DbConfig
from storefront.services.media import MediaService


class Storefront:
    """Builds the FastAPI application and wires its collaborators."""

    def __init__(
        self,
        config: StoreConfig,
        app: Optional[FastAPI] = None,
        db_client: Optional[DbClient] = None,
        media: Optional[MediaService] = None,
    ):
        self.config = config
        self.app = app or FastAPI()
        self.db_client = db_client or DbClient(DbConfig(url=config.database_url, echo=config.debug_mode))
        self.media = media or MediaService(config.media)
        self.auth = AuthGuard(config.auth, self.db_client.get_db)
        self.start_time = datetime.now()
        self._initialize_app()

    def _initialize_app(self) -> None:
        self.app.title = self.config.project_name
        self.app.version = self.config.version
        self.app.description = self.config.description

        if self.config.author:
            self.app.contact = {"name": self.config.author, "email": self.config.email}
        if self.config.license_info:
            self.app.license_info = self.config.license_info

        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    def configure_request_logging(self) -> None:
        """Log method, path, status and duration of every request."""

        @self.app.middleware("http")
        async def log_requests(request: Request, call_next):
            start = time.perf_counter()
            response = await call_next(request)
            elapsed = (time.perf_counter() - start) * 1000
            log.info(
                f"{color_palette['method'](request.method)} {color_palette['route'](request.url.path)} "
                f"-> {response.status_code} [dim]({elapsed:.1f} ms)[/dim]"
            )
            return response

    def configure_error_handlers(self) -> None:
        """Render every error as `{"success": false, "message": ...}`."""

        @self.app.exception_handler(HTTPException)
        async def http_exception_handler(request: Request, exc: HTTPException):
            return JSONResponse(
                status_code=exc.status_code,
                content={"success": False, "message": exc.detail},
                headers=getattr(exc, "headers", None),
            )

        @self.app.exception_handler(RequestValidationError)
        async def validation_exception_handler(request: Request, exc: RequestValidationError):
            return JSONResponse(
                status_code=422,
                content={"success": False, "message": "Invalid request", "errors": jsonable_encoder(exc.errors())},
            )

        @self.app.exception_handler(Exception)
        async def general_exception_handler(request: Request, exc: Exception):
            log.error(
                f"Unhandled exception on {request.method} {escape(request.url.path)}: {escape(str(exc))}"
            )
            return JSONResponse(
                status_code=500,
                content={
                    "success": False,
                    "message": "Internal server error",
                    "detail": str(exc) if self.config.debug_mode else None,
                },
            )

        log.success("Configured global error handlers")

    def gen_product_routes(self) -> None:
        log.section("Generating Product Routes")
        router = APIRouter(prefix=self.config.api_prefix, tags=["Products"])
        ProductRoutes(
            router=router,
            db_dependency=self.db_client.get_db,
            auth=self.auth,
            media=self.media,
            results_per_page=self.config.results_per_page,
        ).generate_all()
        self.app.include_router(router)
        log.success(f"Generated product routes under {color_palette['route'](self.config.api_prefix)}")

    def gen_review_routes(self) -> None:
        log.section("Generating Review Routes")
        router = APIRouter(prefix=self.config.api_prefix, tags=["Reviews"])
        ReviewRoutes(router=router, db_dependency=self.db_client.get_db, auth=self.auth).generate_all()
        self.app.include_router(router)
        log.success("Generated review routes")

    def gen_auth_routes(self) -> None:
        self.app.include_router(self.auth.router(), prefix=self.config.api_prefix)

    def gen_health_routes(self) -> None:
        self.app.include_router(health_router(self.db_client, self.config.version, self.start_time))
        log.success("Generated health routes")

    def generate_all_routes(self) -> None:
        self.configure_request_logging()
        self.configure_error_handlers()
        self.gen_health_routes()
        self.gen_auth_routes()
        self.gen_product_routes()
        self.gen_review_routes()


def create_app(
    config: Optional[StoreConfig] = None,
    db_client: Optional[DbClient] = None,
    media: Optional[MediaService] = None,
) -> FastAPI:
    """Application factory; creates missing tables on the way."""
    config = config or StoreConfig.from_env()
    log.set_level(logging.DEBUG if config.debug_mode else logging.INFO)
    store = Storefront(config, db_client=db_client, media=media)
    with log.timed("Database initialization"):
        store.db_client.create_all()
    store.generate_all_routes()
    log.info(
        f"Media service: {'cloudinary' if store.media.configured else 'placeholder images'}"
    )
    return store.app
