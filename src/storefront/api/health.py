# src/storefront/api/health.py
from datetime import datetime

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from storefront.api.schemas import HealthResponse
from storefront.db.client import DbClient


def health_router(db_client: DbClient, version: str, start_time: datetime) -> APIRouter:
    """
    Health check routes for API monitoring.

    - `GET /health`: status, version, uptime and database connectivity
    - `GET /health/ping`: plain `pong` for load balancers
    """
    router = APIRouter(prefix="/health", tags=["Health"])

    @router.get("", response_model=HealthResponse, summary="Health check")
    def health_check() -> HealthResponse:
        is_connected = db_client.test_connection()
        return HealthResponse(
            status="healthy" if is_connected else "degraded",
            timestamp=datetime.now(),
            version=version,
            uptime=(datetime.now() - start_time).total_seconds(),
            database_connected=is_connected,
        )

    @router.get("/ping", response_class=PlainTextResponse, summary="Ping")
    def ping() -> str:
        return "pong"

    return router
