"""Health check endpoints."""

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from infrastructure.database.session import get_async_session

router = APIRouter(tags=["health"])

logger = structlog.get_logger()

API_VERSION = "1.0.0"


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
    version: str
    timestamp: str
    environment: str
    database: str | None = None


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health", response_model=HealthResponse, summary="Basic health check")
async def health_check() -> HealthResponse:
    """Liveness probe. Does not touch the database."""
    return HealthResponse(
        status="healthy",
        service=settings.app_name,
        version=API_VERSION,
        timestamp=_now(),
        environment=settings.app_env,
    )


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Detailed health check",
)
async def detailed_health_check(
    db: AsyncSession = Depends(get_async_session),
) -> HealthResponse:
    """
    Readiness probe including database connectivity.

    Reports `degraded` rather than failing when the database is unreachable.
    """
    try:
        await db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError as exc:
        logger.warning("health_database_unreachable", error=str(exc))
        db_status = f"unhealthy: {type(exc).__name__}"

    return HealthResponse(
        status="healthy" if db_status == "healthy" else "degraded",
        service=settings.app_name,
        version=API_VERSION,
        timestamp=_now(),
        environment=settings.app_env,
        database=db_status,
    )
