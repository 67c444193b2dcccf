"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.routes.health import API_VERSION
from api.routes.health import router as health_router
from api.v1 import router as v1_router
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import limiter, rate_limit_exceeded_handler
from infrastructure.database.session import engine

logger = structlog.get_logger()

API_DESCRIPTION = """\
Log hours against projects and categories, then filter, search and export them.

Writing `#hashtags` in a description tags the hour. Every create, update and
delete is kept in an audit trail together with the user who made it. Lists of
hours can be downloaded as CSV with the same filters as the JSON listing.

Send `Authorization: Bearer <token>` on every request except `/health`.
Reads are limited to {read} and writes to {write} per client.
""".format(read=settings.rate_limit_read, write=settings.rate_limit_write)

OPENAPI_TAGS = (
    ("health", "Liveness and database checks"),
    ("hours", "Logging, filtering, searching and exporting hours"),
    ("tags", "Tags derived from hour descriptions"),
    ("users", "Per-user exports"),
    ("clients", "Clients projects are billed to"),
    ("projects", "Projects hours are logged against"),
    ("categories", "Kinds of work"),
)

setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Dispose of the connection pool on shutdown."""
    logger.info("application_started", environment=settings.app_env)
    yield
    await engine.dispose()
    logger.info("application_stopped")


def _configure_middleware(app: FastAPI) -> None:
    """Rate limiting, request tracking, compression and CORS.

    Starlette runs middleware in reverse order of registration, so the last
    one added sees the request first.
    """
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", "X-Request-ID"],
    )


def create_app() -> FastAPI:
    """Build the ASGI application with middleware, error handlers and routes."""
    app = FastAPI(
        title=settings.app_name,
        description=API_DESCRIPTION,
        version=API_VERSION,
        debug=settings.debug,
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        openapi_tags=[{"name": name, "description": text} for name, text in OPENAPI_TAGS],
    )

    _configure_middleware(app)
    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
