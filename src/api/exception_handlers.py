"""Exception handlers for the FastAPI application."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import settings
from core.exceptions import AppException, ErrorCode

logger = structlog.get_logger()


def _error(status_code: int, error_code: str, message: str, details: object = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error_code": error_code, "message": message, "details": details},
    )


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Render domain errors with their own status and code."""
        logger.warning(
            "app_exception",
            error_code=exc.error_code.value,
            status_code=exc.status_code,
            message=exc.message,
        )
        return _error(exc.status_code, exc.error_code.value, exc.message, exc.details)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle HTTP exceptions from FastAPI/Starlette (unknown routes, bad methods)."""
        return _error(exc.status_code, "HTTP_ERROR", str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle Pydantic validation errors of bodies and parameters."""
        logger.info("validation_error", errors=exc.errors())
        return _error(
            422,
            ErrorCode.VALIDATION_ERROR.value,
            "Request validation failed",
            [
                {
                    "field": ".".join(str(x) for x in error["loc"]),
                    "message": error["msg"],
                    "type": error["type"],
                }
                for error in exc.errors()
            ],
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        """Database failures are reported without leaking SQL in production."""
        request_id = _request_id(request)
        logger.error(
            "database_error",
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )
        message = "A database error occurred"
        if not settings.is_production:
            message = str(exc)
        return _error(500, ErrorCode.DATABASE_ERROR.value, message, {"request_id": request_id})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        request_id = _request_id(request)
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )

        message = "An unexpected error occurred"
        if not settings.is_production:
            message = str(exc)

        return _error(500, ErrorCode.INTERNAL_ERROR.value, message, {"request_id": request_id})
