"""Rate limiting configuration using slowapi."""

import structlog
from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from core.config import settings
from core.exceptions import ErrorCode

logger = structlog.get_logger()


def client_address(request: Request) -> str:
    """Rate limit key: first hop of X-Forwarded-For behind a proxy, else the peer."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    return get_remote_address(request)


limiter = Limiter(
    key_func=client_address,
    enabled=settings.rate_limit_enabled,
)

READ_LIMIT = settings.rate_limit_read
WRITE_LIMIT = settings.rate_limit_write


async def rate_limit_exceeded_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render rate limit rejections in the API error envelope."""
    detail = exc.detail if isinstance(exc, RateLimitExceeded) else str(exc)
    logger.warning("rate_limit_exceeded", client=client_address(request), limit=str(detail))
    return JSONResponse(
        status_code=429,
        content={
            "error_code": ErrorCode.RATE_LIMIT_EXCEEDED.value,
            "message": f"Rate limit exceeded: {detail}",
            "details": {"limit": str(detail)},
        },
    )
