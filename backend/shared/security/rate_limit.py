"""
Rate limiting utilities using slowapi.
Protects the public registration endpoint from abuse.

Storage is slowapi's in-memory backend: limits are per process.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from shared.config.settings import settings
from shared.config.logging import get_logger

logger = get_logger(__name__)

# Create limiter instance using client IP as key
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

REGISTRATION_LIMIT = settings.registration_rate_limit


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Render rate limit errors in the API's ``{"error": ...}`` shape.
    """
    logger.warning(
        "Rate limit exceeded",
        path=request.url.path,
        ip_address=get_remote_address(request),
        limit=str(exc.detail),
    )
    return JSONResponse(
        status_code=429,
        content={"error": f"Too many requests: {exc.detail}"},
        headers={"Retry-After": "60"},
    )
