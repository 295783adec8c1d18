from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from resume_ai.core.config import settings

logger = logging.getLogger(__name__)

RATE_LIMITED_MESSAGE = "Bạn gửi quá nhiều yêu cầu. Vui lòng thử lại sau ít phút."

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def rate_limit():
    """Per-client limit for the resume endpoints; a no-op when limiting is disabled."""
    if settings.rate_limit_enabled:
        return limiter.limit(settings.rate_limit)

    def decorator(func):
        return func

    return decorator


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning(
        "rate_limited path=%s client=%s limit=%s",
        request.url.path,
        get_remote_address(request),
        exc.detail,
    )
    body = {"success": False, "message": RATE_LIMITED_MESSAGE, "error": RATE_LIMITED_MESSAGE}
    return JSONResponse(status_code=429, content=body)
