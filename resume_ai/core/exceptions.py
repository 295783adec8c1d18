from __future__ import annotations

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from resume_ai.core.errors import ErrorKind
from resume_ai.services.envelopes import error_reply

logger = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "Dữ liệu yêu cầu không hợp lệ"
INTERNAL_ERROR_MESSAGE = "Lỗi hệ thống. Vui lòng thử lại sau."


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = sorted({".".join(str(part) for part in error.get("loc", ())) for error in exc.errors()})
    logger.info("request_rejected kind=%s path=%s fields=%s", ErrorKind.INVALID_REQUEST.value, request.url.path, fields)
    return error_reply(ErrorKind.INVALID_REQUEST, INVALID_REQUEST_MESSAGE).to_response()


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_exception path=%s error=%s", request.url.path, exc, exc_info=True)
    return error_reply(ErrorKind.UPSTREAM_FAILURE, INTERNAL_ERROR_MESSAGE).to_response()
