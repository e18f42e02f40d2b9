"""Global exception handlers for standardized error responses.

Catches AppError, HTTPException, RequestValidationError, and unhandled
exceptions so every failure uses the same ``{success: false, ...}`` envelope.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from resource_hub.config import settings
from resource_hub.core.exceptions import AppError
from resource_hub.core.validation import describe_errors
from resource_hub.middleware.error_codes import ErrorCode, get_error_code

logger = logging.getLogger("resource_hub.exception")


def build_error_response(
    request: Request,
    status_code: int,
    code: ErrorCode,
    message: str,
    details: list[dict[str, Any]] | None = None,
    diagnostic: str | None = None,
) -> JSONResponse:
    """Build standardized error response."""
    error: dict[str, Any] = {
        "code": code.value,
        "request_id": getattr(request.state, "request_id", None),
    }
    if details:
        error["details"] = details
    if diagnostic and settings.DEBUG:
        error["detail"] = diagnostic

    body = {"success": False, "message": message, "error": error}
    return JSONResponse(status_code=status_code, content=body)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle domain errors raised by services and dependencies."""
    if exc.status_code >= 500:
        logger.error(
            "%s status=%s message=%s detail=%s request_id=%s",
            type(exc).__name__,
            exc.status_code,
            exc.message,
            exc.detail,
            getattr(request.state, "request_id", None),
        )

    return build_error_response(
        request=request,
        status_code=exc.status_code,
        code=exc.code,
        message=exc.message,
        details=exc.details,
        diagnostic=exc.detail,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle framework HTTP errors (unknown route, wrong method)."""
    return build_error_response(
        request=request,
        status_code=exc.status_code,
        code=get_error_code(exc.status_code),
        message=str(exc.detail),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request body/query validation errors as 400 with field-level details."""
    message, details = describe_errors(exc.errors())
    return build_error_response(
        request=request,
        status_code=400,
        code=ErrorCode.VALIDATION_ERROR,
        message=message,
        details=details,
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unhandled exceptions - returns 500 with minimal info."""
    # Log full exception for debugging
    logger.exception(
        "Unhandled exception request_id=%s path=%s",
        getattr(request.state, "request_id", None),
        request.url.path,
    )

    return build_error_response(
        request=request,
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        message="Server Error",
        diagnostic=str(exc),
    )
