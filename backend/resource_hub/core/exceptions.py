"""Domain exceptions raised by services and mapped to HTTP by the API layer."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from pymongo.errors import PyMongoError

from resource_hub.middleware.error_codes import ErrorCode

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base exception for every failure a service reports to its caller."""

    status_code: int = 500
    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: str | None = None,
        *,
        details: list[dict[str, Any]] | None = None,
        detail: str | None = None,
    ):
        self.message = message or self.default_message
        self.details = details or []
        # Diagnostic text (e.g. the underlying driver error); only surfaced in debug mode
        self.detail = detail
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing, malformed or out-of-range input."""

    status_code = 400
    code = ErrorCode.VALIDATION_ERROR
    default_message = "Invalid input"


class DuplicateEmailError(AppError):
    status_code = 400
    code = ErrorCode.DUPLICATE_EMAIL
    default_message = "User already exists with this email"


class UnauthenticatedError(AppError):
    """No usable identity on an action that requires one."""

    status_code = 401
    code = ErrorCode.UNAUTHENTICATED
    default_message = "Not authorized, no token provided"


class InvalidCredentialsError(UnauthenticatedError):
    # Same message for unknown email and wrong password
    code = ErrorCode.INVALID_CREDENTIALS
    default_message = "Invalid credentials"


class InvalidTokenError(UnauthenticatedError):
    code = ErrorCode.INVALID_TOKEN
    default_message = "Not authorized, token failed"


class UserNotFoundError(UnauthenticatedError):
    code = ErrorCode.USER_NOT_FOUND
    default_message = "User not found"


class ForbiddenError(AppError):
    status_code = 403
    code = ErrorCode.FORBIDDEN
    default_message = "Access denied"


class NotFoundError(AppError):
    status_code = 404
    code = ErrorCode.NOT_FOUND
    default_message = "Not found"


class InternalError(AppError):
    status_code = 500
    code = ErrorCode.INTERNAL_ERROR


@contextmanager
def translate_store_errors(operation: str) -> Iterator[None]:
    """
    Re-raise driver failures as InternalError.

    Usage:
        with translate_store_errors("creating resource"):
            self.resource_repo.create_resource(resource)

    The driver message is kept on ``InternalError.detail``.
    """
    try:
        yield
    except PyMongoError as exc:
        logger.error("Store failure while %s: %s", operation, exc)
        raise InternalError(f"Error {operation}", detail=str(exc)) from exc
