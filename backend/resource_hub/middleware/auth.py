"""Authentication dependencies for FastAPI."""
from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header
from pymongo.database import Database

from resource_hub.core.exceptions import UnauthenticatedError
from resource_hub.database.mongo import get_db
from resource_hub.entities.user import User
from resource_hub.services.auth_service import AuthService


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_current_user(
    authorization: Optional[str] = Header(None),
    db: Database = Depends(get_db),
) -> User:
    """Resolve the caller from the bearer token.

    Raises:
        UnauthenticatedError: no bearer token in the request
        InvalidTokenError: token signature/expiry/shape check failed
        UserNotFoundError: token subject no longer exists
    """
    token = extract_bearer_token(authorization)
    if not token:
        raise UnauthenticatedError()
    return AuthService(db).resolve(token)
