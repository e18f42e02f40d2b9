"""Authentication utilities: password hashing and JWT access tokens."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from resource_hub.config import settings
from resource_hub.core.exceptions import InvalidTokenError


@lru_cache(maxsize=1)
def get_password_context() -> CryptContext:
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=settings.BCRYPT_ROUNDS,
    )


def hash_password(password: str) -> str:
    return get_password_context().hash(password)


def verify_password(password: str, hashed: Optional[str]) -> bool:
    """Check a password against a stored hash.

    With no stored hash a dummy verification still runs, so an unknown
    account costs the same time as a wrong password.
    """
    context = get_password_context()
    if not hashed:
        context.dummy_verify()
        return False
    try:
        return context.verify(password, hashed)
    except ValueError:
        # Stored value is not a recognizable hash
        return False


def create_access_token(subject: str | Any, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token for the application.

    Args:
        subject: User ID to encode in the token
        expires_delta: Token lifetime (defaults to ACCESS_TOKEN_EXPIRE_DAYS)

    Returns:
        Encoded JWT token string
    """
    if expires_delta is None:
        expires_delta = timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)

    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": str(subject),
        "exp": now + expires_delta,
        "iat": now,
        "type": "access",
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode and validate a JWT access token.

    Signature and expiry are checked by ``jwt.decode``.

    Raises:
        InvalidTokenError: If token is invalid, expired, malformed or not an access token
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise InvalidTokenError() from None

    if payload.get("type") != "access" or not payload.get("sub"):
        raise InvalidTokenError()
    return payload
