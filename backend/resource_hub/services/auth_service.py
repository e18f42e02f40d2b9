"""Registration, login and token resolution."""

from __future__ import annotations

import logging

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from resource_hub.core.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    UserNotFoundError,
    translate_store_errors,
)
from resource_hub.core.validation import provided, validate_payload
from resource_hub.dtos.user import AuthData, LoginRequest, RegisterRequest, UserResponse
from resource_hub.entities.user import User
from resource_hub.repositories.user import UserRepository
from resource_hub.services.auth import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)


def to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        name=user.name,
        email=user.email,
        role=user.role,
        bookmarks=[str(b) for b in user.bookmarks],
        created_at=user.created_at,
    )


class AuthService:
    """Verifies credentials and maps bearer tokens to identities."""

    def __init__(self, db: Database):
        self.db = db
        self.user_repo = UserRepository(db)

    def register(self, name: str, email: str, password: str) -> AuthData:
        payload = validate_payload(
            RegisterRequest, provided(name=name, email=email, password=password)
        )

        with translate_store_errors("registering user"):
            if self.user_repo.find_by_email(payload.email):
                raise DuplicateEmailError()
            try:
                user = self.user_repo.create_user(
                    name=payload.name,
                    email=payload.email,
                    password_hash=hash_password(payload.password),
                )
            except DuplicateKeyError:
                # Lost a race with a concurrent registration
                raise DuplicateEmailError() from None

        logger.info("Registered user %s", user.id)
        return AuthData(user=to_user_response(user), token=create_access_token(user.id))

    def login(self, email: str, password: str) -> AuthData:
        payload = validate_payload(LoginRequest, provided(email=email, password=password))

        with translate_store_errors("logging in"):
            user = self.user_repo.find_by_email(payload.email)

        stored_hash = user.password_hash if user else None
        if not verify_password(payload.password, stored_hash):
            raise InvalidCredentialsError()

        return AuthData(user=to_user_response(user), token=create_access_token(user.id))

    def resolve(self, token: str) -> User:
        """Return the identity a token was issued for (without password hash)."""
        claims = decode_access_token(token)
        with translate_store_errors("fetching user"):
            user = self.user_repo.find_identity(claims["sub"])
        if user is None:
            raise UserNotFoundError()
        return user
