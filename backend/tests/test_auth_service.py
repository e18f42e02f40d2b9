"""Tests for registration, login, password hashing and token handling."""

from datetime import timedelta

import pytest
from bson import ObjectId
from jose import jwt

from resource_hub.config import settings
from resource_hub.core.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidTokenError,
    UserNotFoundError,
    ValidationError,
)
from resource_hub.entities.enums import Role
from resource_hub.repositories.user import UserRepository
from resource_hub.services.auth import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

PASSWORD = "secret123"


class TestPasswords:
    def test_hash_verifies(self):
        hashed = hash_password(PASSWORD)

        assert hashed != PASSWORD
        assert verify_password(PASSWORD, hashed)
        assert not verify_password("wrong-password", hashed)

    def test_missing_hash_never_verifies(self):
        assert not verify_password(PASSWORD, None)

    def test_garbage_hash_never_verifies(self):
        assert not verify_password(PASSWORD, "not-a-hash")


class TestTokens:
    def test_round_trip_subject(self):
        user_id = ObjectId()

        claims = decode_access_token(create_access_token(user_id))

        assert claims["sub"] == str(user_id)
        assert claims["type"] == "access"

    def test_expired_token_is_rejected(self):
        token = create_access_token(ObjectId(), expires_delta=timedelta(seconds=-5))

        with pytest.raises(InvalidTokenError):
            decode_access_token(token)

    def test_token_signed_with_another_key_is_rejected(self):
        token = jwt.encode(
            {"sub": str(ObjectId()), "type": "access"}, "not-the-secret", algorithm="HS256"
        )

        with pytest.raises(InvalidTokenError):
            decode_access_token(token)

    def test_token_of_another_type_is_rejected(self):
        token = jwt.encode(
            {"sub": str(ObjectId()), "type": "refresh"}, settings.SECRET_KEY, algorithm="HS256"
        )

        with pytest.raises(InvalidTokenError):
            decode_access_token(token)


class TestRegister:
    def test_new_account_is_a_learner(self, auth_service, db):
        data = auth_service.register("Lena", "lena@example.com", PASSWORD)

        assert data.user.role == Role.LEARNER.value
        assert data.token
        stored = db.users.find_one({"email": "lena@example.com"})
        assert stored["role"] == "learner"
        assert stored["password_hash"] != PASSWORD

    def test_email_is_normalized(self, auth_service):
        data = auth_service.register("Lena", "  Lena@Example.COM ", PASSWORD)

        assert data.user.email == "lena@example.com"

    def test_duplicate_email_is_rejected(self, auth_service):
        auth_service.register("Lena", "lena@example.com", PASSWORD)

        with pytest.raises(DuplicateEmailError) as exc_info:
            auth_service.register("Other", "LENA@example.com", PASSWORD)
        assert exc_info.value.message == "User already exists with this email"

    def test_missing_fields_are_listed(self, auth_service):
        with pytest.raises(ValidationError) as exc_info:
            auth_service.register(None, None, None)
        assert exc_info.value.message == "Please provide name, email, and password"

    def test_short_password_is_rejected(self, auth_service):
        with pytest.raises(ValidationError) as exc_info:
            auth_service.register("Lena", "lena@example.com", "123")
        assert exc_info.value.details[0]["field"] == "password"

    def test_malformed_email_is_rejected(self, auth_service):
        with pytest.raises(ValidationError):
            auth_service.register("Lena", "not-an-email", PASSWORD)

    def test_long_name_is_rejected(self, auth_service):
        with pytest.raises(ValidationError):
            auth_service.register("x" * 51, "lena@example.com", PASSWORD)


class TestLogin:
    def test_login_is_case_insensitive_on_email(self, auth_service):
        auth_service.register("Ann", "A@X.com", PASSWORD)

        data = auth_service.login("a@x.com", PASSWORD)

        assert data.user.email == "a@x.com"
        assert decode_access_token(data.token)["sub"] == data.user.id

    def test_wrong_password_and_unknown_email_look_the_same(self, auth_service):
        auth_service.register("Lena", "lena@example.com", PASSWORD)

        with pytest.raises(InvalidCredentialsError) as wrong_password:
            auth_service.login("lena@example.com", "wrong-password")
        with pytest.raises(InvalidCredentialsError) as unknown_email:
            auth_service.login("nobody@example.com", PASSWORD)

        assert wrong_password.value.message == unknown_email.value.message == "Invalid credentials"
        assert wrong_password.value.code == unknown_email.value.code
        assert wrong_password.value.status_code == 401


class TestResolve:
    def test_resolves_identity_without_password_hash(self, auth_service):
        data = auth_service.register("Lena", "lena@example.com", PASSWORD)

        user = auth_service.resolve(data.token)

        assert str(user.id) == data.user.id
        assert user.password_hash is None

    def test_deleted_user_is_rejected(self, auth_service, db):
        data = auth_service.register("Lena", "lena@example.com", PASSWORD)
        UserRepository(db).delete_one(data.user.id)

        with pytest.raises(UserNotFoundError):
            auth_service.resolve(data.token)

    def test_garbage_token_is_rejected(self, auth_service):
        with pytest.raises(InvalidTokenError):
            auth_service.resolve("not.a.token")
