"""Shared fixtures: an in-memory MongoDB, seeded accounts and an API client."""

import os

# Cheap hashing for tests; must be set before settings are loaded
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENV", "test")

import mongomock
import pytest
from fastapi.testclient import TestClient

from resource_hub.database.ensure_indexes import ensure_indexes
from resource_hub.database.mongo import get_db
from resource_hub.entities.enums import Role
from resource_hub.main import app
from resource_hub.repositories.user import UserRepository
from resource_hub.services.auth_service import AuthService
from resource_hub.services.resource_service import ResourceService
from resource_hub.services.user_service import UserService

PASSWORD = "secret123"


@pytest.fixture
def db():
    client = mongomock.MongoClient()
    database = client["resource_hub_test"]
    ensure_indexes(database)
    yield database
    client.close()


@pytest.fixture
def auth_service(db):
    return AuthService(db)


@pytest.fixture
def resource_service(db):
    return ResourceService(db)


@pytest.fixture
def user_service(db):
    return UserService(db)


@pytest.fixture
def make_user(db, auth_service):
    """Register an account (optionally promoted) and return its identity."""
    repo = UserRepository(db)

    def _make(name, email, role=Role.LEARNER):
        data = auth_service.register(name, email, PASSWORD)
        if role == Role.ADMIN:
            repo.set_role(data.user.email, Role.ADMIN)
        return repo.find_identity(data.user.id)

    return _make


@pytest.fixture
def learner(make_user):
    return make_user("Lena Learner", "lena@example.com")


@pytest.fixture
def other_learner(make_user):
    return make_user("Omar Other", "omar@example.com")


@pytest.fixture
def admin(make_user):
    return make_user("Ada Admin", "ada@example.com", role=Role.ADMIN)


@pytest.fixture
def make_resource(resource_service):
    def _make(owner, title="Intro to Go", description="A tour of Go", category="Other",
              link="https://go.dev/tour"):
        return resource_service.create(owner, title, description, category, link)

    return _make


@pytest.fixture
def client(db):
    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    # Not entered as a context manager: startup would try a real MongoDB
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    """Register through the API and return bearer headers for that account."""

    def _headers(name="Lena Learner", email="lena@example.com"):
        response = client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": PASSWORD},
        )
        assert response.status_code == 201, response.text
        token = response.json()["data"]["token"]
        return {"Authorization": f"Bearer {token}"}

    return _headers
