"""Tests for the authorization policy and bearer parsing."""

import pytest
from bson import ObjectId

from resource_hub.core.exceptions import ForbiddenError, UnauthenticatedError
from resource_hub.entities import Category, Resource, Role, User
from resource_hub.middleware.auth import extract_bearer_token
from resource_hub.middleware.rbac import Action, authorize, get_role_actions, is_allowed


def _user(role=Role.LEARNER):
    return User(id=ObjectId(), name="Someone", email="someone@example.com", role=role)


def _resource(owner):
    return Resource(
        id=ObjectId(),
        title="SQL basics",
        description="Joins and indexes",
        category=Category.DATABASE,
        link="https://example.com/sql",
        created_by=owner.id,
    )


class TestIsAllowed:
    def test_anyone_can_view_resources(self):
        assert is_allowed(None, Action.VIEW_RESOURCES)

    def test_anonymous_cannot_create(self):
        assert not is_allowed(None, Action.CREATE_RESOURCE)

    def test_learner_can_engage_and_bookmark(self):
        learner = _user()
        assert is_allowed(learner, Action.CREATE_RESOURCE)
        assert is_allowed(learner, Action.ENGAGE_RESOURCE)
        assert is_allowed(learner, Action.MANAGE_BOOKMARKS)

    def test_learner_cannot_list_users(self):
        assert not is_allowed(_user(), Action.LIST_USERS)
        assert not is_allowed(_user(), Action.VIEW_STATS)

    def test_creator_can_update_and_delete_own_resource(self):
        owner = _user()
        resource = _resource(owner)
        assert is_allowed(owner, Action.UPDATE_RESOURCE, resource)
        assert is_allowed(owner, Action.DELETE_RESOURCE, resource)

    def test_other_learner_cannot_update(self):
        resource = _resource(_user())
        assert not is_allowed(_user(), Action.UPDATE_RESOURCE, resource)

    def test_admin_can_do_everything(self):
        admin = _user(Role.ADMIN)
        resource = _resource(_user())
        assert is_allowed(admin, Action.DELETE_RESOURCE, resource)
        assert get_role_actions(Role.ADMIN.value) == set(Action)

    def test_unknown_role_has_no_actions(self):
        assert get_role_actions("guest") == set()


class TestAuthorize:
    def test_missing_identity_is_unauthenticated(self):
        with pytest.raises(UnauthenticatedError):
            authorize(None, Action.ENGAGE_RESOURCE)

    def test_public_action_needs_no_identity(self):
        authorize(None, Action.VIEW_RESOURCES)

    def test_non_creator_update_is_forbidden(self):
        with pytest.raises(ForbiddenError) as exc_info:
            authorize(_user(), Action.UPDATE_RESOURCE, _resource(_user()))
        assert exc_info.value.message == "Not authorized to update this resource"

    def test_learner_listing_users_is_forbidden(self):
        with pytest.raises(ForbiddenError) as exc_info:
            authorize(_user(), Action.LIST_USERS)
        assert exc_info.value.status_code == 403


@pytest.mark.parametrize(
    "header, expected",
    [
        ("Bearer abc.def", "abc.def"),
        ("bearer  abc.def ", "abc.def"),
        ("Basic abc", None),
        ("Bearer ", None),
        ("", None),
        (None, None),
    ],
)
def test_extract_bearer_token(header, expected):
    assert extract_bearer_token(header) == expected
