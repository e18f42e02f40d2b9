"""
Authorization policy.

This module is the only place access decisions are made:
- Action enum for every protected operation
- Role-to-actions mapping
- Creator-or-admin rule for editing a resource
- Dependency factory for route protection

Whatever the client hides or shows in its UI has no bearing here.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Set

from fastapi import Depends

from resource_hub.core.exceptions import ForbiddenError, UnauthenticatedError
from resource_hub.entities.enums import Role
from resource_hub.entities.resource import Resource
from resource_hub.entities.user import User
from resource_hub.middleware.auth import get_current_user


class Action(str, Enum):
    """Operations subject to the policy."""

    # Public reads
    VIEW_RESOURCES = "resources:view"

    # Any authenticated identity
    CREATE_RESOURCE = "resources:create"
    ENGAGE_RESOURCE = "resources:engage"  # like / rate
    MANAGE_BOOKMARKS = "bookmarks:manage"
    VIEW_OWN_RESOURCES = "resources:own"

    # Creator or admin
    UPDATE_RESOURCE = "resources:update"
    DELETE_RESOURCE = "resources:delete"

    # Admin only
    LIST_USERS = "users:list"
    VIEW_STATS = "users:stats"


PUBLIC_ACTIONS: Set[Action] = {Action.VIEW_RESOURCES}

# Granted to a learner only on resources they created
OWNER_ACTIONS: Set[Action] = {Action.UPDATE_RESOURCE, Action.DELETE_RESOURCE}

ROLE_ACTIONS: dict[str, Set[Action]] = {
    Role.ADMIN.value: set(Action),
    Role.LEARNER.value: {
        Action.VIEW_RESOURCES,
        Action.CREATE_RESOURCE,
        Action.ENGAGE_RESOURCE,
        Action.MANAGE_BOOKMARKS,
        Action.VIEW_OWN_RESOURCES,
    },
}

_DENIED_MESSAGES = {
    Action.UPDATE_RESOURCE: "Not authorized to update this resource",
    Action.DELETE_RESOURCE: "Not authorized to delete this resource",
    Action.LIST_USERS: "Access denied. Admin privileges required.",
    Action.VIEW_STATS: "Access denied. Admin privileges required.",
}


def get_role_actions(role: Optional[str]) -> Set[Action]:
    """Get all actions a role may perform unconditionally."""
    return ROLE_ACTIONS.get(role, set())


def is_creator(identity: User, resource: Resource) -> bool:
    return identity.id is not None and str(resource.created_by) == str(identity.id)


def is_allowed(identity: Optional[User], action: Action, resource: Optional[Resource] = None) -> bool:
    """Pure allow/deny decision for (identity, action, resource)."""
    if action in PUBLIC_ACTIONS:
        return True
    if identity is None:
        return False
    if action in get_role_actions(identity.role):
        return True
    if action in OWNER_ACTIONS and resource is not None:
        return is_creator(identity, resource)
    return False


def authorize(identity: Optional[User], action: Action, resource: Optional[Resource] = None) -> None:
    """
    Raise unless the identity may perform the action.

    Raises:
        UnauthenticatedError: no identity on an action that needs one
        ForbiddenError: identity present but not permitted
    """
    if action in PUBLIC_ACTIONS:
        return
    if identity is None:
        raise UnauthenticatedError()
    if not is_allowed(identity, action, resource):
        raise ForbiddenError(_DENIED_MESSAGES.get(action, "Access denied"))


class RequirePermission:
    """
    Dependency class for role-level checks on a route.

    Usage:
        @router.get("/")
        def list_users(admin: User = Depends(RequirePermission(Action.LIST_USERS))):
            ...

    Per-resource rules (creator or admin) need the resource and are applied
    in the service layer with ``authorize``.
    """

    def __init__(self, action: Action):
        self.action = action

    async def __call__(self, user: User = Depends(get_current_user)) -> User:
        authorize(user, self.action)
        return user

