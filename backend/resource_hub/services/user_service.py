"""User listing, statistics and bookmarks."""

from typing import List, Tuple

from pymongo.database import Database

from resource_hub.core.exceptions import NotFoundError, UserNotFoundError, translate_store_errors
from resource_hub.dtos.resource import ResourceResponse
from resource_hub.dtos.user import UserResponse, UserStats
from resource_hub.entities.enums import Role
from resource_hub.entities.user import User
from resource_hub.middleware.rbac import Action, authorize
from resource_hub.repositories.resource import ResourceRepository
from resource_hub.repositories.user import UserRepository
from resource_hub.services.auth_service import to_user_response
from resource_hub.services.resource_service import RESOURCE_NOT_FOUND, ResourceService


class UserService:
    def __init__(self, db: Database):
        self.db = db
        self.user_repo = UserRepository(db)
        self.resource_repo = ResourceRepository(db)

    def list_all(self, identity: User) -> List[UserResponse]:
        """All users, newest first (admin only)."""
        authorize(identity, Action.LIST_USERS)
        with translate_store_errors("fetching users"):
            users = self.user_repo.list_all()
        return [to_user_response(u) for u in users]

    def stats(self, identity: User) -> UserStats:
        """Counters for the admin overview."""
        authorize(identity, Action.VIEW_STATS)
        with translate_store_errors("fetching statistics"):
            by_role = self.user_repo.count_by_role()
            total_resources = self.resource_repo.count_all()
        return UserStats(
            total_users=sum(by_role.values()),
            learners=by_role.get(Role.LEARNER.value, 0),
            admins=by_role.get(Role.ADMIN.value, 0),
            total_resources=total_resources,
        )

    def toggle_bookmark(self, identity: User, resource_id: str) -> Tuple[List[str], bool]:
        """Bookmark or unbookmark. Returns the new bookmark ids and True if added."""
        authorize(identity, Action.MANAGE_BOOKMARKS)

        with translate_store_errors("toggling bookmark"):
            resource = self.resource_repo.find_by_id(resource_id)
            if resource is None:
                raise NotFoundError(RESOURCE_NOT_FOUND)
            user, bookmarked = self.user_repo.toggle_bookmark(identity.id, resource.id)

        if user is None:
            raise UserNotFoundError()
        return [str(b) for b in user.bookmarks], bookmarked

    def list_bookmarks(self, identity: User) -> List[ResourceResponse]:
        """The caller's bookmarked resources in bookmark order.

        Bookmarks whose resource has since been deleted are skipped.
        """
        authorize(identity, Action.MANAGE_BOOKMARKS)

        with translate_store_errors("fetching bookmarks"):
            user = self.user_repo.find_identity(identity.id)
            if user is None:
                raise UserNotFoundError()
            found = self.resource_repo.find_by_ids(user.bookmarks)
            resources = [found[b] for b in user.bookmarks if b in found]
            return ResourceService(self.db).to_responses(resources)
