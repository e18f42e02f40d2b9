"""User repository for database operations"""

from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from bson import ObjectId
from pymongo.database import Database

from resource_hub.entities.enums import Role
from resource_hub.entities.user import User

from .base import BaseRepository

# Never load the hash unless checking credentials
WITHOUT_PASSWORD = {"password_hash": 0}


class UserRepository(BaseRepository[User]):
    """Repository for user entities"""

    def __init__(self, db: Database):
        super().__init__(db, "users", User)

    def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by (already normalized) email, including the password hash."""
        return self.find_one({"email": email})

    def find_identity(self, user_id: str | ObjectId) -> Optional[User]:
        """Find a user by ID without the password hash."""
        return self.find_by_id(user_id, projection=WITHOUT_PASSWORD)

    def list_all(self) -> List[User]:
        """List all users sorted by creation date, newest first."""
        return self.find_many(
            {}, sort=[("created_at", -1), ("_id", -1)], projection=WITHOUT_PASSWORD
        )

    def create_user(self, name: str, email: str, password_hash: str) -> User:
        """Create a new account.

        The role is always ``learner``; this is the only place a role is
        assigned, and it takes no role argument. Promotions happen in the
        store directly (see ``scripts/set_admin.py``).
        """
        user = User(
            name=name,
            email=email,
            password_hash=password_hash,
            role=Role.LEARNER,
            bookmarks=[],
        )
        return self.insert_one(user)

    def toggle_bookmark(
        self, user_id: str | ObjectId, resource_id: ObjectId
    ) -> Tuple[Optional[User], bool]:
        """Add or remove a resource from the user's bookmarks."""
        return self.toggle_member(
            user_id, "bookmarks", resource_id, projection=WITHOUT_PASSWORD
        )

    def find_summaries(self, user_ids: List[ObjectId]) -> Dict[ObjectId, User]:
        """Load name/email for a batch of users, keyed by id."""
        if not user_ids:
            return {}
        users = self.find_many(
            {"_id": {"$in": list(set(user_ids))}},
            projection={"name": 1, "email": 1, "role": 1, "created_at": 1},
        )
        return {u.id: u for u in users}

    def count_by_role(self) -> Dict[str, int]:
        """Count users per role."""
        counts = {role.value: 0 for role in Role}
        for row in self.collection.aggregate([{"$group": {"_id": "$role", "count": {"$sum": 1}}}]):
            counts[row["_id"]] = row["count"]
        return counts

    def set_role(self, email: str, role: Role) -> bool:
        """Direct role edit for operator scripts. Not reachable from the API."""
        result = self.collection.update_one(
            {"email": email},
            {"$set": {"role": role.value, "updated_at": datetime.now(timezone.utc)}},
        )
        return result.matched_count > 0
