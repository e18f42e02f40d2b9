"""Repository for learning resources."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId
from pymongo.database import Database

from resource_hub.entities.resource import Resource

from .base import BaseRepository
from .resource_filter import ResourceFilter


class ResourceRepository(BaseRepository[Resource]):
    """Repository for Resource entities."""

    def __init__(self, db: Database) -> None:
        super().__init__(db, "resources", Resource)

    def create_resource(self, resource: Resource) -> Resource:
        return self.insert_one(resource)

    def search(self, resource_filter: ResourceFilter) -> Tuple[List[Resource], int]:
        """One page of resources matching the filter, plus the total match count."""
        return self.paginate(
            resource_filter.to_query(),
            sort=resource_filter.to_sort(),
            skip=resource_filter.skip,
            limit=resource_filter.limit,
        )

    def find_by_creator(self, user_id: ObjectId) -> List[Resource]:
        """All resources created by a user, newest first."""
        return self.find_many(
            {"created_by": user_id}, sort=[("created_at", -1), ("_id", -1)]
        )

    def find_by_ids(self, resource_ids: List[ObjectId]) -> Dict[ObjectId, Resource]:
        """Load the resources that still exist, keyed by id."""
        if not resource_ids:
            return {}
        found = self.find_many({"_id": {"$in": list(resource_ids)}})
        return {r.id: r for r in found}

    def update_fields(self, resource_id: ObjectId, updates: Dict[str, Any]) -> Optional[Resource]:
        """Set editable fields on a resource."""
        updates = {**updates, "updated_at": datetime.now(timezone.utc)}
        return self.find_one_and_update({"_id": resource_id}, {"$set": updates})

    def toggle_like(self, resource_id: ObjectId, user_id: ObjectId) -> Tuple[Optional[Resource], bool]:
        """Like if not yet liked by the user, otherwise unlike."""
        return self.toggle_member(resource_id, "likes", user_id, counter_field="likes_count")

    def replace_ratings(
        self,
        resource_id: ObjectId,
        expected_revision: int,
        ratings: List[Dict[str, Any]],
        average_rating: float,
    ) -> Optional[Resource]:
        """
        Compare-and-set write of ratings and their average.

        Applies only if the stored revision still equals ``expected_revision``;
        returns None otherwise (someone else wrote first).
        """
        return self.find_one_and_update(
            {"_id": resource_id, "revision": expected_revision},
            {
                "$set": {
                    "ratings": ratings,
                    "average_rating": average_rating,
                    "updated_at": datetime.now(timezone.utc),
                },
                "$inc": {"revision": 1},
            },
        )

    def count_all(self) -> int:
        return self.count({})
