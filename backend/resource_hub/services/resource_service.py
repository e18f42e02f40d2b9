"""Resource CRUD, listing, likes and ratings."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Tuple

from bson import ObjectId
from pymongo.database import Database

from resource_hub.config import settings
from resource_hub.core.exceptions import (
    InternalError,
    NotFoundError,
    ValidationError,
    translate_store_errors,
)
from resource_hub.core.validation import provided, validate_payload
from resource_hub.dtos.common import PagedResponse
from resource_hub.dtos.resource import (
    CreatorSummary,
    RatingResponse,
    ResourceCreateRequest,
    ResourceListData,
    ResourceResponse,
    ResourceUpdateRequest,
)
from resource_hub.entities.resource import Resource
from resource_hub.entities.user import User
from resource_hub.middleware.rbac import Action, authorize
from resource_hub.repositories.resource import ResourceRepository
from resource_hub.repositories.resource_filter import ResourceFilter
from resource_hub.repositories.user import UserRepository
from resource_hub.services.rating import (
    compute_average_rating,
    upsert_rating,
    validate_rating_value,
)

logger = logging.getLogger(__name__)

RESOURCE_NOT_FOUND = "Resource not found"


class ResourceService:
    """
    Service for learning resources.

    API -> Service -> Repository -> Database
    """

    def __init__(self, db: Database):
        self.db = db
        self.resource_repo = ResourceRepository(db)
        self.user_repo = UserRepository(db)

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    def to_responses(self, resources: List[Resource]) -> List[ResourceResponse]:
        """Convert entities to DTOs with the creator's name/email filled in."""
        creators = self.user_repo.find_summaries([r.created_by for r in resources])
        return [self._to_response(r, creators.get(r.created_by)) for r in resources]

    def to_response(self, resource: Resource) -> ResourceResponse:
        return self.to_responses([resource])[0]

    @staticmethod
    def _to_response(resource: Resource, creator: Optional[User]) -> ResourceResponse:
        return ResourceResponse(
            id=str(resource.id),
            title=resource.title,
            description=resource.description,
            category=resource.category,
            link=resource.link,
            created_by=CreatorSummary(
                id=str(resource.created_by),
                name=creator.name if creator else None,
                email=creator.email if creator else None,
            ),
            likes=[str(u) for u in resource.likes],
            likes_count=len(resource.likes),
            ratings=[RatingResponse(user=str(r.user), value=r.value) for r in resource.ratings],
            average_rating=resource.average_rating,
            created_at=resource.created_at,
            updated_at=resource.updated_at,
        )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def _get_entity(self, resource_id: str | ObjectId) -> Resource:
        with translate_store_errors("fetching resource"):
            resource = self.resource_repo.find_by_id(resource_id)
        if resource is None:
            raise NotFoundError(RESOURCE_NOT_FOUND)
        return resource

    def get(self, resource_id: str) -> ResourceResponse:
        resource = self._get_entity(resource_id)
        with translate_store_errors("fetching resource"):
            return self.to_response(resource)

    def list(self, resource_filter: ResourceFilter) -> PagedResponse[ResourceListData]:
        """One page of resources for the filter, with total and page count."""
        with translate_store_errors("fetching resources"):
            resources, total = self.resource_repo.search(resource_filter)
            items = self.to_responses(resources)
        return PagedResponse[ResourceListData](
            count=len(items),
            total=total,
            page=resource_filter.page,
            pages=resource_filter.page_count(total),
            data=ResourceListData(resources=items),
        )

    def list_by_creator(self, identity: User) -> List[ResourceResponse]:
        authorize(identity, Action.VIEW_OWN_RESOURCES)
        with translate_store_errors("fetching your resources"):
            return self.to_responses(self.resource_repo.find_by_creator(identity.id))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(
        self,
        identity: User,
        title: Any = None,
        description: Any = None,
        category: Any = None,
        link: Any = None,
    ) -> ResourceResponse:
        authorize(identity, Action.CREATE_RESOURCE)
        payload = validate_payload(
            ResourceCreateRequest,
            provided(title=title, description=description, category=category, link=link),
        )

        resource = Resource(
            title=payload.title,
            description=payload.description,
            category=payload.category,
            link=payload.link,
            created_by=identity.id,
            likes=[],
            likes_count=0,
            ratings=[],
            average_rating=0.0,
            revision=0,
        )
        with translate_store_errors("creating resource"):
            created = self.resource_repo.create_resource(resource)
            logger.info("Resource %s created by %s", created.id, identity.id)
            return self.to_response(created)

    def update(self, identity: User, resource_id: str, fields: Mapping[str, Any]) -> ResourceResponse:
        """Apply a partial update. ``created_by`` and social fields are ignored."""
        resource = self._get_entity(resource_id)
        authorize(identity, Action.UPDATE_RESOURCE, resource)

        changes = validate_payload(ResourceUpdateRequest, fields).changes()
        if not changes:
            raise ValidationError("No fields to update")

        with translate_store_errors("updating resource"):
            updated = self.resource_repo.update_fields(resource.id, changes)
            if updated is None:
                raise NotFoundError(RESOURCE_NOT_FOUND)
            return self.to_response(updated)

    def delete(self, identity: User, resource_id: str) -> None:
        """Delete a resource. Bookmarks pointing at it are left dangling."""
        resource = self._get_entity(resource_id)
        authorize(identity, Action.DELETE_RESOURCE, resource)

        with translate_store_errors("deleting resource"):
            deleted = self.resource_repo.delete_one(resource.id)
        if not deleted:
            raise NotFoundError(RESOURCE_NOT_FOUND)
        logger.info("Resource %s deleted by %s", resource.id, identity.id)

    def toggle_like(self, identity: User, resource_id: str) -> Tuple[ResourceResponse, bool]:
        """Like or unlike. Returns the resource and True if this call liked it."""
        authorize(identity, Action.ENGAGE_RESOURCE)
        object_id = self._require_object_id(resource_id)

        with translate_store_errors("liking resource"):
            resource, liked = self.resource_repo.toggle_like(object_id, identity.id)
            if resource is None:
                raise NotFoundError(RESOURCE_NOT_FOUND)
            return self.to_response(resource), liked

    def rate(self, identity: User, resource_id: str, value: Any) -> ResourceResponse:
        """Set the caller's rating (insert or overwrite) and recompute the average."""
        authorize(identity, Action.ENGAGE_RESOURCE)
        value = validate_rating_value(value)

        for _ in range(settings.RATING_WRITE_RETRIES):
            resource = self._get_entity(resource_id)
            ratings = upsert_rating(resource.ratings, identity.id, value)
            average = compute_average_rating(r.value for r in ratings)

            with translate_store_errors("rating resource"):
                updated = self.resource_repo.replace_ratings(
                    resource.id,
                    resource.revision,
                    [r.model_dump(exclude_none=True) for r in ratings],
                    average,
                )
                if updated is not None:
                    return self.to_response(updated)
            logger.debug("Rating write on %s lost a race, retrying", resource.id)

        raise InternalError("Error rating resource: too many concurrent updates")

    @staticmethod
    def _require_object_id(resource_id: str | ObjectId) -> ObjectId:
        identifier = ResourceRepository._to_object_id(resource_id)
        if identifier is None:
            raise NotFoundError(RESOURCE_NOT_FOUND)
        return identifier
