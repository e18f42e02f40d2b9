"""Learning resource endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from pymongo.database import Database

from resource_hub.config import settings
from resource_hub.database.mongo import get_db
from resource_hub.dtos import (
    ApiResponse,
    ListResponse,
    PagedResponse,
    RateResourceRequest,
    ResourceCreateRequest,
    ResourceData,
    ResourceListData,
    ResourceUpdateRequest,
)
from resource_hub.entities.user import User
from resource_hub.middleware.auth import get_current_user
from resource_hub.repositories.resource_filter import ResourceFilter
from resource_hub.services.resource_service import ResourceService

router = APIRouter(prefix="/resources", tags=["Resources"])


@router.get(
    "",
    response_model=PagedResponse[ResourceListData],
    response_model_exclude_none=True,
)
def list_resources(
    search: Optional[str] = Query(None, description="Match in title or description"),
    category: Optional[str] = Query(None, description="Exact category"),
    sort: Optional[str] = Query(None, description="newest | oldest | rating | likes"),
    page: int = Query(1, ge=1, le=settings.MAX_PAGE),
    limit: int = Query(10, ge=1, le=100),
    db: Database = Depends(get_db),
):
    """Search, filter, sort and paginate resources (public)."""
    resource_filter = ResourceFilter.build(
        search=search, category=category, sort=sort, page=page, limit=limit
    )
    return ResourceService(db).list(resource_filter)


# Declared before "/{resource_id}" so the literal path wins
@router.get(
    "/user/my-resources",
    response_model=ListResponse[ResourceListData],
    response_model_exclude_none=True,
)
def my_resources(
    db: Database = Depends(get_db),
    user: User = Depends(get_current_user),
):
    resources = ResourceService(db).list_by_creator(user)
    return ListResponse[ResourceListData](
        count=len(resources), data=ResourceListData(resources=resources)
    )


@router.get(
    "/{resource_id}",
    response_model=ApiResponse[ResourceData],
    response_model_exclude_none=True,
)
def get_resource(
    resource_id: str = Path(..., description="Resource ID"),
    db: Database = Depends(get_db),
):
    resource = ResourceService(db).get(resource_id)
    return ApiResponse[ResourceData](data=ResourceData(resource=resource))


@router.post(
    "",
    response_model=ApiResponse[ResourceData],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_resource(
    payload: ResourceCreateRequest,
    db: Database = Depends(get_db),
    user: User = Depends(get_current_user),
):
    resource = ResourceService(db).create(user, **payload.model_dump())
    return ApiResponse[ResourceData](
        message="Resource created successfully", data=ResourceData(resource=resource)
    )


@router.put(
    "/{resource_id}",
    response_model=ApiResponse[ResourceData],
    response_model_exclude_none=True,
)
def update_resource(
    payload: ResourceUpdateRequest,
    resource_id: str = Path(..., description="Resource ID"),
    db: Database = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Edit a resource (creator or admin)."""
    resource = ResourceService(db).update(user, resource_id, payload.changes())
    return ApiResponse[ResourceData](
        message="Resource updated successfully", data=ResourceData(resource=resource)
    )


@router.delete(
    "/{resource_id}",
    response_model=ApiResponse[ResourceData],
    response_model_exclude_none=True,
)
def delete_resource(
    resource_id: str = Path(..., description="Resource ID"),
    db: Database = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Delete a resource (creator or admin)."""
    ResourceService(db).delete(user, resource_id)
    return ApiResponse[ResourceData](message="Resource deleted successfully")


@router.put(
    "/{resource_id}/like",
    response_model=ApiResponse[ResourceData],
    response_model_exclude_none=True,
)
def like_resource(
    resource_id: str = Path(..., description="Resource ID"),
    db: Database = Depends(get_db),
    user: User = Depends(get_current_user),
):
    resource, liked = ResourceService(db).toggle_like(user, resource_id)
    return ApiResponse[ResourceData](
        message="Resource liked" if liked else "Resource unliked",
        data=ResourceData(resource=resource),
    )


@router.post(
    "/{resource_id}/rate",
    response_model=ApiResponse[ResourceData],
    response_model_exclude_none=True,
)
def rate_resource(
    payload: RateResourceRequest,
    resource_id: str = Path(..., description="Resource ID"),
    db: Database = Depends(get_db),
    user: User = Depends(get_current_user),
):
    resource = ResourceService(db).rate(user, resource_id, payload.rating)
    return ApiResponse[ResourceData](
        message="Resource rated successfully", data=ResourceData(resource=resource)
    )
