"""User listing (admin) and bookmark endpoints."""

from fastapi import APIRouter, Depends, Path
from pymongo.database import Database

from resource_hub.database.mongo import get_db
from resource_hub.dtos import (
    ApiResponse,
    BookmarkIdsData,
    BookmarkListData,
    ListResponse,
    UserListData,
    UserStats,
)
from resource_hub.entities.user import User
from resource_hub.middleware.auth import get_current_user
from resource_hub.middleware.rbac import Action, RequirePermission
from resource_hub.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=ListResponse[UserListData], response_model_exclude_none=True)
def list_users(
    db: Database = Depends(get_db),
    admin: User = Depends(RequirePermission(Action.LIST_USERS)),
):
    """List all users (Admin only). Password hashes are never included."""
    users = UserService(db).list_all(admin)
    return ListResponse[UserListData](count=len(users), data=UserListData(users=users))


@router.get("/stats", response_model=ApiResponse[UserStats], response_model_exclude_none=True)
def user_stats(
    db: Database = Depends(get_db),
    admin: User = Depends(RequirePermission(Action.VIEW_STATS)),
):
    """Overview counters for the admin dashboard (Admin only)."""
    return ApiResponse[UserStats](data=UserService(db).stats(admin))


@router.put(
    "/bookmark/{resource_id}",
    response_model=ApiResponse[BookmarkIdsData],
    response_model_exclude_none=True,
)
def toggle_bookmark(
    resource_id: str = Path(..., description="Resource ID"),
    db: Database = Depends(get_db),
    user: User = Depends(get_current_user),
):
    bookmarks, bookmarked = UserService(db).toggle_bookmark(user, resource_id)
    return ApiResponse[BookmarkIdsData](
        message="Resource bookmarked" if bookmarked else "Bookmark removed",
        data=BookmarkIdsData(bookmarks=bookmarks),
    )


@router.get(
    "/bookmarks",
    response_model=ListResponse[BookmarkListData],
    response_model_exclude_none=True,
)
def list_bookmarks(
    db: Database = Depends(get_db),
    user: User = Depends(get_current_user),
):
    resources = UserService(db).list_bookmarks(user)
    return ListResponse[BookmarkListData](
        count=len(resources), data=BookmarkListData(bookmarks=resources)
    )
