"""Data Transfer Objects (DTOs) for API requests and responses"""

from .common import ApiResponse, ListResponse, PagedResponse
from .resource import (
    BookmarkListData,
    CreatorSummary,
    RateResourceRequest,
    RatingResponse,
    ResourceCreateRequest,
    ResourceData,
    ResourceListData,
    ResourceResponse,
    ResourceUpdateRequest,
)
from .user import (
    AuthData,
    BookmarkIdsData,
    LoginRequest,
    RegisterRequest,
    UserData,
    UserListData,
    UserResponse,
    UserStats,
)

__all__ = [
    "ApiResponse",
    "ListResponse",
    "PagedResponse",
    "BookmarkListData",
    "CreatorSummary",
    "RateResourceRequest",
    "RatingResponse",
    "ResourceCreateRequest",
    "ResourceData",
    "ResourceListData",
    "ResourceResponse",
    "ResourceUpdateRequest",
    "AuthData",
    "BookmarkIdsData",
    "LoginRequest",
    "RegisterRequest",
    "UserData",
    "UserListData",
    "UserResponse",
    "UserStats",
]
