from .base import BaseRepository
from .resource import ResourceRepository
from .resource_filter import ResourceFilter
from .user import UserRepository

__all__ = [
    "BaseRepository",
    "ResourceFilter",
    "ResourceRepository",
    "UserRepository",
]
