from .base import BaseEntity, PyObjectId, PyObjectIdStr
from .enums import Category, ResourceSort, Role
from .resource import Rating, Resource
from .user import User

__all__ = [
    "BaseEntity",
    "PyObjectId",
    "PyObjectIdStr",
    "Category",
    "ResourceSort",
    "Role",
    "Rating",
    "Resource",
    "User",
]
