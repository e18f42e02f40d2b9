from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from .base import BaseEntity, PyObjectId
from .enums import Role


class User(BaseEntity):
    """User entity. ``password_hash`` is only loaded for credential checks."""

    name: str
    email: str
    password_hash: Optional[str] = None
    role: Role = Role.LEARNER
    bookmarks: List[PyObjectId] = Field(default_factory=list)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
