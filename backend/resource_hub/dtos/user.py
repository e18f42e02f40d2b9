"""User and authentication DTOs"""

import re
from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StringConstraints

from resource_hub.entities.base import PyObjectIdStr
from resource_hub.entities.enums import Role

# Same shape the account schema has always accepted
EMAIL_PATTERN = re.compile(r"^\w+([\.-]?\w+)*@\w+([\.-]?\w+)*(\.\w{2,3})+$")


def _check_email(value: str) -> str:
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Please provide a valid email")
    return value


Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]
Email = Annotated[
    str,
    StringConstraints(strip_whitespace=True, to_lower=True, min_length=1),
    AfterValidator(_check_email),
]
LoginEmail = Annotated[str, StringConstraints(strip_whitespace=True, to_lower=True, min_length=1)]


class RegisterRequest(BaseModel):
    """Registration body. There is deliberately no ``role`` field."""

    name: Name
    email: Email
    password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    email: LoginEmail
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """Public view of a user. Never carries the password hash."""

    id: PyObjectIdStr
    name: str
    email: str
    role: Role
    bookmarks: List[PyObjectIdStr] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    model_config = ConfigDict(use_enum_values=True)


class AuthData(BaseModel):
    user: UserResponse
    token: str


class UserData(BaseModel):
    user: UserResponse


class UserListData(BaseModel):
    users: List[UserResponse]


class BookmarkIdsData(BaseModel):
    bookmarks: List[PyObjectIdStr]


class UserStats(BaseModel):
    total_users: int
    learners: int
    admins: int
    total_resources: int
