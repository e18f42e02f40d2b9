"""Resource DTOs"""

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator

from resource_hub.entities.base import PyObjectIdStr
from resource_hub.entities.enums import Category

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
Description = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=500)
]
Link = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, pattern=r"^https?://.+")
]


class ResourceCreateRequest(BaseModel):
    title: Title
    description: Description
    category: Category
    link: Link


class ResourceUpdateRequest(BaseModel):
    """Partial update. Only these four fields are editable; anything else
    in the body (``created_by``, ``likes``, ``ratings`` ...) is dropped."""

    model_config = ConfigDict(extra="ignore")

    title: Optional[Title] = None
    description: Optional[Description] = None
    category: Optional[Category] = None
    link: Optional[Link] = None

    @model_validator(mode="after")
    def _reject_explicit_nulls(self):
        for field in self.model_fields_set:
            if getattr(self, field) is None:
                raise ValueError(f"{field} cannot be empty")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, mode="json")


class RateResourceRequest(BaseModel):
    rating: int = Field(..., ge=1, le=5, strict=True)


class CreatorSummary(BaseModel):
    id: PyObjectIdStr
    name: Optional[str] = None
    email: Optional[str] = None


class RatingResponse(BaseModel):
    user: PyObjectIdStr
    value: int


class ResourceResponse(BaseModel):
    id: PyObjectIdStr
    title: str
    description: str
    category: str
    link: str
    created_by: CreatorSummary
    likes: List[PyObjectIdStr] = Field(default_factory=list)
    likes_count: int = 0
    ratings: List[RatingResponse] = Field(default_factory=list)
    average_rating: float = 0.0
    created_at: datetime
    updated_at: Optional[datetime] = None


class ResourceData(BaseModel):
    resource: ResourceResponse


class ResourceListData(BaseModel):
    resources: List[ResourceResponse]


class BookmarkListData(BaseModel):
    bookmarks: List[ResourceResponse]
