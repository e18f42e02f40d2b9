"""Learning resource entity with embedded per-user ratings."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .base import BaseEntity, PyObjectId, utcnow
from .enums import Category


class Rating(BaseModel):
    """One user's rating of a resource. At most one per user."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    user: PyObjectId
    value: int = Field(..., ge=1, le=5)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None


class Resource(BaseEntity):
    title: str
    description: str
    category: Category
    link: str
    created_by: PyObjectId = Field(..., description="Creator user id, set once")
    likes: List[PyObjectId] = Field(default_factory=list)
    likes_count: int = Field(default=0, description="Mirror of len(likes), backs the likes sort")
    ratings: List[Rating] = Field(default_factory=list)
    average_rating: float = Field(default=0.0, ge=0, le=5)
    revision: int = Field(default=0, description="Bumped on every ratings write")
