"""Shared entity base and ObjectId field types."""

from datetime import datetime, timezone
from typing import Annotated, Any, Optional

from bson import ObjectId
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _coerce_object_id(v: Any) -> ObjectId:
    if isinstance(v, ObjectId):
        return v
    if isinstance(v, str) and ObjectId.is_valid(v):
        return ObjectId(v)
    raise ValueError("Invalid ObjectId")


def validate_object_id(v: Any) -> str:
    """Validate and convert ObjectId to string."""
    return str(_coerce_object_id(v))


# Stored as ObjectId, rendered as str in JSON
PyObjectId = Annotated[
    ObjectId,
    BeforeValidator(_coerce_object_id),
    PlainSerializer(str, return_type=str, when_used="json"),
]

# For DTOs: always a str
PyObjectIdStr = Annotated[str, BeforeValidator(validate_object_id)]


class BaseEntity(BaseModel):
    """Fields every persisted document carries."""

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        use_enum_values=True,
    )

    id: Optional[PyObjectId] = Field(default=None, alias="_id")
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
