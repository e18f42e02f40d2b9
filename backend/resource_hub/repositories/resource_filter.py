"""Resource listing filter, compiled into a MongoDB query and sort."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from resource_hub.config import settings
from resource_hub.core.exceptions import ValidationError
from resource_hub.entities.enums import Category, ResourceSort

ASCENDING = 1
DESCENDING = -1

# Every sort ends in a creation-time key, then _id, so equal rows keep a fixed order
_SORT_KEYS: Dict[ResourceSort, List[Tuple[str, int]]] = {
    ResourceSort.NEWEST: [("created_at", DESCENDING), ("_id", DESCENDING)],
    ResourceSort.OLDEST: [("created_at", ASCENDING), ("_id", ASCENDING)],
    ResourceSort.RATING: [
        ("average_rating", DESCENDING),
        ("created_at", DESCENDING),
        ("_id", DESCENDING),
    ],
    ResourceSort.LIKES: [
        ("likes_count", DESCENDING),
        ("created_at", DESCENDING),
        ("_id", DESCENDING),
    ],
}


@dataclass(frozen=True)
class ResourceFilter:
    """Optional listing criteria. Absent fields add no condition."""

    search: Optional[str] = None
    category: Optional[Category] = None
    sort: ResourceSort = ResourceSort.NEWEST
    page: int = 1
    limit: int = settings.DEFAULT_PAGE_SIZE

    @classmethod
    def build(
        cls,
        search: Optional[str] = None,
        category: Optional[str] = None,
        sort: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> "ResourceFilter":
        """Normalize raw listing parameters.

        Unknown sort values fall back to newest; an unknown category or an
        out-of-range page/limit is a ValidationError.
        """
        search = (search or "").strip() or None

        parsed_category = None
        if category:
            try:
                parsed_category = Category(category)
            except ValueError:
                allowed = ", ".join(c.value for c in Category)
                raise ValidationError(
                    f"Invalid category. Must be one of: {allowed}",
                    details=[{"field": "category", "message": "Unknown category", "type": "enum"}],
                ) from None

        try:
            parsed_sort = ResourceSort(sort) if sort else ResourceSort.NEWEST
        except ValueError:
            parsed_sort = ResourceSort.NEWEST

        page = 1 if page is None else page
        limit = settings.DEFAULT_PAGE_SIZE if limit is None else limit
        if not 1 <= page <= settings.MAX_PAGE:
            # Keeps the computed skip well inside a BSON int64
            raise ValidationError(f"Page must be between 1 and {settings.MAX_PAGE}")
        if not 1 <= limit <= settings.MAX_PAGE_SIZE:
            raise ValidationError(f"Limit must be between 1 and {settings.MAX_PAGE_SIZE}")

        return cls(search=search, category=parsed_category, sort=parsed_sort, page=page, limit=limit)

    def to_query(self) -> Dict[str, Any]:
        query: Dict[str, Any] = {}
        if self.search:
            # User text is matched literally, never as a pattern
            pattern = {"$regex": re.escape(self.search), "$options": "i"}
            query["$or"] = [{"title": pattern}, {"description": pattern}]
        if self.category:
            query["category"] = Category(self.category).value
        return query

    def to_sort(self) -> List[Tuple[str, int]]:
        return list(_SORT_KEYS[self.sort])

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    def page_count(self, total: int) -> int:
        return math.ceil(total / self.limit)
