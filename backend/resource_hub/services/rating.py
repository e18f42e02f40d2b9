"""Per-user rating bookkeeping and the derived average."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List

from bson import ObjectId

from resource_hub.core.exceptions import ValidationError
from resource_hub.entities.resource import Rating

MIN_RATING = 1
MAX_RATING = 5


def validate_rating_value(value) -> int:
    """Accept only a true integer in [1, 5] (bools and floats are rejected)."""
    if isinstance(value, bool) or not isinstance(value, int) or not MIN_RATING <= value <= MAX_RATING:
        raise ValidationError(
            f"Please provide a rating between {MIN_RATING} and {MAX_RATING}",
            details=[{"field": "rating", "message": "Must be an integer from 1 to 5", "type": "range"}],
        )
    return value


def compute_average_rating(values: Iterable[int]) -> float:
    """Mean of the values rounded half-up to one decimal; 0 when empty."""
    values = list(values)
    if not values:
        return 0.0
    mean = Decimal(sum(values)) / Decimal(len(values))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def upsert_rating(ratings: List[Rating], user_id: ObjectId, value: int) -> List[Rating]:
    """Return a new ratings list where ``user_id`` has exactly one entry, set to ``value``."""
    now = datetime.now(timezone.utc)
    updated: List[Rating] = []
    found = False
    for rating in ratings:
        if rating.user == user_id:
            if not found:
                updated.append(rating.model_copy(update={"value": value, "updated_at": now}))
                found = True
            # Any extra entries for the same user are dropped
            continue
        updated.append(rating)
    if not found:
        updated.append(Rating(user=user_id, value=value, created_at=now))
    return updated
