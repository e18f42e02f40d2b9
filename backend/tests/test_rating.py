"""Unit tests for rating validation, upsert and averaging."""

import pytest
from bson import ObjectId

from resource_hub.core.exceptions import ValidationError
from resource_hub.entities.resource import Rating
from resource_hub.services.rating import (
    compute_average_rating,
    upsert_rating,
    validate_rating_value,
)


class TestComputeAverageRating:
    def test_empty_ratings_average_to_zero(self):
        assert compute_average_rating([]) == 0.0

    def test_mean_of_two(self):
        assert compute_average_rating([4, 2]) == 3.0

    def test_rounds_to_one_decimal(self):
        assert compute_average_rating([1, 2, 2]) == 1.7

    def test_rounds_half_up(self):
        # 1.25 would become 1.2 with round-half-even
        assert compute_average_rating([1, 1, 1, 2]) == 1.3

    def test_accepts_a_generator(self):
        assert compute_average_rating(v for v in (5, 2)) == 3.5


class TestValidateRatingValue:
    @pytest.mark.parametrize("value", [1, 3, 5])
    def test_accepts_integers_in_range(self, value):
        assert validate_rating_value(value) == value

    @pytest.mark.parametrize("value", [0, 6, -1, 3.0, "4", None, True])
    def test_rejects_everything_else(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_rating_value(value)
        assert exc_info.value.message == "Please provide a rating between 1 and 5"


class TestUpsertRating:
    def test_appends_first_rating(self):
        user = ObjectId()

        ratings = upsert_rating([], user, 4)

        assert len(ratings) == 1
        assert ratings[0].user == user
        assert ratings[0].value == 4

    def test_overwrites_existing_rating(self):
        user, other = ObjectId(), ObjectId()
        existing = [Rating(user=user, value=4), Rating(user=other, value=2)]

        ratings = upsert_rating(existing, user, 5)

        assert [(r.user, r.value) for r in ratings] == [(user, 5), (other, 2)]
        assert ratings[0].updated_at is not None
        # Input list is left untouched
        assert existing[0].value == 4

    def test_collapses_duplicate_entries_for_one_user(self):
        user = ObjectId()
        existing = [Rating(user=user, value=1), Rating(user=user, value=2)]

        ratings = upsert_rating(existing, user, 3)

        assert [(r.user, r.value) for r in ratings] == [(user, 3)]
