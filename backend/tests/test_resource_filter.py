"""Unit tests for listing filter normalization and query compilation."""

import re

import pytest

from resource_hub.core.exceptions import ValidationError
from resource_hub.entities.enums import Category, ResourceSort
from resource_hub.repositories.resource_filter import ResourceFilter


def test_defaults():
    resource_filter = ResourceFilter.build()

    assert resource_filter.search is None
    assert resource_filter.category is None
    assert resource_filter.sort == ResourceSort.NEWEST
    assert resource_filter.page == 1
    assert resource_filter.limit == 10
    assert resource_filter.to_query() == {}
    assert resource_filter.to_sort() == [("created_at", -1), ("_id", -1)]


def test_unknown_sort_falls_back_to_newest():
    assert ResourceFilter.build(sort="popularity").sort == ResourceSort.NEWEST


def test_unknown_category_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        ResourceFilter.build(category="Cooking")
    assert exc_info.value.details[0]["field"] == "category"


@pytest.mark.parametrize("page, limit", [(0, 10), (10**19, 10), (100_001, 10), (1, 0), (1, 101)])
def test_out_of_range_paging_is_rejected(page, limit):
    with pytest.raises(ValidationError):
        ResourceFilter.build(page=page, limit=limit)


def test_search_matches_title_or_description_case_insensitively():
    query = ResourceFilter.build(search="  Python ").to_query()

    pattern = {"$regex": "Python", "$options": "i"}
    assert query == {"$or": [{"title": pattern}, {"description": pattern}]}


def test_search_text_is_escaped():
    query = ResourceFilter.build(search="c++ (basics)").to_query()

    regex = query["$or"][0]["title"]["$regex"]
    assert regex == re.escape("c++ (basics)")
    assert re.search(regex, "Intro to C++ (basics)", re.IGNORECASE)


def test_blank_search_adds_no_condition():
    assert ResourceFilter.build(search="   ").to_query() == {}


def test_search_and_category_combine():
    query = ResourceFilter.build(search="python", category="Data Science").to_query()

    assert query["category"] == Category.DATA_SCIENCE.value
    assert "$or" in query


@pytest.mark.parametrize(
    "sort, expected",
    [
        ("oldest", [("created_at", 1), ("_id", 1)]),
        ("rating", [("average_rating", -1), ("created_at", -1), ("_id", -1)]),
        ("likes", [("likes_count", -1), ("created_at", -1), ("_id", -1)]),
    ],
)
def test_sort_keys(sort, expected):
    assert ResourceFilter.build(sort=sort).to_sort() == expected


def test_skip_and_page_count():
    resource_filter = ResourceFilter.build(page=3, limit=10)

    assert resource_filter.skip == 20
    assert resource_filter.page_count(0) == 0
    assert resource_filter.page_count(20) == 2
    assert resource_filter.page_count(21) == 3


def test_last_allowed_page_keeps_skip_in_int64_range():
    resource_filter = ResourceFilter.build(page=100_000, limit=100)

    assert resource_filter.skip < 2**63
