"""
Tests for list query normalization and id validation.
"""

import pytest

from src.domain.shared.exceptions import InvalidSubmissionIdError
from src.domain.submission.services import (
    is_valid_submission_id,
    parse_query_options,
    validate_submission_id,
)


def test_defaults_when_nothing_given():
    options = parse_query_options()

    assert options.page == 1
    assert options.limit == 10
    assert options.sort_by == "createdAt"
    assert options.sort_order == -1
    assert options.skip == 0


def test_valid_values_are_used():
    options = parse_query_options("2", "25", "-name")

    assert (options.page, options.limit, options.sort_by, options.sort_order) == (2, 25, "name", -1)
    assert options.skip == 25


def test_ascending_sort_without_prefix():
    options = parse_query_options(sort="email")
    assert (options.sort_by, options.sort_order) == ("email", 1)


@pytest.mark.parametrize("page", ["abc", "0", "-3", "", "100001", str(10**19)])
def test_invalid_page_falls_back_to_first(page):
    assert parse_query_options(page=page).page == 1


@pytest.mark.parametrize("limit", ["abc", "0", "51", "500"])
def test_invalid_limit_falls_back_to_default(limit):
    assert parse_query_options(limit=limit).limit == 10


def test_limit_of_fifty_is_allowed():
    assert parse_query_options(limit="50").limit == 50


def test_unknown_sort_field_falls_back_to_created_at_descending():
    options = parse_query_options(sort="-password")
    assert (options.sort_by, options.sort_order) == ("createdAt", -1)


def test_valid_submission_id():
    assert validate_submission_id("65a1f0c2e4b0a1b2c3d4e5f6") == "65a1f0c2e4b0a1b2c3d4e5f6"
    assert is_valid_submission_id("65A1F0C2E4B0A1B2C3D4E5F6")


@pytest.mark.parametrize("raw", ["42", "65a1f0c2e4b0a1b2c3d4e5fz", "65a1f0c2e4b0a1b2c3d4e5f6a"])
def test_malformed_submission_id_raises(raw):
    with pytest.raises(InvalidSubmissionIdError, match="Invalid id format"):
        validate_submission_id(raw)


def test_missing_submission_id_raises():
    with pytest.raises(InvalidSubmissionIdError, match="id parameter is required"):
        validate_submission_id("")


def test_largest_page_is_accepted():
    options = parse_query_options(page="100000", limit="50")

    assert options.page == 100000
    assert options.skip == 99999 * 50
