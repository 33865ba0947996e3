"""
Query & Identifier Validation

Normalizes list query parameters and checks submission id path parameters.

Responsibility:
    - parse_query_options(): page/limit/sort with silent fallback to defaults
    - validate_submission_id(): 24-character hex check, raises on mismatch
"""

import re
from typing import Any, Optional

from src.domain.shared.exceptions import InvalidSubmissionIdError
from src.domain.submission.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_LIMIT,
    DEFAULT_SORT_FIELD,
    MAX_PAGE,
    MAX_PAGE_LIMIT,
    SORT_ASCENDING,
    SORT_DESCENDING,
    SORTABLE_FIELDS,
    SUBMISSION_ID_PATTERN,
)
from src.domain.submission.services.sanitizer import sanitize_input
from src.domain.submission.value_objects.query_options import QueryOptions

_ID_RE = re.compile(SUBMISSION_ID_PATTERN)


def _parse_int(raw: Any) -> Optional[int]:
    """Parse a sanitized integer, returning None when it is not a number."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    try:
        return int(sanitize_input(raw))
    except ValueError:
        return None


def parse_query_options(
    page: Any = None, limit: Any = None, sort: Any = None
) -> QueryOptions:
    """
    Build QueryOptions from raw query parameters.

    Invalid values never raise; they fall back to the defaults:
        - page: integer in [1, 100000], default 1
        - limit: integer in [1, 50], default 10
        - sort: "field" (ascending) or "-field" (descending) where field is one
          of name, email, createdAt, updatedAt; default createdAt descending

    Args:
        page: Raw page parameter
        limit: Raw limit parameter
        sort: Raw sort parameter

    Returns:
        Normalized QueryOptions

    Examples:
        >>> parse_query_options("2", "25", "-name")
        QueryOptions(page=2, limit=25, sort_by='name', sort_order=-1)
        >>> parse_query_options("abc", "500", "password")
        QueryOptions(page=1, limit=10, sort_by='createdAt', sort_order=-1)
    """
    page_num = _parse_int(page) if page not in (None, "") else None
    if page_num is None or not 1 <= page_num <= MAX_PAGE:
        page_num = DEFAULT_PAGE

    limit_num = _parse_int(limit) if limit not in (None, "") else None
    if limit_num is None or not 1 <= limit_num <= MAX_PAGE_LIMIT:
        limit_num = DEFAULT_PAGE_LIMIT

    sort_by = DEFAULT_SORT_FIELD
    sort_order = SORT_DESCENDING
    sort_value = sanitize_input(sort) if sort else ""
    if sort_value:
        if sort_value.startswith("-"):
            candidate, order = sort_value[1:], SORT_DESCENDING
        else:
            candidate, order = sort_value, SORT_ASCENDING

        if candidate in SORTABLE_FIELDS:
            sort_by, sort_order = candidate, order

    return QueryOptions(
        page=page_num, limit=limit_num, sort_by=sort_by, sort_order=sort_order
    )


def is_valid_submission_id(raw: Any) -> bool:
    """Check the 24-character hexadecimal id format without raising."""
    return isinstance(raw, str) and bool(_ID_RE.match(raw))


def validate_submission_id(raw: Any, param_name: str = "id") -> str:
    """
    Validate a submission id path parameter.

    Args:
        raw: Raw path parameter
        param_name: Parameter name used in error messages

    Returns:
        The sanitized id

    Raises:
        InvalidSubmissionIdError: If the id is missing or not 24 hex characters

    Examples:
        >>> validate_submission_id("65a1f0c2e4b0a1b2c3d4e5f6")
        '65a1f0c2e4b0a1b2c3d4e5f6'
        >>> validate_submission_id("42")
        Traceback (most recent call last):
        ...
        InvalidSubmissionIdError: Invalid id format
    """
    if not raw:
        raise InvalidSubmissionIdError(f"{param_name} parameter is required", raw)

    sanitized = sanitize_input(raw)
    if not is_valid_submission_id(sanitized):
        raise InvalidSubmissionIdError(f"Invalid {param_name} format", raw)

    return sanitized
