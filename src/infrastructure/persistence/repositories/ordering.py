"""
Submission ordering shared by repository implementations.
"""

from typing import Any, Iterable

from src.domain.submission.constants import DEFAULT_SORT_FIELD, SORT_DESCENDING
from src.domain.submission.entities import Submission

# Public sort field -> entity attribute
SORT_ATTRIBUTES: dict[str, str] = {
    "name": "name",
    "email": "email",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


def _sort_value(submission: Submission, attribute: str) -> Any:
    value = getattr(submission, attribute)
    return value.casefold() if isinstance(value, str) else value


def sort_submissions(
    submissions: Iterable[Submission],
    sort_by: str = DEFAULT_SORT_FIELD,
    sort_order: int = SORT_DESCENDING,
) -> list[Submission]:
    """
    Sort submissions by a public sort field.

    Text fields compare case-insensitively. Unknown fields fall back to createdAt.
    """
    attribute = SORT_ATTRIBUTES.get(sort_by, SORT_ATTRIBUTES[DEFAULT_SORT_FIELD])
    return sorted(
        submissions,
        key=lambda submission: _sort_value(submission, attribute),
        reverse=sort_order == SORT_DESCENDING,
    )


def paginate(items: list[Submission], limit: Any, skip: int) -> list[Submission]:
    """Slice a sorted list; limit None returns everything after skip."""
    start = max(0, skip)
    if limit is None:
        return items[start:]
    return items[start : start + limit]
