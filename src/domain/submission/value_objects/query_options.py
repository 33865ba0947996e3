"""
QueryOptions Value Object.

Normalized pagination and ordering options for listing submissions.
Built by parse_query_options(); always holds valid values.
"""

from pydantic import BaseModel, Field

from src.domain.submission.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_LIMIT,
    DEFAULT_SORT_FIELD,
    MAX_PAGE_LIMIT,
    SORT_DESCENDING,
)


class QueryOptions(BaseModel):
    """
    Pagination/sort options for the submissions list.

    Attributes:
        page: 1-based page number
        limit: Page size (1-50)
        sort_by: One of name, email, createdAt, updatedAt
        sort_order: 1 for ascending, -1 for descending

    Examples:
        >>> options = QueryOptions(page=2, limit=10)
        >>> options.skip
        10
    """

    page: int = Field(default=DEFAULT_PAGE, ge=1)
    limit: int = Field(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT)
    sort_by: str = DEFAULT_SORT_FIELD
    sort_order: int = SORT_DESCENDING

    model_config = {"frozen": True}

    @property
    def skip(self) -> int:
        """Number of records to skip before this page."""
        return (self.page - 1) * self.limit
