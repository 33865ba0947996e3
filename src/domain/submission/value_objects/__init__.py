"""
Submission Value Objects

Immutable objects describing validation outcomes and list options.
"""

from .query_options import QueryOptions
from .validation_result import (
    SubmissionFields,
    ValidationErr,
    ValidationOk,
    ValidationResult,
)

__all__ = [
    "QueryOptions",
    "SubmissionFields",
    "ValidationErr",
    "ValidationOk",
    "ValidationResult",
]
