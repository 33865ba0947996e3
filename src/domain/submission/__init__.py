"""
Submission Subdomain Module

Core business logic for photo submissions: the Submission entity, input
sanitization, form validation and the repository contract.

Exports:
    Entities:
        - Submission, SubmissionStatus

    Value Objects:
        - SubmissionFields, ValidationOk, ValidationErr, QueryOptions

    Services:
        - sanitize_input, validate_submission, parse_query_options,
          validate_submission_id

    Repository Interfaces:
        - SubmissionRepositoryProtocol

Usage:
    >>> from src.domain.submission import Submission, validate_submission
    >>> from src.domain.submission.services import sanitize_input
"""

# Entities
from .entities import Submission, SubmissionStatus

# Value Objects
from .value_objects import (
    QueryOptions,
    SubmissionFields,
    ValidationErr,
    ValidationOk,
    ValidationResult,
)

# Services
from .services import (
    parse_query_options,
    sanitize_input,
    validate_submission,
    validate_submission_id,
)

# Repository Interfaces
from .repositories import SubmissionRepositoryProtocol

from . import constants

__all__ = [
    # Entities
    "Submission",
    "SubmissionStatus",
    # Value Objects
    "QueryOptions",
    "SubmissionFields",
    "ValidationErr",
    "ValidationOk",
    "ValidationResult",
    # Services
    "parse_query_options",
    "sanitize_input",
    "validate_submission",
    "validate_submission_id",
    # Repository Interfaces
    "SubmissionRepositoryProtocol",
    "constants",
]
