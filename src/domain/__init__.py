"""
Domain Layer - Core Business Logic

Heart of the face swap submission service. Contains the business rules,
entities, value objects, domain services and repository contracts.
Framework-independent and highly testable.

Architecture:
    - Clean Architecture: Domain Layer is the center, no external I/O
    - Domain-Driven Design: Entities, Value Objects, Services, Repositories
    - Dependency Inversion: Domain defines interfaces, Infrastructure implements

Subdomains:
    - submission: Submission entity, sanitization and validation
    - shared: Exception hierarchy used across all layers

Usage:
    >>> from src.domain import Submission, DomainException
    >>> from src.domain.submission.services import validate_submission
"""

# Submission Subdomain
from .submission import (
    Submission,
    SubmissionRepositoryProtocol,
    SubmissionStatus,
)

# Shared Domain
from .shared import DomainException

__all__ = [
    # Submission Subdomain
    "Submission",
    "SubmissionStatus",
    "SubmissionRepositoryProtocol",
    # Shared Domain
    "DomainException",
]
