"""
Submission Repository Interfaces Module

Repository pattern interfaces (contracts) for data persistence.
Defined in Domain Layer, implemented in Infrastructure Layer.

This module exports:
    - SubmissionRepositoryProtocol: Repository interface for Submission
"""

from .submission_repository import SubmissionRepositoryProtocol

__all__ = [
    "SubmissionRepositoryProtocol",
]
