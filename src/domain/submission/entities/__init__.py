"""
Submission Domain Entities.

Entities have identity and lifecycle - they are mutable objects tracked by ID.

Available Entities:
    - Submission: One user's details, original photo and face swap result
    - SubmissionStatus: Enum representing processing states
"""

from src.domain.submission.entities.submission import Submission, SubmissionStatus

__all__ = [
    "Submission",
    "SubmissionStatus",
]
