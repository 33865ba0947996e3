"""
Application Services

Responsibility:
    Orchestration services that coordinate domain services and
    infrastructure components.

Contains:
    - SubmissionPipeline: Submission lifecycle orchestration
    - FixedWindowRateLimiter: Per-client submission throttling

Does NOT contain:
    - Domain business logic (use Domain services)
    - Direct infrastructure calls (use dependency injection)
"""

from src.application.services.rate_limiter import FixedWindowRateLimiter
from src.application.services.submission_pipeline import SubmissionPipeline

__all__ = ["FixedWindowRateLimiter", "SubmissionPipeline"]
