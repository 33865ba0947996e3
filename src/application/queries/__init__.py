"""
Application Queries

Responsibility:
    Read-side computations over stored submissions.

Contains:
    - compute_submission_stats: Window, status and timing aggregates
"""

from src.application.queries.submission_stats import compute_submission_stats

__all__ = ["compute_submission_stats"]
