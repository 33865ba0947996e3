"""
API Schemas Package

Contains shared Pydantic models for API Layer.
"""

from src.api.schemas.common import ErrorResponse, MessageResponse
from src.api.schemas.submissions import (
    StatsResponse,
    SubmissionDetailResponse,
    SubmissionListResponse,
    SubmissionLookupResponse,
    SubmissionView,
    SubmitResponse,
)

__all__ = [
    "ErrorResponse",
    "MessageResponse",
    "StatsResponse",
    "SubmissionDetailResponse",
    "SubmissionListResponse",
    "SubmissionLookupResponse",
    "SubmissionView",
    "SubmitResponse",
]
