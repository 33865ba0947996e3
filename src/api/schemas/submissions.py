"""
Submission API Schemas

Response models for the submission endpoints. JSON keys are camelCase
(submissionId, swappedImageUrl, processingTime, ...), Python attributes snake_case.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.application.models import (
    Pagination,
    SubmissionCreated,
    SubmissionStats,
)
from src.application.ports import ImageStorageProtocol
from src.domain.submission.entities import Submission


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# SUBMIT
# ============================================================================


class SubmitResponse(CamelModel):
    """
    Response for a successful POST /submit.

    Examples:
        {
            "success": true,
            "message": "Face swap completed successfully!",
            "submissionId": "65a1f0c2e4b0a1b2c3d4e5f6",
            "swappedImageUrl": "/uploads/swapped/swapped_1700000002000_c0ffee1234567.jpg",
            "processingTime": 2000
        }
    """

    success: bool = True
    message: str
    submission_id: str
    swapped_image_url: str
    processing_time: int = Field(ge=0)

    @classmethod
    def from_result(cls, result: SubmissionCreated) -> "SubmitResponse":
        return cls(
            message=result.message,
            submission_id=result.submission_id,
            swapped_image_url=result.swapped_image_url,
            processing_time=result.processing_time,
        )


# ============================================================================
# READ SIDE
# ============================================================================


class SubmissionView(CamelModel):
    """Public view of a submission (no file system paths)."""

    id: str
    name: str
    email: str
    phone: str
    status: str
    processing_time: int
    created_at: datetime
    updated_at: datetime
    original_image_url: Optional[str] = None
    swapped_image_url: Optional[str] = None
    download_url: str

    @classmethod
    def from_entity(
        cls, submission: Submission, storage: ImageStorageProtocol
    ) -> "SubmissionView":
        """Build the view, mapping stored paths to public URLs."""
        return cls(
            id=submission.id,
            name=submission.name,
            email=submission.email,
            phone=submission.phone,
            status=submission.status.value,
            processing_time=submission.processing_time,
            created_at=submission.created_at,
            updated_at=submission.updated_at,
            original_image_url=(
                storage.public_url(submission.original_image_path)
                if submission.original_image_path
                else None
            ),
            swapped_image_url=(
                storage.public_url(submission.swapped_image_path)
                if submission.swapped_image_path
                else None
            ),
            download_url=f"/submissions/{submission.id}/download",
        )


class PaginationView(CamelModel):
    total_count: int
    current_page: int
    total_pages: int
    has_next: bool
    has_prev: bool
    next_page: Optional[int] = None
    prev_page: Optional[int] = None

    @classmethod
    def from_pagination(cls, pagination: Pagination) -> "PaginationView":
        return cls(**pagination.model_dump())


class SubmissionListResponse(CamelModel):
    success: bool = True
    submissions: list[SubmissionView]
    pagination: PaginationView


class SubmissionDetailResponse(CamelModel):
    success: bool = True
    submission: SubmissionView


class SubmissionLookupResponse(CamelModel):
    success: bool = True
    count: int
    submissions: list[SubmissionView]


class StatsView(CamelModel):
    total: int
    today: int
    this_week: int
    this_month: int
    completed: int
    pending: int
    failed: int
    average_processing_time: int

    @classmethod
    def from_stats(cls, stats: SubmissionStats) -> "StatsView":
        return cls(**stats.model_dump())


class StatsResponse(CamelModel):
    success: bool = True
    stats: StatsView
