"""
Shared Application Models

Responsibility:
    Contains the DTOs passed between the pipeline, its ports and the API Layer.
    Prevents circular dependencies and code duplication.

Architecture Notes:
    - Part of Application Layer (Shared)
    - Used by SubmissionPipeline, ports and infrastructure adapters
    - Pydantic models, so the API Layer can serialize them directly

Contains:
    - IncomingFile: Raw uploaded file as received by the HTTP layer
    - StoredImage: File written to the storage area
    - ImageCheck: Result of the image authenticity pre-check
    - TransformResult: Result of a face swap
    - SubmissionCreated: Outcome of a successful submit
    - Pagination / SubmissionPage: One page of the submissions list
    - DownloadableImage: Swapped image ready to stream
    - SubmissionStats: Aggregate statistics

Does NOT contain:
    - Business logic (belongs to Domain Layer)
    - HTTP models (belongs to API Layer)
    - Infrastructure details (belongs to Infrastructure Layer)
"""

from typing import Optional

from pydantic import BaseModel, Field

from src.domain.submission.entities import Submission


# ============================================================================
# UPLOAD & STORAGE
# ============================================================================


class IncomingFile(BaseModel):
    """
    Uploaded file handed over by the HTTP layer.

    The HTTP layer reads at most (max size + 1) bytes, so `size` larger than
    the limit means the upload was too big even if `data` is truncated.

    Attributes:
        field_name: Multipart field the file arrived under
        filename: Client-supplied filename
        content_type: Client-declared MIME type
        data: File content
        size: Number of bytes received
    """

    field_name: str
    filename: str
    content_type: str = ""
    data: bytes = b""
    size: int = Field(default=0, ge=0)


class StoredImage(BaseModel):
    """
    Image written to the storage area.

    Attributes:
        path: Storage path (relative to the working directory)
        filename: Generated filename inside its namespace
        original_filename: Client-supplied filename (originals only)
        mime_type: MIME type of the stored image
        size: Size in bytes
        url: Public URL under /uploads

    Examples:
        >>> StoredImage(
        ...     path="public/uploads/original/1700000000000-ab12cd34ef567.jpg",
        ...     filename="1700000000000-ab12cd34ef567.jpg",
        ...     original_filename="me.jpg",
        ...     mime_type="image/jpeg",
        ...     size=52311,
        ...     url="/uploads/original/1700000000000-ab12cd34ef567.jpg",
        ... )
    """

    path: str
    filename: str
    original_filename: Optional[str] = None
    mime_type: str
    size: int = Field(ge=0)
    url: str


class ImageCheck(BaseModel):
    """
    Result of the image authenticity pre-check.

    Attributes:
        valid: True when the file exists, fits the size limit and has a known signature
        error: Reason when invalid
        format: Detected format (jpeg, png, gif, webp) when valid
        size: File size in bytes when known
    """

    valid: bool
    error: Optional[str] = None
    format: Optional[str] = None
    size: Optional[int] = None


# ============================================================================
# TRANSFORMATION
# ============================================================================


class TransformResult(BaseModel):
    """
    Successful face swap.

    Attributes:
        swapped_path: Storage path of the result
        swapped_filename: Generated filename of the result
        swapped_url: Public URL of the result
        processing_time: Duration in milliseconds
        simulated: True when produced by the simulated transformer
    """

    swapped_path: str
    swapped_filename: str
    swapped_url: str
    processing_time: int = Field(ge=0)
    simulated: bool = False


# ============================================================================
# PIPELINE RESULTS
# ============================================================================


class SubmissionCreated(BaseModel):
    """Outcome of a successful submit."""

    submission_id: str
    swapped_image_url: str
    processing_time: int = Field(ge=0)
    message: str = "Face swap completed successfully!"


class Pagination(BaseModel):
    """
    Pagination metadata of one list page.

    Examples:
        >>> Pagination.build(total_count=25, page=2, limit=10)
        Pagination(total_count=25, current_page=2, total_pages=3, has_next=True, has_prev=True, next_page=3, prev_page=1)
    """

    total_count: int
    current_page: int
    total_pages: int
    has_next: bool
    has_prev: bool
    next_page: Optional[int] = None
    prev_page: Optional[int] = None

    @classmethod
    def build(cls, total_count: int, page: int, limit: int) -> "Pagination":
        """Compute pagination metadata from the total count and page options."""
        total_pages = -(-total_count // limit) if limit else 0
        has_next = page < total_pages
        has_prev = page > 1
        return cls(
            total_count=total_count,
            current_page=page,
            total_pages=total_pages,
            has_next=has_next,
            has_prev=has_prev,
            next_page=page + 1 if has_next else None,
            prev_page=page - 1 if has_prev else None,
        )


class SubmissionPage(BaseModel):
    """One page of the submissions list."""

    items: list[Submission]
    pagination: Pagination

    model_config = {"arbitrary_types_allowed": True}


class DownloadableImage(BaseModel):
    """
    Swapped image ready to be streamed to the client.

    Attributes:
        path: Storage path of the swapped image
        filename: Suggested download filename
        media_type: MIME type for the Content-Type header
    """

    path: str
    filename: str
    media_type: str


class SubmissionStats(BaseModel):
    """
    Aggregate statistics over all stored submissions.

    Time windows are in UTC: today starts at midnight, this_week covers the
    last 7 days counted from the start of today, this_month starts on day 1.
    """

    total: int = 0
    today: int = 0
    this_week: int = 0
    this_month: int = 0
    completed: int = 0
    pending: int = 0
    failed: int = 0
    average_processing_time: int = 0
