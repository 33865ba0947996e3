"""
API Router for Submissions

Responsibility:
    HTTP interface of the submission lifecycle: create (with face swap),
    browse, inspect, download, delete, look up by email and statistics.
    Thin layer that delegates to SubmissionPipeline via dependency injection.

Architecture Notes:
    - Part of API Layer (Presentation)
    - Depends on Application Layer (SubmissionPipeline)
    - Domain exceptions propagate to the global handlers in main.py
    - JSON keys are camelCase (see schemas/submissions.py)

Contains:
    - POST   /submit                         - Create submission + face swap
    - GET    /submissions                    - Paginated list (HTML or JSON)
    - GET    /submissions/{submission_id}    - Submission details
    - GET    /submissions/{submission_id}/download - Download swapped image
    - DELETE /submissions/{submission_id}    - Delete submission and its files
    - GET    /api/submissions/lookup         - Submissions for one email
    - GET    /api/stats                      - Aggregate statistics

Does NOT contain:
    - Validation rules (Domain Layer)
    - File system or network I/O (Infrastructure Layer)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import FileResponse
from fastapi.templating import Jinja2Templates

from src.api.dependencies import (
    client_address,
    get_pipeline,
    get_templates,
    read_submission_form,
    wants_html,
    wants_json,
)
from src.api.schemas.common import ErrorResponse, MessageResponse
from src.api.schemas.submissions import (
    PaginationView,
    StatsResponse,
    StatsView,
    SubmissionDetailResponse,
    SubmissionListResponse,
    SubmissionLookupResponse,
    SubmissionView,
    SubmitResponse,
)
from src.application.services import SubmissionPipeline
from src.domain.submission.constants import MAX_IMAGE_SIZE_BYTES
from src.domain.submission.services import parse_query_options

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["submissions"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)


# ============================================================================
# CREATE
# ============================================================================


@router.post(
    "/submit",
    response_model=SubmitResponse,
    status_code=status.HTTP_200_OK,
    summary="Submit form with image for face swap",
    responses={
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
    },
)
async def submit(
    request: Request,
    pipeline: SubmissionPipeline = Depends(get_pipeline),
    templates: Jinja2Templates = Depends(get_templates),
):
    """
    Create a submission from a multipart form.

    Form fields:
        name, email, phone, terms (checkbox), image (JPG/PNG, max 2MB)

    Process Flow:
        1. Rate limit (before the body is read)
        2. Parse multipart body (file size capped while reading)
        3. pipeline.submit(): upload, validate, face swap, persist
        4. Return submission id and swapped image URL
           (form page with the result when the client asks for HTML)

    Returns:
        SubmitResponse (200)

    Raises:
        RateLimitExceededError: 429
        UploadRejectedError / SubmissionValidationError / InvalidImageError: 400
        TransformationError / StorageError: 500
    """
    pipeline.check_rate_limit(client_address(request))

    max_size = getattr(pipeline.storage, "max_size_bytes", MAX_IMAGE_SIZE_BYTES)
    fields, files = await read_submission_form(request, max_size_bytes=max_size)

    result = await pipeline.submit(fields, files)

    if wants_html(request):
        return templates.TemplateResponse(
            request,
            "form.html",
            {"title": "Face Swap Form", "errors": [], "form_data": {}, "result": result},
        )

    return SubmitResponse.from_result(result)


# ============================================================================
# READ
# ============================================================================


@router.get(
    "/submissions",
    response_model=SubmissionListResponse,
    summary="List submissions with pagination",
    description=(
        "HTML page by default; JSON when the Accept header contains application/json. "
        "Invalid page/limit/sort values fall back to defaults."
    ),
)
async def list_submissions(
    request: Request,
    page: Optional[str] = Query(default=None, description="Page number (default 1)"),
    limit: Optional[str] = Query(default=None, description="Page size (default 10, max 50)"),
    sort: Optional[str] = Query(
        default=None, description="name, email, createdAt or updatedAt; prefix '-' for descending"
    ),
    pipeline: SubmissionPipeline = Depends(get_pipeline),
    templates: Jinja2Templates = Depends(get_templates),
):
    options = parse_query_options(page, limit, sort)
    result = await pipeline.list_submissions(options)

    views = [SubmissionView.from_entity(item, pipeline.storage) for item in result.items]
    pagination = PaginationView.from_pagination(result.pagination)

    if wants_json(request):
        return SubmissionListResponse(submissions=views, pagination=pagination)

    return templates.TemplateResponse(
        request,
        "submissions.html",
        {
            "title": "Submissions List",
            "submissions": views,
            "pagination": pagination,
            "limit": options.limit,
        },
    )


@router.get(
    "/submissions/{submission_id}",
    response_model=SubmissionDetailResponse,
    summary="Get submission details",
    responses={404: {"model": ErrorResponse, "description": "Submission not found"}},
)
async def get_submission(
    submission_id: str,
    pipeline: SubmissionPipeline = Depends(get_pipeline),
) -> SubmissionDetailResponse:
    submission = await pipeline.get_submission(submission_id)
    return SubmissionDetailResponse(
        submission=SubmissionView.from_entity(submission, pipeline.storage)
    )


@router.get(
    "/submissions/{submission_id}/download",
    response_class=FileResponse,
    summary="Download face-swapped image",
    responses={404: {"model": ErrorResponse, "description": "Image not found"}},
)
async def download_swapped_image(
    submission_id: str,
    pipeline: SubmissionPipeline = Depends(get_pipeline),
) -> FileResponse:
    """
    Stream the swapped image as an attachment.

    Returns:
        FileResponse with Content-Disposition: attachment;
        filename="swapped_<name>_<id><ext>"
    """
    download = await pipeline.get_download(submission_id)

    logger.info(f"Download of {download.filename} for submission {submission_id}")

    return FileResponse(
        path=download.path,
        media_type=download.media_type,
        filename=download.filename,
    )


# ============================================================================
# DELETE
# ============================================================================


@router.delete(
    "/submissions/{submission_id}",
    response_model=MessageResponse,
    summary="Delete submission (admin)",
    responses={404: {"model": ErrorResponse, "description": "Submission not found"}},
)
async def delete_submission(
    submission_id: str,
    pipeline: SubmissionPipeline = Depends(get_pipeline),
) -> MessageResponse:
    """Delete the record and its original and swapped files."""
    await pipeline.delete_submission(submission_id)
    return MessageResponse(message="Submission deleted successfully")


# ============================================================================
# LOOKUP & STATS
# ============================================================================


@router.get(
    "/api/submissions/lookup",
    response_model=SubmissionLookupResponse,
    summary="Find submissions by email",
)
async def lookup_by_email(
    email: Optional[str] = Query(default=None, description="Email address"),
    pipeline: SubmissionPipeline = Depends(get_pipeline),
) -> SubmissionLookupResponse:
    submissions = await pipeline.find_by_email(email)
    views = [SubmissionView.from_entity(item, pipeline.storage) for item in submissions]
    return SubmissionLookupResponse(count=len(views), submissions=views)


@router.get(
    "/api/stats",
    response_model=StatsResponse,
    summary="Submission statistics",
)
async def submission_stats(
    pipeline: SubmissionPipeline = Depends(get_pipeline),
) -> StatsResponse:
    stats = await pipeline.get_stats()
    return StatsResponse(stats=StatsView.from_stats(stats))
