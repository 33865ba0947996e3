"""
Submission Pipeline

Responsibility:
    Composition root of the submission lifecycle.
    Write path: rate limit -> upload -> validate -> pre-check -> transform -> persist.
    Read path: list, detail, lookup by email, download, delete, statistics.

Architecture Notes:
    - Part of Application Layer (Services)
    - All collaborators are injected (repository, storage, transformer, rate limiter)
    - Raises domain exceptions; API Layer maps them to HTTP status codes
    - No retries anywhere: every failure surfaces to the caller immediately

Contains:
    - SubmissionPipeline: Orchestration of every submission operation

Does NOT contain:
    - HTTP concerns (belongs to API Layer)
    - File system or network I/O (delegated to Infrastructure Layer)
    - Validation rules (belongs to Domain Layer)
"""

import logging
import os
from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

from src.application.models import (
    DownloadableImage,
    IncomingFile,
    Pagination,
    StoredImage,
    SubmissionCreated,
    SubmissionPage,
    SubmissionStats,
)
from src.application.ports import ImageStorageProtocol, ImageTransformerProtocol
from src.application.queries.submission_stats import compute_submission_stats
from src.application.services.rate_limiter import FixedWindowRateLimiter
from src.domain.shared.exceptions import (
    InvalidImageError,
    SubmissionNotFoundError,
    SubmissionValidationError,
    TransformationError,
    UploadRejectedError,
)
from src.domain.submission.entities import Submission, SubmissionStatus
from src.domain.submission.repositories import SubmissionRepositoryProtocol
from src.domain.submission.services import (
    build_form_data,
    normalize_email,
    sanitize_filename,
    validate_submission,
    validate_submission_id,
)
from src.domain.submission.services.submission_validator import is_valid_email
from src.domain.submission.value_objects import QueryOptions, ValidationErr

logger = logging.getLogger(__name__)

DOWNLOAD_MEDIA_TYPE = "application/octet-stream"


class SubmissionPipeline:
    """
    Orchestrates the submission lifecycle.

    Process Flow (submit):
        0. Throttle (before the request body is read)
           → check_rate_limit(client)               (429 RateLimitExceededError)
        1. Intake
           → storage.accept_upload(fields, files)   (400 UploadRejectedError)
           → validate_submission(fields, image)     (400 SubmissionValidationError)
        2. Transform
           → transformer.validate_image(path)       (400 InvalidImageError, file deleted)
           → transformer.transform(path)            (500 TransformationError, original kept)
        3. Persist
           → repository.create(Submission(status=completed))
        4. Respond
           → SubmissionCreated(id, swapped URL, processing time)

    No Submission record exists for any request rejected before step 3.

    Attributes:
        repository: Submission store
        storage: Image storage area
        transformer: Face swap client (HTTP or simulated)
        rate_limiter: Per-client fixed-window limiter

    Examples:
        >>> pipeline = SubmissionPipeline(
        ...     repository=InMemorySubmissionRepository(),
        ...     storage=ImageStorageService(base_dir=tmp_path),
        ...     transformer=SimulatedFaceSwapClient(storage, delay_ms=0),
        ...     rate_limiter=FixedWindowRateLimiter(),
        ... )
        >>> created = await pipeline.submit(fields, files, client_address="10.0.0.1")
        >>> created.submission_id
        '65a1f0c2e4b0a1b2c3d4e5f6'
    """

    def __init__(
        self,
        repository: SubmissionRepositoryProtocol,
        storage: ImageStorageProtocol,
        transformer: ImageTransformerProtocol,
        rate_limiter: Optional[FixedWindowRateLimiter] = None,
    ) -> None:
        self.repository = repository
        self.storage = storage
        self.transformer = transformer
        self.rate_limiter = rate_limiter or FixedWindowRateLimiter()

    # ========================================================================
    # WRITE PATH
    # ========================================================================

    def check_rate_limit(self, client_address: str) -> None:
        """
        Count one submit attempt for a client.

        The HTTP layer calls this before parsing the multipart body, so a
        throttled client gets 429 whatever it uploads.

        Raises:
            RateLimitExceededError: Too many requests in the current window
        """
        self.rate_limiter.hit(client_address)

    async def submit(
        self,
        fields: Mapping[str, Any],
        files: Sequence[IncomingFile],
        client_address: Optional[str] = None,
    ) -> SubmissionCreated:
        """
        Create a submission: intake, transform, persist, respond.

        Args:
            fields: Text form fields (name, email, phone, terms)
            files: Uploaded files (at most one, under "image")
            client_address: Caller's address; when given, the request is counted
                by check_rate_limit() first. Omit it when the caller already did.

        Returns:
            SubmissionCreated with id, swapped image URL and processing time

        Raises:
            RateLimitExceededError: Too many requests in the current window
            UploadRejectedError: Upload limits violated (incl. FileSizeExceededError)
            SubmissionValidationError: Field or image validation failed
            InvalidImageError: Stored file failed the signature pre-check
            TransformationError: Face swap failed (original file is kept)
            StorageError: The record could not be persisted
        """
        if client_address is not None:
            self.check_rate_limit(client_address)

        stored = self._accept_upload(fields, files)

        validation = validate_submission(fields, stored)
        if isinstance(validation, ValidationErr):
            if stored is not None:
                self._discard(stored)
            logger.info(
                f"Submission rejected: {len(validation.errors)} validation error(s)"
            )
            raise SubmissionValidationError(
                list(validation.errors), form_data=validation.form_data
            )

        if stored is None:
            raise SubmissionValidationError(
                ["Image is required"], form_data=build_form_data(fields)
            )

        check = self.transformer.validate_image(stored.path)
        if not check.valid:
            self._discard(stored)
            logger.info(f"Upload {stored.filename} failed image pre-check: {check.error}")
            raise InvalidImageError(
                check.error or "Invalid image format",
                form_data=build_form_data(fields),
            )

        try:
            result = await self.transformer.transform(stored.path)
        except TransformationError as e:
            logger.error(f"Face swap failed for {stored.path}: {e}")
            raise

        normalized = validation.fields
        submission = await self.repository.create(
            Submission(
                name=normalized.name,
                email=normalized.email,
                phone=normalized.phone,
                terms=normalized.terms,
                original_image_path=stored.path,
                original_image_filename=stored.filename,
                swapped_image_path=result.swapped_path,
                swapped_image_filename=result.swapped_filename,
                status=SubmissionStatus.COMPLETED,
                processing_time=result.processing_time,
            )
        )

        logger.info(
            f"Submission {submission.id} completed in {result.processing_time}ms"
            f"{' (simulated)' if result.simulated else ''}"
        )

        return SubmissionCreated(
            submission_id=submission.id,
            swapped_image_url=result.swapped_url,
            processing_time=result.processing_time,
        )

    def _accept_upload(
        self, fields: Mapping[str, Any], files: Sequence[IncomingFile]
    ) -> Optional[StoredImage]:
        try:
            return self.storage.accept_upload(fields, files)
        except UploadRejectedError as e:
            if not e.form_data:
                e.form_data = build_form_data(fields)
            logger.info(f"Upload rejected: {e.message}")
            raise

    def _discard(self, stored: StoredImage) -> None:
        self.transformer.cleanup([stored.path])

    # ========================================================================
    # READ PATH
    # ========================================================================

    async def list_submissions(self, options: QueryOptions) -> SubmissionPage:
        """
        Return one page of submissions.

        Args:
            options: Normalized page, limit and sort (see parse_query_options)

        Returns:
            SubmissionPage with items and pagination metadata
        """
        items = await self.repository.find_all(
            limit=options.limit,
            skip=options.skip,
            sort_by=options.sort_by,
            sort_order=options.sort_order,
        )
        total_count = await self.repository.count()

        return SubmissionPage(
            items=items,
            pagination=Pagination.build(total_count, options.page, options.limit),
        )

    async def get_submission(self, submission_id: Any) -> Submission:
        """
        Load one submission.

        Raises:
            InvalidSubmissionIdError: If the id is not 24 hex characters
            SubmissionNotFoundError: If no record has this id
        """
        valid_id = validate_submission_id(submission_id)
        submission = await self.repository.find_by_id(valid_id)
        if submission is None:
            raise SubmissionNotFoundError(valid_id)
        return submission

    async def find_by_email(self, email: Any) -> list[Submission]:
        """
        All submissions for an email address, newest first.

        Raises:
            SubmissionValidationError: If the address is not a valid email
        """
        normalized = normalize_email(email)
        if not normalized or not is_valid_email(normalized):
            raise SubmissionValidationError(
                ["Please provide a valid email address"],
                form_data={"email": normalized},
            )
        return await self.repository.find_by_email(normalized)

    async def get_download(self, submission_id: Any) -> DownloadableImage:
        """
        Resolve the swapped image of a submission for download.

        The file name is derived from the submitter's name and the record id,
        e.g. "swapped_john_doe_65a1f0c2e4b0a1b2c3d4e5f6.jpg".

        Raises:
            InvalidSubmissionIdError: If the id is malformed
            SubmissionNotFoundError: If the record, its swapped reference or
                the file on disk is missing
        """
        submission = await self.get_submission(submission_id)

        if not submission.has_swapped_image():
            raise SubmissionNotFoundError(submission.id, "Swapped image not found")

        if not self.storage.exists(submission.swapped_image_path):
            logger.warning(
                f"Swapped image missing on disk for {submission.id}: "
                f"{submission.swapped_image_path}"
            )
            raise SubmissionNotFoundError(
                submission.id, "Swapped image file not found on server"
            )

        extension = os.path.splitext(submission.swapped_image_filename)[1].lower()
        safe_name = sanitize_filename(submission.name) or "submission"

        return DownloadableImage(
            path=submission.swapped_image_path,
            filename=f"swapped_{safe_name}_{submission.id}{extension}",
            media_type=DOWNLOAD_MEDIA_TYPE,
        )

    async def delete_submission(self, submission_id: Any) -> Submission:
        """
        Delete a submission and release its stored files.

        File cleanup is best-effort; the record is removed even when a file
        cannot be deleted.

        Returns:
            The deleted Submission

        Raises:
            InvalidSubmissionIdError: If the id is malformed
            SubmissionNotFoundError: If no record has this id
        """
        submission = await self.get_submission(submission_id)

        self.transformer.cleanup(
            [submission.original_image_path, submission.swapped_image_path]
        )

        if not await self.repository.delete_by_id(submission.id):
            raise SubmissionNotFoundError(submission.id)

        logger.info(f"Submission {submission.id} deleted")
        return submission

    async def get_stats(self, now: Optional[datetime] = None) -> SubmissionStats:
        """Aggregate statistics over every stored submission."""
        submissions = await self.repository.find_all(limit=None, skip=0)
        return compute_submission_stats(submissions, now=now)

    async def health_check(self) -> bool:
        """True when the submission store is reachable."""
        return await self.repository.health_check()
