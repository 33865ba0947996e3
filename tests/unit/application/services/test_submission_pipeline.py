"""
Tests for SubmissionPipeline.

Covers:
- Happy path: stored record, swapped file, normalized email
- Intake rejections leave no record and no stored file
- Transform failure keeps the original and creates no record
- Rate limiting
- Listing with pagination, lookup, download, delete, statistics
"""

import os
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from src.application.models import IncomingFile
from src.application.services import FixedWindowRateLimiter, SubmissionPipeline
from src.domain.shared.exceptions import (
    InvalidImageError,
    InvalidSubmissionIdError,
    RateLimitExceededError,
    SubmissionNotFoundError,
    SubmissionValidationError,
    TransformationServiceError,
    UploadRejectedError,
)
from src.domain.submission.entities import Submission, SubmissionStatus
from src.domain.submission.services import parse_query_options
from src.domain.submission.value_objects import SubmissionFields, ValidationOk
from src.infrastructure.persistence.repositories import InMemorySubmissionRepository


def files_in(directory: Path) -> list[str]:
    return sorted(os.listdir(directory)) if directory.exists() else []


class IncrementingClock:
    """Returns a timestamp one minute later on every call."""

    def __init__(self) -> None:
        self.current = datetime(2024, 5, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.current += timedelta(minutes=1)
        return self.current


def make_submission(name: str = "John Doe", email: str = "john@example.com") -> Submission:
    return Submission(
        name=name,
        email=email,
        phone="1234567890",
        terms=True,
        original_image_path="missing/original.jpg",
        original_image_filename="original.jpg",
        status=SubmissionStatus.COMPLETED,
        processing_time=100,
    )


# ============================================================================
# SUBMIT - HAPPY PATH
# ============================================================================


@pytest.mark.asyncio
async def test_submit_creates_completed_submission(pipeline, repository, storage, valid_fields, jpeg_upload):
    created = await pipeline.submit(valid_fields, [jpeg_upload], client_address="10.0.0.1")

    stored = await repository.find_by_id(created.submission_id)
    assert stored is not None
    assert stored.email == "john@example.com"
    assert stored.status == SubmissionStatus.COMPLETED
    assert stored.has_swapped_image()
    assert storage.exists(stored.original_image_path)
    assert storage.exists(stored.swapped_image_path)

    assert created.swapped_image_url == f"/uploads/swapped/{stored.swapped_image_filename}"
    assert created.processing_time == 0
    assert created.message == "Face swap completed successfully!"


# ============================================================================
# SUBMIT - INTAKE REJECTIONS
# ============================================================================


@pytest.mark.asyncio
async def test_invalid_fields_delete_stored_file(pipeline, repository, storage, valid_fields, jpeg_upload):
    with pytest.raises(SubmissionValidationError) as exc_info:
        await pipeline.submit({**valid_fields, "name": "Al"}, [jpeg_upload])

    assert exc_info.value.errors == ["Name must be between 4 and 30 characters long"]
    assert exc_info.value.form_data["name"] == "Al"
    assert await repository.count() == 0
    assert files_in(storage.original_dir) == []


@pytest.mark.asyncio
async def test_missing_image_is_a_validation_error(pipeline, repository, valid_fields):
    with pytest.raises(SubmissionValidationError) as exc_info:
        await pipeline.submit(valid_fields, [])

    assert exc_info.value.errors == ["Image is required"]
    assert await repository.count() == 0


@pytest.mark.asyncio
async def test_missing_image_is_rejected_even_if_fields_pass(pipeline, repository, valid_fields, monkeypatch):
    fields = SubmissionFields(name="John Doe", email="john@example.com", phone="1234567890", terms=True)
    monkeypatch.setattr(
        "src.application.services.submission_pipeline.validate_submission",
        lambda fields_, image: ValidationOk(fields=fields),
    )

    with pytest.raises(SubmissionValidationError) as exc_info:
        await pipeline.submit(valid_fields, [])

    assert exc_info.value.errors == ["Image is required"]
    assert await repository.count() == 0


@pytest.mark.asyncio
async def test_upload_rejection_echoes_form_data(pipeline, valid_fields, jpeg_bytes):
    gif = IncomingFile(
        field_name="image", filename="anim.gif", content_type="image/gif", data=jpeg_bytes, size=len(jpeg_bytes)
    )

    with pytest.raises(UploadRejectedError) as exc_info:
        await pipeline.submit(valid_fields, [gif])

    assert exc_info.value.message == "Only JPG, JPEG, and PNG images are allowed"
    assert exc_info.value.form_data["name"] == "John Doe"


@pytest.mark.asyncio
async def test_fake_image_fails_precheck_and_is_deleted(pipeline, repository, storage, valid_fields):
    fake = IncomingFile(
        field_name="image", filename="fake.jpg", content_type="image/jpeg", data=b"hello world", size=11
    )

    with pytest.raises(InvalidImageError, match="Invalid image format"):
        await pipeline.submit(valid_fields, [fake])

    assert await repository.count() == 0
    assert files_in(storage.original_dir) == []


@pytest.mark.asyncio
async def test_transform_failure_keeps_original_and_creates_no_record(
    pipeline, repository, storage, transformer, valid_fields, jpeg_upload
):
    transformer.transform = AsyncMock(side_effect=TransformationServiceError("API Error: 502 - Bad gateway", 502))

    with pytest.raises(TransformationServiceError):
        await pipeline.submit(valid_fields, [jpeg_upload])

    assert await repository.count() == 0
    assert len(files_in(storage.original_dir)) == 1


@pytest.mark.asyncio
async def test_rate_limit_rejects_before_intake(repository, storage, transformer, valid_fields, jpeg_upload):
    pipeline = SubmissionPipeline(
        repository=repository,
        storage=storage,
        transformer=transformer,
        rate_limiter=FixedWindowRateLimiter(max_requests=1, window_seconds=900),
    )
    await pipeline.submit(valid_fields, [jpeg_upload], client_address="10.0.0.1")

    with pytest.raises(RateLimitExceededError):
        await pipeline.submit(valid_fields, [jpeg_upload], client_address="10.0.0.1")

    assert await repository.count() == 1
    assert len(files_in(storage.original_dir)) == 1


@pytest.mark.asyncio
async def test_submit_without_address_leaves_counting_to_caller(repository, storage, transformer, valid_fields, jpeg_upload):
    limiter = FixedWindowRateLimiter(max_requests=1, window_seconds=900)
    pipeline = SubmissionPipeline(
        repository=repository, storage=storage, transformer=transformer, rate_limiter=limiter
    )

    pipeline.check_rate_limit("10.0.0.1")
    await pipeline.submit(valid_fields, [jpeg_upload])

    with pytest.raises(RateLimitExceededError):
        pipeline.check_rate_limit("10.0.0.1")

    assert await repository.count() == 1


# ============================================================================
# READ PATH
# ============================================================================


@pytest.mark.asyncio
async def test_second_page_of_twenty_five(storage, transformer):
    repository = InMemorySubmissionRepository(clock=IncrementingClock())
    pipeline = SubmissionPipeline(repository=repository, storage=storage, transformer=transformer)
    created = [await repository.create(make_submission()) for _ in range(25)]

    page = await pipeline.list_submissions(parse_query_options(page="2", limit="10"))

    newest_first = list(reversed(created))
    assert [item.id for item in page.items] == [item.id for item in newest_first[10:20]]
    assert page.pagination.total_count == 25
    assert page.pagination.current_page == 2
    assert page.pagination.total_pages == 3
    assert page.pagination.has_next and page.pagination.has_prev
    assert (page.pagination.prev_page, page.pagination.next_page) == (1, 3)


@pytest.mark.asyncio
async def test_get_submission_errors(pipeline):
    with pytest.raises(InvalidSubmissionIdError):
        await pipeline.get_submission("not-an-id")

    with pytest.raises(SubmissionNotFoundError):
        await pipeline.get_submission("65a1f0c2e4b0a1b2c3d4e5f6")


@pytest.mark.asyncio
async def test_find_by_email_normalizes_and_rejects_invalid(pipeline, repository):
    await repository.create(make_submission(email="jane@example.com"))
    await repository.create(make_submission(email="other@example.com"))

    matches = await pipeline.find_by_email("JANE@example.com")
    assert [item.email for item in matches] == ["jane@example.com"]

    with pytest.raises(SubmissionValidationError):
        await pipeline.find_by_email("not-an-email")


@pytest.mark.asyncio
async def test_find_by_email_matches_address_with_punctuation(pipeline, valid_fields, jpeg_upload):
    created = await pipeline.submit({**valid_fields, "email": "O'Brien@example.com"}, [jpeg_upload])

    matches = await pipeline.find_by_email("o'brien@example.com")

    assert [item.id for item in matches] == [created.submission_id]
    assert matches[0].email == "o'brien@example.com"


@pytest.mark.asyncio
async def test_download_name_is_derived_from_submitter(pipeline, valid_fields, jpeg_upload):
    created = await pipeline.submit(valid_fields, [jpeg_upload])

    download = await pipeline.get_download(created.submission_id)

    assert download.filename == f"swapped_john_doe_{created.submission_id}.jpg"
    assert download.media_type == "application/octet-stream"
    assert Path(download.path).is_file()


@pytest.mark.asyncio
async def test_download_missing_reference_or_file(pipeline, repository, storage, valid_fields, jpeg_upload):
    without_result = await repository.create(make_submission())
    with pytest.raises(SubmissionNotFoundError, match="Swapped image not found"):
        await pipeline.get_download(without_result.id)

    created = await pipeline.submit(valid_fields, [jpeg_upload])
    stored = await repository.find_by_id(created.submission_id)
    storage.delete(stored.swapped_image_path)

    with pytest.raises(SubmissionNotFoundError, match="Swapped image file not found on server"):
        await pipeline.get_download(created.submission_id)


# ============================================================================
# DELETE & STATS
# ============================================================================


@pytest.mark.asyncio
async def test_delete_removes_record_and_files(pipeline, repository, storage, valid_fields, jpeg_upload):
    created = await pipeline.submit(valid_fields, [jpeg_upload])
    stored = await repository.find_by_id(created.submission_id)

    deleted = await pipeline.delete_submission(created.submission_id)

    assert deleted.id == created.submission_id
    assert await repository.find_by_id(created.submission_id) is None
    assert not storage.exists(stored.original_image_path)
    assert not storage.exists(stored.swapped_image_path)


@pytest.mark.asyncio
async def test_delete_unknown_submission(pipeline):
    with pytest.raises(SubmissionNotFoundError):
        await pipeline.delete_submission("65a1f0c2e4b0a1b2c3d4e5f6")


@pytest.mark.asyncio
async def test_stats_cover_all_records(pipeline, repository):
    for _ in range(3):
        await repository.create(make_submission())

    stats = await pipeline.get_stats()

    assert stats.total == 3
    assert stats.today == 3
    assert stats.completed == 3
    assert stats.average_processing_time == 100


@pytest.mark.asyncio
async def test_health_check_delegates_to_repository(pipeline):
    assert await pipeline.health_check() is True
