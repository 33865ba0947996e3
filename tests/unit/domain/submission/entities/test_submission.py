"""
Tests for the Submission entity.
"""

from datetime import datetime, timezone

import pytest

from src.domain.submission.entities import Submission, SubmissionStatus

CREATED = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def submission():
    return Submission(
        id="65a1f0c2e4b0a1b2c3d4e5f6",
        name="John Doe",
        email="john@example.com",
        phone="1234567890",
        terms=True,
        original_image_path="uploads/original/1714564800000-ab12.jpg",
        original_image_filename="1714564800000-ab12.jpg",
        created_at=CREATED,
        updated_at=CREATED,
    )


def test_new_submission_is_pending_without_swapped_image(submission):
    assert submission.status == SubmissionStatus.PENDING
    assert submission.has_swapped_image() is False


def test_apply_update_refreshes_updated_at_only(submission):
    later = datetime(2024, 5, 2, tzinfo=timezone.utc)

    submission.apply_update(
        {
            "status": "completed",
            "swapped_image_path": "uploads/swapped/swapped_1_x.jpg",
            "swapped_image_filename": "swapped_1_x.jpg",
            "email": "NEW@Example.com",
        },
        now=later,
    )

    assert submission.status == SubmissionStatus.COMPLETED
    assert submission.has_swapped_image()
    assert submission.email == "new@example.com"
    assert submission.updated_at == later
    assert submission.created_at == CREATED


def test_apply_update_ignores_identity_and_creation_time(submission):
    submission.apply_update({"id": "ffffffffffffffffffffffff", "created_at": "x", "unknown": 1})

    assert submission.id == "65a1f0c2e4b0a1b2c3d4e5f6"
    assert submission.created_at == CREATED


def test_dict_round_trip_preserves_fields(submission):
    restored = Submission.from_dict(submission.to_dict())

    assert restored == submission
    assert restored.created_at.tzinfo is not None
