"""
Submission Entity.

The sole persistent entity: one user's validated personal details, the stored
original photo, the face swap result and processing metadata.

Unlike Value Objects, Entities are mutable and track their state over time.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from src.shared.utils.clock import utc_now


class SubmissionStatus(str, Enum):
    """
    Processing status of a submission.

    States:
        PENDING: Record exists but the face swap has not finished
        COMPLETED: Face swap succeeded, swapped image stored
        FAILED: Face swap failed after the record was created
    """

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class Submission:
    """
    Mutable entity representing a face swap submission.

    Attributes:
        name: Submitter name (4-30 alphabetic characters and spaces)
        email: Lower-cased email address
        phone: Exactly 10 digits
        terms: Terms & Conditions accepted (always True for stored records)
        original_image_path: Storage path of the uploaded photo
        original_image_filename: Generated filename of the uploaded photo
        swapped_image_path: Storage path of the face swap result (None until done)
        swapped_image_filename: Generated filename of the result (None until done)
        status: Processing status
        processing_time: Face swap duration in milliseconds
        id: 24-character hex identifier (assigned by the store on create)
        created_at: Creation timestamp (UTC, immutable)
        updated_at: Last modification timestamp (UTC)

    Examples:
        >>> submission = Submission(
        ...     name="John Doe",
        ...     email="john@example.com",
        ...     phone="1234567890",
        ...     terms=True,
        ...     original_image_path="public/uploads/original/1700000000000-ab12.jpg",
        ...     original_image_filename="1700000000000-ab12.jpg",
        ... )
        >>> submission.status
        <SubmissionStatus.PENDING: 'pending'>
        >>> submission.has_swapped_image()
        False
    """

    name: str
    email: str
    phone: str
    terms: bool
    original_image_path: str
    original_image_filename: str
    swapped_image_path: Optional[str] = None
    swapped_image_filename: Optional[str] = None
    status: SubmissionStatus = SubmissionStatus.PENDING
    processing_time: int = 0

    id: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    # Fields that update_by_id() is allowed to change
    MUTABLE_FIELDS = frozenset(
        {
            "name",
            "email",
            "phone",
            "swapped_image_path",
            "swapped_image_filename",
            "status",
            "processing_time",
        }
    )

    def has_swapped_image(self) -> bool:
        """Check whether a face swap result is attached."""
        return bool(self.swapped_image_path and self.swapped_image_filename)

    def apply_update(self, changes: dict[str, Any], now: Optional[datetime] = None) -> None:
        """
        Merge a partial update into the entity and refresh updated_at.

        Identity and created_at are never touched, whatever the caller passes.

        Args:
            changes: Field name -> new value (unknown or immutable keys are ignored)
            now: Timestamp to use for updated_at (defaults to current UTC time)
        """
        for key, value in changes.items():
            if key not in self.MUTABLE_FIELDS:
                continue
            if key == "status":
                value = SubmissionStatus(value)
            elif key == "email":
                value = str(value).lower()
            setattr(self, key, value)
        self.updated_at = now or utc_now()

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize entity to dictionary for storage.

        Returns:
            JSON-serializable dictionary (timestamps in ISO 8601)
        """
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "terms": self.terms,
            "original_image_path": self.original_image_path,
            "original_image_filename": self.original_image_filename,
            "swapped_image_path": self.swapped_image_path,
            "swapped_image_filename": self.swapped_image_filename,
            "status": self.status.value,
            "processing_time": self.processing_time,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Submission":
        """
        Deserialize entity from dictionary (typically to_dict() output).

        Args:
            data: Dictionary with entity data

        Returns:
            Reconstructed Submission instance

        Raises:
            KeyError: If a required field is missing
            ValueError: If status or timestamps are invalid
        """
        return cls(
            id=data.get("id"),
            name=data["name"],
            email=data["email"],
            phone=data["phone"],
            terms=bool(data.get("terms", True)),
            original_image_path=data["original_image_path"],
            original_image_filename=data["original_image_filename"],
            swapped_image_path=data.get("swapped_image_path"),
            swapped_image_filename=data.get("swapped_image_filename"),
            status=SubmissionStatus(data.get("status", SubmissionStatus.PENDING.value)),
            processing_time=int(data.get("processing_time") or 0),
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(data["updated_at"]),
        )
