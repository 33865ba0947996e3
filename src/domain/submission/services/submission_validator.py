"""
Submission Validator

Field-level validation of a form submission, built on the sanitizer.

Responsibility:
    - Sanitize raw name/email/phone/terms input
    - Check every rule independently and collect all violations
    - Return ValidationOk(normalized fields) or ValidationErr(messages, form data)

Architecture Notes:
    - Domain Service (pure, no I/O)
    - Called by SubmissionPipeline after the upload handler stored the image
    - Email syntax is checked with email-validator (no DNS lookups)
"""

import re
from typing import Any, Mapping, Optional, Protocol

from email_validator import EmailNotValidError, validate_email

from src.domain.submission.constants import (
    ALLOWED_IMAGE_MIME_TYPES,
    MAX_IMAGE_SIZE_BYTES,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    NAME_PATTERN,
    PHONE_PATTERN,
    TRUTHY_TERMS_VALUES,
)
from src.domain.submission.services.sanitizer import sanitize_input
from src.domain.submission.value_objects.validation_result import (
    SubmissionFields,
    ValidationErr,
    ValidationOk,
    ValidationResult,
)

_NAME_RE = re.compile(NAME_PATTERN)
_PHONE_RE = re.compile(PHONE_PATTERN)


class ImageInfo(Protocol):
    """Minimal view of an uploaded image needed for validation."""

    mime_type: str
    size: int


def is_terms_accepted(value: Any) -> bool:
    """
    Interpret a checkbox value.

    Examples:
        >>> is_terms_accepted("on")
        True
        >>> is_terms_accepted("")
        False
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY_TERMS_VALUES
    return False


def is_valid_email(email: str) -> bool:
    """Check email syntax (RFC-reasonable, no deliverability check)."""
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def normalize_email(email: Any) -> str:
    """Canonical form under which emails are stored and looked up."""
    return sanitize_input(email).lower()


def _validate_name(name: str, errors: list[str]) -> None:
    if not name:
        errors.append("Name is required")
    elif not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        errors.append(
            f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters long"
        )
    elif not _NAME_RE.match(name):
        errors.append("Name must contain only alphabetic characters and spaces")


def _validate_email(email: str, errors: list[str]) -> None:
    if not email:
        errors.append("Email is required")
    elif not is_valid_email(email):
        errors.append("Please provide a valid email address")


def _validate_phone(phone: str, errors: list[str]) -> None:
    if not phone:
        errors.append("Phone number is required")
    elif not _PHONE_RE.match(phone):
        errors.append("Phone number must be exactly 10 digits")


def _validate_image(image: Optional[ImageInfo], errors: list[str]) -> None:
    if image is None:
        errors.append("Image is required")
        return

    if image.mime_type not in ALLOWED_IMAGE_MIME_TYPES:
        errors.append("Image must be in JPG, JPEG, or PNG format")

    if image.size > MAX_IMAGE_SIZE_BYTES:
        errors.append("Image size must not exceed 2MB")


def build_form_data(fields: Mapping[str, Any]) -> dict[str, str]:
    """
    Best-effort sanitized copy of the personal fields for re-populating a form.

    Args:
        fields: Raw submitted fields

    Returns:
        Dict with name, email, phone and terms ("on" or "")
    """
    return {
        "name": sanitize_input(fields.get("name") or ""),
        "email": sanitize_input(fields.get("email") or ""),
        "phone": sanitize_input(fields.get("phone") or ""),
        "terms": "on" if is_terms_accepted(fields.get("terms")) else "",
    }


def validate_submission(
    fields: Mapping[str, Any], image: Optional[ImageInfo]
) -> ValidationResult:
    """
    Validate a form submission.

    Rules (all checked, violations collected in this order):
        - name: required; length 4-30; letters and spaces only
        - email: required; valid address (normalized to lowercase on success)
        - phone: required; exactly 10 digits (strict, no stripping)
        - terms: must be accepted
        - image: required; JPG/JPEG/PNG MIME type; at most 2 MiB

    Args:
        fields: Raw submitted fields (name, email, phone, terms)
        image: Uploaded image info (None when no file was sent)

    Returns:
        ValidationOk with normalized SubmissionFields, or
        ValidationErr with messages and sanitized form data

    Examples:
        >>> result = validate_submission(
        ...     {"name": "John Doe", "email": "JOHN@EXAMPLE.COM",
        ...      "phone": "1234567890", "terms": "on"},
        ...     image,
        ... )
        >>> result.fields.email
        'john@example.com'

        >>> result = validate_submission({"name": "Al"}, None)
        >>> result.is_valid
        False
        >>> result.errors[0]
        'Name must be between 4 and 30 characters long'
    """
    form_data = build_form_data(fields)
    errors: list[str] = []

    _validate_name(form_data["name"], errors)
    _validate_email(form_data["email"], errors)
    _validate_phone(form_data["phone"], errors)
    if not form_data["terms"]:
        errors.append("You must accept the Terms & Conditions")
    _validate_image(image, errors)

    if errors:
        return ValidationErr(errors=tuple(errors), form_data=form_data)

    return ValidationOk(
        fields=SubmissionFields(
            name=form_data["name"],
            email=normalize_email(form_data["email"]),
            phone=form_data["phone"],
            terms=True,
        )
    )
