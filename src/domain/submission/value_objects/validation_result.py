"""
Validation Result Value Objects.

A form validation produces exactly one of two outcomes:
    - ValidationOk: normalized personal fields ready to be stored
    - ValidationErr: ordered error messages plus the sanitized input to echo back

Both are immutable; callers branch on `is_valid`.
"""

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class SubmissionFields:
    """
    Normalized personal fields of a valid submission.

    Attributes:
        name: Sanitized name
        email: Sanitized, lower-cased email
        phone: Sanitized 10-digit phone number
        terms: Always True (invalid otherwise)
    """

    name: str
    email: str
    phone: str
    terms: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "terms": self.terms,
        }


@dataclass(frozen=True)
class ValidationOk:
    """Successful validation carrying the normalized field set."""

    fields: SubmissionFields
    is_valid: bool = field(default=True, init=False)


@dataclass(frozen=True)
class ValidationErr:
    """
    Failed validation.

    Attributes:
        errors: Non-empty list of human-readable messages, in rule order
        form_data: Best-effort sanitized values for re-populating the form
    """

    errors: tuple[str, ...]
    form_data: dict[str, Any]
    is_valid: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        if not self.errors:
            raise ValueError("ValidationErr requires at least one error message")

    @property
    def message(self) -> str:
        """All messages joined for display."""
        return ". ".join(self.errors)


ValidationResult = Union[ValidationOk, ValidationErr]
