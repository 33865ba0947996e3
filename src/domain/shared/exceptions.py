"""
Domain Layer Exceptions

This module defines the exception hierarchy shared by all layers.
All project-specific exceptions inherit from DomainException.

Responsibility:
    - Base exception class for domain errors
    - Type-safe error handling across layers
    - Clear separation from framework exceptions

Architecture Notes:
    - Part of Shared Domain (used across all subdomains)
    - API Layer maps each family to an HTTP status code (see src/api/main.py)
    - Client input errors carry the sanitized form data for re-rendering

Families:
    - Client input errors (400/429): SubmissionValidationError, UploadRejectedError,
      FileSizeExceededError, InvalidImageError, InvalidSubmissionIdError,
      RateLimitExceededError
    - Not found (404): SubmissionNotFoundError
    - Upstream errors (500): TransformationError and subclasses
    - Storage errors (500): StorageError
"""

from typing import Any, Optional


class DomainException(Exception):
    """
    Base exception for all domain layer errors.

    This exception serves as the root of the domain exception hierarchy.
    All domain-specific exceptions should inherit from this class to enable
    type-safe error handling in Application and API layers.

    Usage:
        - Catch this in Application Layer to handle all domain errors
        - API Layer converts to appropriate HTTP status codes

    Examples:
        >>> raise DomainException("Business rule violation")

        >>> try:
        ...     # domain operation
        ... except DomainException as e:
        ...     logger.error(f"Domain error: {e}")
    """

    def __init__(self, message: str) -> None:
        """
        Initialize domain exception with error message.

        Args:
            message: Human-readable error description
        """
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        """String representation of the exception."""
        return f"{self.__class__.__name__}: {self.message}"

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return f"{self.__class__.__name__}(message={self.message!r})"


# ============================================================================
# CLIENT INPUT ERRORS
# ============================================================================


class FormSubmissionError(DomainException):
    """
    Base class for errors raised while taking in a form submission.

    Carries the caller's sanitized input so the form can be re-populated.

    Attributes:
        form_data: Sanitized field values echoed back to the caller
    """

    def __init__(
        self, message: str, form_data: Optional[dict[str, Any]] = None
    ) -> None:
        self.form_data: dict[str, Any] = dict(form_data or {})
        super().__init__(message)


class SubmissionValidationError(FormSubmissionError):
    """
    Raised when submitted personal fields or the attached image fail validation.

    All violations are collected before raising; `errors` preserves their order.

    Examples:
        >>> raise SubmissionValidationError(
        ...     ["Name must be between 4 and 30 characters long"],
        ...     form_data={"name": "Al", "email": "", "phone": "", "terms": ""},
        ... )
    """

    def __init__(
        self, errors: list[str], form_data: Optional[dict[str, Any]] = None
    ) -> None:
        self.errors = list(errors)
        super().__init__(". ".join(self.errors), form_data)


class UploadRejectedError(FormSubmissionError):
    """
    Raised when the multipart upload itself is rejected.

    This exception is raised when:
    - More than one file is sent
    - The file arrives under an unexpected field name
    - The file extension or MIME type is not JPG/JPEG/PNG
    - Form fields exceed the count or size limits
    """


class FileSizeExceededError(UploadRejectedError):
    """
    Raised when an uploaded image exceeds the maximum allowed size.

    Attributes:
        file_size: Size of the rejected file in bytes
        max_size: Configured maximum in bytes
    """

    def __init__(
        self,
        message: str,
        file_size: int,
        max_size: int,
        form_data: Optional[dict[str, Any]] = None,
    ) -> None:
        self.file_size = file_size
        self.max_size = max_size
        super().__init__(message, form_data)


class InvalidImageError(FormSubmissionError):
    """
    Raised when a stored upload fails the image authenticity pre-check.

    Examples:
        >>> raise InvalidImageError("Invalid image format")
    """


class RateLimitExceededError(FormSubmissionError):
    """
    Raised when a client exceeds the submission rate limit.

    Attributes:
        client_address: Address the limit was applied to
        retry_after: Seconds until the current window resets
    """

    def __init__(self, message: str, client_address: str, retry_after: int) -> None:
        self.client_address = client_address
        self.retry_after = retry_after
        super().__init__(message)


class InvalidSubmissionIdError(DomainException):
    """
    Raised when a path identifier does not match the 24-character hex format.

    Attributes:
        raw_value: The value that failed validation
    """

    def __init__(self, message: str, raw_value: Optional[str] = None) -> None:
        self.raw_value = raw_value
        super().__init__(message)


# ============================================================================
# NOT FOUND
# ============================================================================


class SubmissionNotFoundError(DomainException):
    """
    Raised when a submission (or its stored result file) cannot be found.

    Attributes:
        submission_id: Identifier that was looked up
    """

    def __init__(self, submission_id: str, message: Optional[str] = None) -> None:
        self.submission_id = submission_id
        super().__init__(message or "Submission not found")


# ============================================================================
# UPSTREAM (FACE SWAP SERVICE) ERRORS
# ============================================================================


class TransformationError(DomainException):
    """
    Base exception for face swap transformation failures.

    Callers show a generic message; the detailed message is logged only.
    """


class TransformationServiceError(TransformationError):
    """
    Raised when the face swap service answers with an error or a malformed payload.

    Attributes:
        status_code: HTTP status returned by the service (None for payload errors)
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class TransformationConnectionError(TransformationError):
    """Raised when the face swap service cannot be reached or times out."""


class TransformationConfigurationError(TransformationError):
    """Raised when the face swap client is missing its API key or endpoint."""


# ============================================================================
# STORAGE ERRORS
# ============================================================================


class StorageError(DomainException):
    """
    Raised when the file system or the document store fails.

    Examples:
        >>> raise StorageError("Failed to create submission")
    """
