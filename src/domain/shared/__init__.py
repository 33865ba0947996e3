"""
Shared Domain Module

Shared domain concepts used across all layers.

This module exports:
    - DomainException: Base exception for all domain errors
    - The submission error families (see exceptions.py)
"""

from .exceptions import (
    DomainException,
    FileSizeExceededError,
    FormSubmissionError,
    InvalidImageError,
    InvalidSubmissionIdError,
    RateLimitExceededError,
    StorageError,
    SubmissionNotFoundError,
    SubmissionValidationError,
    TransformationConfigurationError,
    TransformationConnectionError,
    TransformationError,
    TransformationServiceError,
    UploadRejectedError,
)

__all__ = [
    "DomainException",
    "FileSizeExceededError",
    "FormSubmissionError",
    "InvalidImageError",
    "InvalidSubmissionIdError",
    "RateLimitExceededError",
    "StorageError",
    "SubmissionNotFoundError",
    "SubmissionValidationError",
    "TransformationConfigurationError",
    "TransformationConnectionError",
    "TransformationError",
    "TransformationServiceError",
    "UploadRejectedError",
]
