"""
Submission Domain Services Module

Pure functions operating on raw input: sanitization and validation.

This module exports:
    - sanitize_input: Idempotent text sanitizer
    - validate_submission: Form field and image validation
    - parse_query_options: List pagination/sort normalization
    - validate_submission_id: 24-character hex id check
"""

from .query_validator import (
    is_valid_submission_id,
    parse_query_options,
    validate_submission_id,
)
from .sanitizer import (
    is_safe_filename,
    sanitize_email,
    sanitize_filename,
    sanitize_input,
    sanitize_name,
    sanitize_object,
    sanitize_phone,
    sanitize_url,
)
from .submission_validator import build_form_data, normalize_email, validate_submission

__all__ = [
    "build_form_data",
    "is_safe_filename",
    "is_valid_submission_id",
    "normalize_email",
    "parse_query_options",
    "sanitize_email",
    "sanitize_filename",
    "sanitize_input",
    "sanitize_name",
    "sanitize_object",
    "sanitize_phone",
    "sanitize_url",
    "validate_submission",
    "validate_submission_id",
]
