"""
Identifier helpers.

Submission ids follow the 24-character hexadecimal format expected by the
id validator; storage tokens keep generated filenames collision-free.
"""

from uuid import uuid4


def generate_submission_id() -> str:
    """
    Generate a new 24-character lowercase hex submission id.

    Examples:
        >>> len(generate_submission_id())
        24
    """
    return uuid4().hex[:24]


def generate_storage_token(length: int = 13) -> str:
    """Random hex token appended to generated filenames."""
    return uuid4().hex[:length]
