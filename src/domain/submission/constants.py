"""
Submission Domain Constants

Limits, allow-lists and byte signatures shared by the validator,
the upload handler and the face swap clients.
"""

from typing import Dict, FrozenSet, Tuple


# ============================================================================
# PERSONAL FIELDS
# ============================================================================

NAME_MIN_LENGTH: int = 4
NAME_MAX_LENGTH: int = 30
NAME_PATTERN: str = r"^[A-Za-z\s]+$"
PHONE_PATTERN: str = r"^[0-9]{10}$"

# Checkbox values that count as "terms accepted"
TRUTHY_TERMS_VALUES: FrozenSet[str] = frozenset({"on", "true", "1", "yes"})


# ============================================================================
# IMAGE UPLOADS
# ============================================================================

MAX_IMAGE_SIZE_BYTES: int = 2 * 1024 * 1024  # 2 MiB

ALLOWED_IMAGE_MIME_TYPES: FrozenSet[str] = frozenset(
    {"image/jpeg", "image/jpg", "image/png"}
)
ALLOWED_IMAGE_EXTENSIONS: FrozenSet[str] = frozenset({".jpg", ".jpeg", ".png"})

MIME_TO_EXTENSION: Dict[str, str] = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
}

IMAGE_FIELD_NAME: str = "image"

# Form flooding limits
MAX_UPLOAD_FILES: int = 1
MAX_FORM_FIELDS: int = 10
MAX_FIELD_VALUE_BYTES: int = 1024
MAX_FIELD_NAME_BYTES: int = 100

# Byte signatures checked in order; WEBP files start with a RIFF container header
IMAGE_SIGNATURES: Tuple[Tuple[str, bytes], ...] = (
    ("jpeg", b"\xff\xd8\xff"),
    ("png", b"\x89\x50\x4e\x47"),
    ("gif", b"\x47\x49\x46"),
    ("webp", b"\x52\x49\x46\x46"),
)

FORMAT_TO_EXTENSION: Dict[str, str] = {
    "jpeg": ".jpg",
    "png": ".png",
    "gif": ".gif",
    "webp": ".webp",
}


# ============================================================================
# LISTING & IDENTIFIERS
# ============================================================================

DEFAULT_PAGE: int = 1
DEFAULT_PAGE_LIMIT: int = 10
MAX_PAGE_LIMIT: int = 50
# Keeps skip = (page - 1) * limit within what the stores can address
MAX_PAGE: int = 100_000

SORTABLE_FIELDS: FrozenSet[str] = frozenset({"name", "email", "createdAt", "updatedAt"})
DEFAULT_SORT_FIELD: str = "createdAt"
SORT_ASCENDING: int = 1
SORT_DESCENDING: int = -1

SUBMISSION_ID_PATTERN: str = r"^[0-9a-fA-F]{24}$"
SUBMISSION_ID_LENGTH: int = 24
