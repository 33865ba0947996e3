"""Time helpers shared by entities, storage and statistics."""

import time
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def epoch_millis() -> int:
    """Current Unix time in milliseconds (used in generated filenames)."""
    return int(time.time() * 1000)
