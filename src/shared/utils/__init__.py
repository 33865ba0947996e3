"""
Shared Utilities

Responsibility:
    Generic utility functions used across the application.

Contains:
    - clock: timezone-aware UTC timestamps and epoch milliseconds
    - identifiers: submission ids and random storage tokens

Does NOT contain:
    - Domain-specific utilities (use Domain layer)
    - Infrastructure utilities (use Infrastructure layer)
"""

from .clock import epoch_millis, utc_now
from .identifiers import generate_storage_token, generate_submission_id

__all__ = [
    "epoch_millis",
    "utc_now",
    "generate_storage_token",
    "generate_submission_id",
]
