"""
Repository Implementations Module

Concrete implementations of Domain repository interfaces.

Exports:
    - RedisSubmissionRepository: Redis-based implementation
    - InMemorySubmissionRepository: List-based implementation (tests, local runs)
"""

from .in_memory_submission_repository import InMemorySubmissionRepository
from .redis_submission_repository import RedisSubmissionRepository

__all__ = [
    "InMemorySubmissionRepository",
    "RedisSubmissionRepository",
]
