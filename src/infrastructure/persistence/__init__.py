"""
Persistence Infrastructure Module

Data persistence implementations (Redis, repositories).

Exports:
    From redis:
        - get_redis_client, close_connections

    From repositories:
        - RedisSubmissionRepository
        - InMemorySubmissionRepository
"""

from .redis import close_connections, get_redis_client
from .repositories import InMemorySubmissionRepository, RedisSubmissionRepository

__all__ = [
    "close_connections",
    "get_redis_client",
    "InMemorySubmissionRepository",
    "RedisSubmissionRepository",
]
