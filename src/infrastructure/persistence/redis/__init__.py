"""
Redis Infrastructure Module

Connection pool management for the Redis document store.

Exports:
    - get_connection_pool: Shared connection pool (singleton)
    - get_redis_client: Redis client bound to the pool
    - health_check: Check Redis health with PING test
    - close_connections: Close all Redis connections
"""

from .connection import (
    close_connections,
    get_connection_pool,
    get_redis_client,
    health_check,
)

__all__ = [
    "close_connections",
    "get_connection_pool",
    "get_redis_client",
    "health_check",
]
