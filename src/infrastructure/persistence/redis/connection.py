"""
Redis Connection Pool Management.

Provides the singleton connection pool used by RedisSubmissionRepository.

Responsibility:
    - Manage Redis connection pool (max 10 connections)
    - Hand out clients bound to the pool (no network I/O until first command)
    - Health check with PING
    - Close the pool on application shutdown

Architecture Notes:
    - Infrastructure Layer (external dependency on Redis)
    - Singleton pattern for connection pool reuse
    - Thread-safe with threading.Lock
    - Environment-based configuration

Business Rules:
    - Max connections: 10 (configurable via REDIS_MAX_CONNECTIONS)
    - Connection timeout: 5s (configurable via REDIS_TIMEOUT)
    - Decode responses: True (return strings not bytes)

Examples:
    >>> client = get_redis_client()
    >>> client.set("key", "value")
    >>>
    >>> if health_check():
    ...     print("Redis is healthy")
    >>>
    >>> close_connections()
"""

import logging
import os
import threading
from typing import Optional

from redis import ConnectionPool, Redis
from redis.exceptions import RedisError

# Configure logger for this module
logger = logging.getLogger(__name__)

# Singleton connection pool (thread-safe)
_redis_pool: Optional[ConnectionPool] = None
_pool_lock = threading.Lock()


def get_connection_pool(
    host: Optional[str] = None,
    port: Optional[int] = None,
    db: Optional[int] = None,
    max_connections: Optional[int] = None,
    timeout: Optional[int] = None,
) -> ConnectionPool:
    """
    Get the shared connection pool, creating it on first call.

    Creating a pool does not open a connection; the first command does.

    Args:
        host: Redis hostname (default from env: REDIS_HOST or "localhost")
        port: Redis port (default from env: REDIS_PORT or 6379)
        db: Redis database number (default from env: REDIS_DB or 0)
        max_connections: Max pool size (default from env: REDIS_MAX_CONNECTIONS or 10)
        timeout: Socket timeout in seconds (default from env: REDIS_TIMEOUT or 5)

    Returns:
        The process-wide ConnectionPool
    """
    global _redis_pool

    if _redis_pool is None:
        with _pool_lock:
            # Double-check locking pattern
            if _redis_pool is None:
                redis_host = host or os.getenv("REDIS_HOST", "localhost")
                redis_port = port or int(os.getenv("REDIS_PORT", "6379"))
                redis_db = db if db is not None else int(os.getenv("REDIS_DB", "0"))
                max_conn = max_connections or int(
                    os.getenv("REDIS_MAX_CONNECTIONS", "10")
                )
                conn_timeout = timeout or int(os.getenv("REDIS_TIMEOUT", "5"))

                logger.info(
                    f"Creating Redis connection pool: "
                    f"host={redis_host}, port={redis_port}, db={redis_db}, "
                    f"max_connections={max_conn}, timeout={conn_timeout}s"
                )

                _redis_pool = ConnectionPool(
                    host=redis_host,
                    port=redis_port,
                    db=redis_db,
                    max_connections=max_conn,
                    socket_timeout=conn_timeout,
                    socket_connect_timeout=conn_timeout,
                    socket_keepalive=True,
                    decode_responses=True,  # Return strings not bytes
                )

    return _redis_pool


def get_redis_client() -> Redis:
    """
    Get a Redis client bound to the shared pool.

    Returns:
        Redis client (lazy: connects on the first command)
    """
    return Redis(connection_pool=get_connection_pool())


def health_check(client: Optional[Redis] = None) -> bool:
    """
    Check Redis health with PING.

    Args:
        client: Client to test (default: a pooled client)

    Returns:
        True if Redis answered PING, False otherwise (never raises)
    """
    try:
        if (client or get_redis_client()).ping():
            logger.debug("Redis health check: OK")
            return True
        logger.warning("Redis health check: PING returned False")
        return False

    except RedisError as e:
        logger.warning(f"Redis health check failed: {e}")
        return False


def close_connections() -> None:
    """
    Close all Redis connections and reset the singleton pool.

    Safe to call multiple times (idempotent). Called on application shutdown.
    """
    global _redis_pool

    with _pool_lock:
        if _redis_pool is None:
            logger.debug("Redis connection pool already closed or not initialized")
            return

        logger.info("Closing Redis connection pool")
        try:
            _redis_pool.disconnect()
        except RedisError as e:
            logger.error(f"Error closing Redis connection pool: {e}")
        finally:
            _redis_pool = None
