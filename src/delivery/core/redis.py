"""Redis client with connection pooling and reconnect backoff.

Redis holds every project record, the push registry and the email audit log.
If it is not configured or unreachable, get_redis() returns None and the API
answers 503 instead of failing at import time. A failed connection is retried
on a later call once ``redis_retry_seconds`` has passed.
"""

import time

from redis.asyncio import ConnectionPool, Redis

from src.delivery.core.config import get_settings
from src.delivery.core.logging import get_logger

logger = get_logger(__name__)

_pool: ConnectionPool | None = None
_redis: Redis | None = None
_next_attempt_at: float = 0.0


async def get_redis() -> Redis | None:
    """Get Redis client. Returns None if unavailable.

    The connection is lazily initialized and reused thereafter. After a
    failure, calls inside the backoff window return None without connecting.
    """
    global _pool, _redis, _next_attempt_at

    if _redis is not None:
        return _redis

    now = time.monotonic()
    if now < _next_attempt_at:
        return None

    settings = get_settings()
    _next_attempt_at = now + settings.redis_retry_seconds

    if not settings.redis_url:
        logger.info("Redis not configured (REDIS_URL not set)")
        return None

    try:
        _pool = ConnectionPool.from_url(
            settings.redis_url,
            max_connections=settings.redis_pool_size,
            decode_responses=True,
        )
        _redis = Redis(connection_pool=_pool)

        await _redis.ping()  # type: ignore[misc]
        logger.info("Redis connected successfully")
        _next_attempt_at = 0.0
        return _redis

    except Exception as e:
        logger.warning(
            "Redis connection failed",
            error=str(e),
            retry_in_seconds=settings.redis_retry_seconds,
        )
        if _redis:
            await _redis.aclose()
            _redis = None
        if _pool:
            await _pool.disconnect()
            _pool = None
        return None


async def close_redis() -> None:
    """Close Redis connection pool.

    Should be called during application shutdown.
    """
    global _pool, _redis, _next_attempt_at

    if _redis:
        await _redis.aclose()
        logger.info("Redis connection closed")
    if _pool:
        await _pool.disconnect()

    _redis = None
    _pool = None
    _next_attempt_at = 0.0


def reset_redis_state() -> None:
    """Reset Redis state for testing purposes."""
    global _pool, _redis, _next_attempt_at
    _redis = None
    _pool = None
    _next_attempt_at = 0.0
