"""Optional Redis connection pool.

Only the rate limiter uses Redis. With ``TASKFLOW_REDIS_URL`` unset the pool is
never created and callers treat Redis as disabled.
"""

import redis.asyncio as redis

_pool: redis.Redis | None = None


async def init_redis(url: str, max_connections: int = 20) -> None:
    global _pool  # noqa: PLW0603
    _pool = redis.from_url(  # type: ignore[no-untyped-call]
        url,
        encoding="utf-8",
        decode_responses=True,
        max_connections=max_connections,
    )


async def close_redis() -> None:
    global _pool  # noqa: PLW0603
    if _pool:
        await _pool.aclose()
        _pool = None


def is_redis_enabled() -> bool:
    return _pool is not None


def get_redis() -> redis.Redis:
    """Return the pool; raises RuntimeError when Redis is disabled."""
    if _pool is None:
        msg = "Redis is not configured"
        raise RuntimeError(msg)
    return _pool
