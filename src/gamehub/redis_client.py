"""Optional Redis client.

Only the rate limiter needs Redis. Deployments without ``GAMEHUB_REDIS_URL``
never call ``init_redis`` and ``redis_enabled()`` stays false.
"""

import redis.asyncio as redis

_client: redis.Redis | None = None


async def init_redis(url: str, max_connections: int = 20) -> None:
    """Create the shared client; connections open lazily on the first command."""
    global _client  # noqa: PLW0603
    _client = redis.from_url(  # type: ignore[no-untyped-call]
        url,
        encoding="utf-8",
        decode_responses=True,
        max_connections=max_connections,
        socket_connect_timeout=1,
    )


async def close_redis() -> None:
    global _client  # noqa: PLW0603
    if _client is not None:
        await _client.aclose()
        _client = None


def redis_enabled() -> bool:
    return _client is not None


def get_redis() -> redis.Redis:
    if _client is None:
        msg = "Redis is not configured for this deployment"
        raise RuntimeError(msg)
    return _client
