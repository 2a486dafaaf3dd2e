"""
Redis Client

Provides a singleton async Upstash Redis client for hosted deployments
(STORAGE_BACKEND=redis). Local runs use the file store and never touch this.
"""

from typing import Optional

from upstash_redis.asyncio import Redis as AsyncRedis

from storefront import config

_redis_client: Optional[AsyncRedis] = None


def get_redis() -> AsyncRedis:
    """
    Get async Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _redis_client

    if _redis_client is None:
        if not config.UPSTASH_REDIS_REST_URL or not config.UPSTASH_REDIS_REST_TOKEN:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _redis_client = AsyncRedis(url=config.UPSTASH_REDIS_REST_URL, token=config.UPSTASH_REDIS_REST_TOKEN)

    return _redis_client


class RedisKeys:
    """Redis key layout. Every key is namespaced by the storage scope."""

    PREFIX = "storefront:"  # storefront:{scope}:{key}

    @staticmethod
    def scoped_key(scope: str, key: str) -> str:
        return f"{RedisKeys.PREFIX}{scope}:{key}"
