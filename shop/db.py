"""
Redis client for shared counters.

Provides a singleton async Upstash Redis client used for distributed rate
limiting across serverless instances.
"""

from typing import Optional

from upstash_redis.asyncio import Redis as AsyncRedis

from shop.config import ShopConfig, get_shop_config

_redis_client: Optional[AsyncRedis] = None


def get_redis(config: Optional[ShopConfig] = None) -> AsyncRedis:
    """
    Get async Upstash Redis client (singleton).

    Uses the standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN

    Raises:
        ValueError: the variables are not set
    """
    global _redis_client

    if _redis_client is None:
        config = config or get_shop_config()
        if not config.redis_configured:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _redis_client = AsyncRedis(url=config.redis_url, token=config.redis_token)

    return _redis_client


class RedisKeys:
    """Redis key prefixes for different data types."""

    RATE_LIMIT = "rate_limit:"  # rate_limit:{client_ip}:{path}

    @staticmethod
    def rate_limit_key(client_ip: str, path: str) -> str:
        return f"{RedisKeys.RATE_LIMIT}{client_ip}:{path}"


class TTL:
    """TTL values in seconds."""

    RATE_LIMIT_WINDOW = 60
