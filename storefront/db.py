"""
Database Module - Upstash Redis client

Provides a lazily created sync Upstash Redis client used as the
persistence channel for cart snapshots.
"""

from typing import Optional

from upstash_redis import Redis

from storefront.config import Settings, load_settings
from storefront.errors import ERROR_STORAGE_NOT_CONFIGURED


# Singleton instance
_sync_redis_client: Optional[Redis] = None


def get_redis_sync(settings: Optional[Settings] = None) -> Redis:
    """
    Get sync Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN

    Raises:
        ValueError: If the Upstash credentials are not configured
    """
    global _sync_redis_client

    if _sync_redis_client is None:
        settings = settings or load_settings()
        if not settings.upstash_redis_rest_url or not settings.upstash_redis_rest_token:
            raise ValueError(ERROR_STORAGE_NOT_CONFIGURED)
        _sync_redis_client = Redis(
            url=settings.upstash_redis_rest_url,
            token=settings.upstash_redis_rest_token,
        )

    return _sync_redis_client


class RedisKeys:
    """Redis key prefixes for different data types."""

    # Cart snapshots
    CART = "cart:"  # cart:{store_name}

    @staticmethod
    def cart_key(store_name: str) -> str:
        return f"{RedisKeys.CART}{store_name}"
