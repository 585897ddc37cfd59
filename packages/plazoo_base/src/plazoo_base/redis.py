"""
Redis client for Plazoo.

Holds per-session state such as the remembered store selection. The
client is created on first use from REDIS_URL.
"""

import functools

import redis

from plazoo_base.settings import get_settings


@functools.lru_cache()
def get_redis_client() -> redis.Redis:
    """Shared client (cached). Values come back as str."""
    return redis.from_url(get_settings().REDIS_URL, decode_responses=True)
