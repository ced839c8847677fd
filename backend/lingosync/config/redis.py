"""
Redis connection used to persist translation history across restarts.
"""
from typing import Optional
import redis.asyncio as redis
from lingosync.config.settings import settings

_client: Optional[redis.Redis] = None


def build_redis_url() -> str:
    auth = f":{settings.REDIS_PASSWORD}@" if settings.REDIS_PASSWORD else ""
    return f"redis://{auth}{settings.REDIS_HOST}:{settings.REDIS_PORT}/{settings.REDIS_DB}"


async def get_redis() -> redis.Redis:
    """Shared client, created on first use. Values come back as str."""
    global _client
    if _client is None:
        _client = redis.Redis.from_url(build_redis_url(), decode_responses=True)
    return _client


async def close_redis():
    global _client
    if _client is None:
        return
    await _client.aclose()
    _client = None
