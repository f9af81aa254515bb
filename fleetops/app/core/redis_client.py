"""
Redis client initialization and connection management.

Redis holds the token revocation list.
"""

import redis.asyncio as redis
from redis.exceptions import RedisError
from fleetops.app.core.config import settings


redis_client = redis.from_url(
    settings.redis_url,
    decode_responses=settings.redis_decode_responses,
)


async def get_redis():
    """
    Get Redis client instance.

    Used as a FastAPI dependency so tests can substitute a fake.
    """
    return redis_client


async def ping_redis(client=None) -> bool:
    """
    Test Redis connection.

    Returns:
        True if connection successful, False otherwise
    """
    try:
        return await (client or redis_client).ping()
    except RedisError:
        return False
