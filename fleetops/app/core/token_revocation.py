"""
Token revocation using Redis.

Logging out blacklists the presented token until it would have expired
anyway, so a leaked token stops working immediately.
"""

import logging
import time
from typing import Optional

from redis.exceptions import RedisError

from fleetops.app.core.config import settings

logger = logging.getLogger("fleetops.auth")

# Redis key prefix for blacklisted tokens
TOKEN_BLACKLIST_PREFIX = "blacklist:token:"


def _ttl_seconds(expires_at: Optional[int]) -> int:
    if expires_at:
        return max(int(expires_at - time.time()), 1)
    return settings.access_token_expire_minutes * 60


async def revoke_token(redis_client, token: str, user_id: str, expires_at: Optional[int] = None) -> bool:
    """
    Revoke a specific JWT token by adding it to the blacklist.

    Args:
        redis_client: Redis connection
        token: The JWT token string to revoke
        user_id: Subject who owns the token
        expires_at: Token `exp` claim; the blacklist entry lives until then

    Returns:
        True if successfully revoked, False otherwise
    """
    try:
        await redis_client.set(
            f"{TOKEN_BLACKLIST_PREFIX}{token}",
            str(user_id),
            ex=_ttl_seconds(expires_at)
        )
        return True
    except RedisError:
        logger.exception("Error revoking token for user %s", user_id)
        return False


async def is_token_revoked(redis_client, token: str) -> bool:
    """
    Check if a token has been revoked.

    If Redis is unreachable the token is treated as valid and a warning
    is logged.
    """
    try:
        exists = await redis_client.exists(f"{TOKEN_BLACKLIST_PREFIX}{token}")
        return exists > 0
    except RedisError:
        logger.warning("Token revocation check skipped: Redis unavailable")
        return False
