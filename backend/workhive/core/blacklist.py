"""
backend/workhive/core/blacklist.py

JWT Blacklist Management using Async Redis

Handles JWT token blacklisting using an asynchronous Redis client:
- Stores token `jti` (JWT ID) with expiration
- Allows invalidating tokens on logout
"""

import logging

import redis.asyncio as redis

from workhive.core.config import settings

# ---------------------------------------------------
# Logger Configuration
# ---------------------------------------------------
logger = logging.getLogger(__name__)

# ---------------------------------------------------
# Redis Client Initialization
# ---------------------------------------------------
redis_client: redis.Redis | None = None  # type: ignore[type-arg]

try:
    # Connections are opened lazily on first command
    redis_client = redis.Redis.from_url(settings.redis_url, decode_responses=True)
    logger.info(f"[REDIS ASYNC] Initialized async Redis client for {settings.redis_url}")
except redis.RedisError as e:
    logger.error(f"[REDIS ASYNC] Initialization failed: {e}")
    redis_client = None

# Prefix for all blacklist keys
BLACKLIST_PREFIX = "jwt_blacklist:"


# ---------------------------------------------------
# Blacklist Management Functions
# ---------------------------------------------------
async def blacklist_token(jti: str, expires_in: int) -> bool:
    """
    Blacklist a JWT token by storing its `jti` in Redis with TTL.

    Args:
        jti (str): Unique JWT ID from the token payload.
        expires_in (int): Seconds until the token would expire on its own.

    Returns:
        bool: True if the token was recorded.
    """
    if not redis_client:
        logger.warning("[BLACKLIST ASYNC] Redis unavailable: Token not blacklisted.")
        return False
    if expires_in <= 0:
        return True

    try:
        await redis_client.setex(f"{BLACKLIST_PREFIX}{jti}", expires_in, "true")
        logger.debug(f"[BLACKLIST ASYNC] Token blacklisted: jti={jti} for {expires_in}s")
        return True
    except redis.RedisError as e:
        logger.error(f"[BLACKLIST ASYNC] Failed to blacklist token: {e}")
        return False


async def is_token_blacklisted(jti: str) -> bool:
    """
    Check if a JWT token ID (`jti`) is blacklisted.
    """
    if not redis_client:
        logger.warning("[BLACKLIST ASYNC] Redis unavailable: Assuming token is not blacklisted.")
        return False

    try:
        exists = await redis_client.exists(f"{BLACKLIST_PREFIX}{jti}")
        return bool(exists == 1)
    except redis.RedisError as e:
        logger.error(f"[BLACKLIST ASYNC] Failed to check token blacklist status: {e}")
        return False
