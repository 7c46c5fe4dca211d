# storefront/db/redis.py
import redis.asyncio as redis
from storefront.core.config import get_settings

import logging
logger = logging.getLogger(__name__)

redis_client: redis.Redis | None = None


async def connect():
    """
    Try to connect Redis when REDIS_URL is set.
    If missing or unreachable, log a warning and keep the app running.
    """
    global redis_client
    settings = get_settings()
    if not settings.REDIS_URL:
        logger.warning("No REDIS_URL configured, skipping Redis connection.")
        redis_client = None
        return

    try:
        logger.info("Connecting to Redis at %s", settings.REDIS_URL)
        redis_client = redis.from_url(settings.REDIS_URL, decode_responses=True)
        await redis_client.ping()
        logger.info("Redis connection successful")
    except Exception as e:
        logger.warning("Failed to connect to Redis: %s", e)
        redis_client = None  # fallback: caller switches to memory storage


async def disconnect():
    """Close the Redis connection if any."""
    global redis_client
    if redis_client:
        await redis_client.aclose()
        redis_client = None
        logger.info("Redis disconnected")


def get_redis() -> redis.Redis | None:
    """
    Redis getter. Returns None when Redis is not configured or unreachable.
    Callers handle the None case.
    """
    return redis_client
