# storefront/core/lifespan.py
from contextlib import asynccontextmanager
from fastapi import FastAPI
from storefront.db import redis as r, http
from storefront.db.storage import MemoryStorage, RedisStorage, set_storage
from storefront.core.config import get_settings

import logging
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # --- Startup ---
    # Redis backs the session stores when configured; memory otherwise
    if settings.STORAGE_BACKEND == "redis":
        await r.connect()
    client = r.get_redis()
    if client is not None:
        set_storage(RedisStorage(client))
        logger.info("Session storage: redis")
    else:
        if settings.STORAGE_BACKEND == "redis":
            logger.warning("Redis unavailable, falling back to in-memory session storage")
        set_storage(MemoryStorage())
        logger.info("Session storage: memory")

    await http.connect()

    # Application runs
    yield

    # --- Shutdown ---
    await http.disconnect()
    try:
        await r.disconnect()
    except Exception as e:
        logger.warning("Redis disconnect failed: %s", e)
    set_storage(None)
