# storefront/db/storage.py
from __future__ import annotations
from typing import Callable, Dict, Optional, Protocol, Tuple
from redis.asyncio import Redis
import time

"""
Note:
    - Storage backends are plain key/value adapters for serialized store snapshots.
    - No business logic here, just get/set/delete with an optional TTL (seconds).
"""


class StorageBackend(Protocol):
    async def get(self, key: str) -> Optional[str]: ...

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None: ...

    async def delete(self, key: str) -> None: ...


class RedisStorage:
    """Snapshots stored as JSON strings in Redis; TTL mapped to `EX`."""

    def __init__(self, redis: Redis):
        self.redis = redis

    async def get(self, key: str) -> Optional[str]:
        return await self.redis.get(key)

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        await self.redis.set(key, value, ex=ttl)

    async def delete(self, key: str) -> None:
        await self.redis.delete(key)


class MemoryStorage:
    """
    In-process storage for development and tests.
    Expiry is checked lazily on read against a monotonic clock.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._data: Dict[str, Tuple[str, Optional[float]]] = {}

    async def get(self, key: str) -> Optional[str]:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self.clock() >= expires_at:
            del self._data[key]
            return None
        return value

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        expires_at = self.clock() + ttl if ttl else None
        self._data[key] = (value, expires_at)

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)


_storage: StorageBackend | None = None


def set_storage(storage: StorageBackend | None) -> None:
    global _storage
    _storage = storage


def get_storage() -> StorageBackend:
    if _storage is None:
        raise RuntimeError("Storage backend not initialized")
    return _storage
