# storefront/domain/stores/persisted.py
from __future__ import annotations
from typing import Generic, Optional, Type, TypeVar
from pydantic import BaseModel, ValidationError
from storefront.db.storage import StorageBackend
import json

import logging
logger = logging.getLogger(__name__)

S = TypeVar("S", bound=BaseModel)


class PersistedStore(Generic[S]):
    """
    Key-namespaced, JSON-serialized snapshot storage for one store.

    - `name` is the blob namespace (e.g. 'cart-storage'); `partition` scopes it
      (session id, optionally tenant) so keys look like `<prefix>:<partition>:<name>`.
    - `skip_hydration=True` means `hydrate()` does nothing and the owner calls
      `rehydrate()` itself (manual hydration).
    - Corrupt or missing blobs load as None, never raise.
    """

    def __init__(
        self,
        storage: StorageBackend,
        name: str,
        model: Type[S],
        *,
        partition: str = "",
        prefix: str = "sf",
        ttl: Optional[int] = None,
        skip_hydration: bool = False,
    ):
        self.storage = storage
        self.name = name
        self.model = model
        self.partition = partition
        self.prefix = prefix
        self.ttl = ttl
        self.skip_hydration = skip_hydration

    @property
    def key(self) -> str:
        parts = [p for p in (self.prefix, self.partition, self.name) if p]
        return ":".join(parts)

    async def load(self) -> Optional[S]:
        """Read and validate the stored snapshot. None when absent or unreadable."""
        try:
            raw = await self.storage.get(self.key)
        except Exception as e:
            logger.warning("persisted load error key=%s err=%s", self.key, e)
            return None
        if not raw:
            return None
        try:
            return self.model.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as e:
            logger.warning("persisted snapshot corrupt key=%s err=%s (treated as empty)", self.key, e)
            return None

    async def save(self, snapshot: S) -> None:
        try:
            await self.storage.set(self.key, snapshot.model_dump_json(), ttl=self.ttl)
        except Exception as e:
            logger.error("persisted save error key=%s err=%s", self.key, e)

    async def clear(self) -> None:
        try:
            await self.storage.delete(self.key)
        except Exception as e:
            logger.error("persisted clear error key=%s err=%s", self.key, e)

    async def rehydrate(self) -> Optional[S]:
        """Manual hydration: always reads storage, whatever `skip_hydration` says."""
        snapshot = await self.load()
        logger.debug("persisted rehydrate key=%s found=%s", self.key, snapshot is not None)
        return snapshot

    async def hydrate(self) -> Optional[S]:
        """Automatic hydration; a no-op for stores created with skip_hydration."""
        if self.skip_hydration:
            return None
        return await self.rehydrate()
