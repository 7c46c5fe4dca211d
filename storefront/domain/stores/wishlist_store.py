# storefront/domain/stores/wishlist_store.py
from __future__ import annotations
from typing import Iterable, List, Optional
import time

from storefront.domain.models.product import Product
from storefront.domain.models.state import WishlistSnapshot
from storefront.domain.stores.persisted import PersistedStore

import logging
logger = logging.getLogger(__name__)

WISHLIST_STORAGE_NAME = "wishlist-storage"


class WishlistStore:
    """
    Long-lived wishlist with a single list-level timestamp.
    The whole list expires at once, `ttl` seconds after the last add.
    """

    def __init__(self, persisted: PersistedStore[WishlistSnapshot], *, ttl: float):
        self.persisted = persisted
        self.ttl = ttl
        self._state = WishlistSnapshot.empty()

    @property
    def wishlist(self) -> List[Product]:
        return self._state.wishlist

    @property
    def timestamp(self) -> float:
        return self._state.timestamp

    @property
    def is_wishlist_open(self) -> bool:
        return self._state.is_wishlist_open

    @property
    def snapshot(self) -> WishlistSnapshot:
        return self._state

    async def hydrate(self) -> None:
        snapshot = await self.persisted.hydrate()
        self._state = snapshot or WishlistSnapshot.empty()
        await self.check_expiration()

    async def _commit(self, **changes) -> None:
        self._state = self._state.model_copy(update=changes)
        await self.persisted.save(self._state)

    def is_in_wishlist(self, product_id: str) -> bool:
        return any(item.id == product_id for item in self._state.wishlist)

    async def add_to_wishlist(self, product: Product) -> bool:
        if self.is_in_wishlist(product.id):
            return False
        await self._commit(
            wishlist=[*self._state.wishlist, product],
            timestamp=time.time(),
            is_wishlist_open=True,
        )
        logger.info("wishlist add product_id=%s size=%s", product.id, len(self._state.wishlist))
        return True

    async def remove_from_wishlist(self, product_id: str) -> None:
        await self._commit(wishlist=[item for item in self._state.wishlist if item.id != product_id])

    async def toggle_wishlist(self, product: Product) -> bool:
        """Returns the new membership."""
        if self.is_in_wishlist(product.id):
            await self.remove_from_wishlist(product.id)
            return False
        await self.add_to_wishlist(product)
        return True

    async def set_wishlist_open(self, is_open: bool) -> None:
        await self._commit(is_wishlist_open=is_open)

    async def check_expiration(self, now: Optional[float] = None) -> bool:
        now = time.time() if now is None else now
        if now - self._state.timestamp > self.ttl:
            logger.info("wishlist expired key=%s items=%s", self.persisted.key, len(self._state.wishlist))
            await self._commit(wishlist=[], timestamp=now)
            return True
        return False

    async def sync_with_server(self, fresh_products: Iterable[Product]) -> int:
        """
        Refresh stored snapshots from the catalog. Membership is left alone:
        entries the catalog no longer lists are kept as they are.
        Returns the number of refreshed entries.
        """
        fresh_by_id = {p.id: p for p in fresh_products}
        refreshed = 0
        updated: List[Product] = []
        for item in self._state.wishlist:
            fresh = fresh_by_id.get(item.id)
            if fresh is not None and fresh != item:
                updated.append(fresh)
                refreshed += 1
            else:
                updated.append(item)
        if refreshed:
            await self._commit(wishlist=updated)
        logger.debug("wishlist sync refreshed=%s", refreshed)
        return refreshed
