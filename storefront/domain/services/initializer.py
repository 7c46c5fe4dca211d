# storefront/domain/services/initializer.py
from __future__ import annotations
from enum import Enum
from typing import Awaitable, List, Optional
import asyncio
import time

from storefront.domain.models.product import Category, CompanyDetails
from storefront.domain.services.reconcile import reconcile
from storefront.domain.stores.cart_store import CartStore
from storefront.domain.stores.catalog_store import CatalogStore
from storefront.domain.stores.wishlist_store import WishlistStore

import logging
logger = logging.getLogger(__name__)


class InitState(str, Enum):
    UNINITIALIZED = "uninitialized"
    RECONCILING = "reconciling"
    READY = "ready"


class StoreInitializer:
    """
    One-shot orchestrator for a page load.

    UNINITIALIZED -> RECONCILING -> READY. Calls made while RECONCILING or after
    READY are no-ops, so a second run can never touch the stores. Readers that
    depend on the catalog wait on `wait_ready()`, which also returns (False) after teardown.
    """

    def __init__(self, catalog: CatalogStore, cart: CartStore, wishlist: WishlistStore):
        self.catalog = catalog
        self.cart = cart
        self.wishlist = wishlist
        self.state = InitState.UNINITIALIZED
        self._ready = asyncio.Event()
        self._torn_down = False

    @property
    def is_ready(self) -> bool:
        return self.state is InitState.READY

    async def wait_ready(self) -> bool:
        """Block until READY or torn down. Returns whether the stores are ready."""
        await self._ready.wait()
        return self.is_ready

    def teardown(self) -> None:
        """The page went away: any response still in flight is discarded and waiters are released."""
        self._torn_down = True
        self._ready.set()

    async def initialize(
        self,
        server_categories: List[Category],
        company_details: Optional[CompanyDetails] = None,
        now: Optional[float] = None,
    ) -> bool:
        """Returns True when this call performed the initialization."""
        if self.state is not InitState.UNINITIALIZED:
            logger.debug("initializer skip state=%s", self.state.value)
            return False
        if self._torn_down:
            logger.info("initializer torn down, discarding %s categories", len(server_categories))
            return False

        self.state = InitState.RECONCILING
        t0 = time.perf_counter()
        try:
            cached = await self.catalog.load()
            merged = reconcile(
                cached,
                server_categories,
                now=time.time() if now is None else now,
                ttl=self.catalog.ttl,
            )
            self.catalog.apply(merged)
            await self.catalog.save()

            if company_details is not None:
                await self.cart.set_company_details(company_details)
            await self.wishlist.sync_with_server(merged.products)
        except BaseException:
            # cancelled or failed mid-way: allow a later page load to retry
            self.state = InitState.UNINITIALIZED
            raise

        self.state = InitState.READY
        self._ready.set()
        logger.info(
            "initializer ready categories=%s products=%s cached=%s time=%.3fs",
            len(merged.categories), len(merged.products), cached is not None, time.perf_counter() - t0,
        )
        return True

    async def initialize_from(
        self,
        fetch_categories: Awaitable[List[Category]],
        company_details: Optional[CompanyDetails] = None,
    ) -> bool:
        """Await the catalog fetch, then initialize unless torn down in the meantime."""
        categories = await fetch_categories
        if self._torn_down:
            logger.info("initializer torn down before fetch resolved, response discarded")
            return False
        return await self.initialize(categories, company_details)
