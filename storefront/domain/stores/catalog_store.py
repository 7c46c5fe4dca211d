# storefront/domain/stores/catalog_store.py
from __future__ import annotations
from typing import Dict, List, Optional
import time

from storefront.domain.models.product import Category, Product
from storefront.domain.models.state import CatalogSnapshot
from storefront.domain.services.reconcile import derive_products, is_expired
from storefront.domain.stores.persisted import PersistedStore

import logging
logger = logging.getLogger(__name__)

CATALOG_STORAGE_NAME = "product-storage"


class CatalogStore:
    """
    Canonical copy of the tenant catalog for one session: categories, the derived
    flat product list and per-category freshness timestamps.

    Hydration is manual: the Initializer calls `load()` then `apply()` with the
    reconciled snapshot, so persisted data never reaches readers unmerged.
    """

    def __init__(self, persisted: PersistedStore[CatalogSnapshot], *, ttl: float):
        self.persisted = persisted
        self.ttl = ttl
        self._state = CatalogSnapshot()

    # ----- Reads -------------------------------------------------------------

    @property
    def categories(self) -> List[Category]:
        return self._state.categories

    @property
    def products(self) -> List[Product]:
        return self._state.products

    @property
    def category_timestamps(self) -> Dict[str, float]:
        return self._state.category_timestamps

    @property
    def snapshot(self) -> CatalogSnapshot:
        return self._state

    def get_category(self, category_id: str) -> Optional[Category]:
        return next((c for c in self._state.categories if c.id == category_id), None)

    def get_product(self, product_id: str) -> Optional[Product]:
        return next((p for p in self._state.products if p.id == product_id), None)

    def is_category_expired(self, category_id: str, now: Optional[float] = None) -> bool:
        now = time.time() if now is None else now
        return is_expired(self._state.category_timestamps, category_id, now=now, ttl=self.ttl)

    # ----- I/O ---------------------------------------------------------------

    async def load(self) -> Optional[CatalogSnapshot]:
        """Read the persisted candidate snapshot (None when absent or corrupt)."""
        return await self.persisted.rehydrate()

    async def restore(self) -> None:
        """Adopt the persisted snapshot as-is (requests after the page load, no server payload to merge)."""
        self._state = await self.load() or CatalogSnapshot()

    async def save(self) -> None:
        await self.persisted.save(self._state)

    # ----- Writes ------------------------------------------------------------

    def apply(self, snapshot: CatalogSnapshot) -> None:
        self._state = snapshot

    async def populate_category(self, category: Category, now: Optional[float] = None) -> Category:
        """
        Store the lazily fetched content of one category.
        Populated payloads are stamped; products are re-derived from the tree.
        """
        now = time.time() if now is None else now
        categories = list(self._state.categories)
        timestamps = dict(self._state.category_timestamps)

        idx = next((i for i, c in enumerate(categories) if c.id == category.id), None)
        if idx is None:
            categories.append(category)
        else:
            categories[idx] = category

        if category.is_skeleton:
            timestamps.pop(category.id, None)
        else:
            timestamps[category.id] = now

        self._state = CatalogSnapshot(
            categories=categories,
            products=derive_products(categories),
            category_timestamps=timestamps,
        )
        await self.save()
        logger.info("catalog populate_category id=%s catalogs=%s", category.id, len(category.catalogs))
        return category

    async def sync_product(self, fresh: Product) -> None:
        """Replace one product everywhere it appears in the tree."""
        categories = [
            cat.model_copy(update={
                "catalogs": [
                    catalog.model_copy(update={
                        "products": [fresh if p.id == fresh.id else p for p in catalog.products]
                    })
                    for catalog in cat.catalogs
                ]
            })
            for cat in self._state.categories
        ]
        self._state = self._state.model_copy(update={
            "categories": categories,
            "products": derive_products(categories),
        })
        await self.save()
