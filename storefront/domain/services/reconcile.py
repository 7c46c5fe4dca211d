# storefront/domain/services/reconcile.py
from __future__ import annotations
from typing import Dict, Iterable, List, Optional
import time

from storefront.domain.models.product import Category, Product
from storefront.domain.models.state import CatalogSnapshot

import logging
logger = logging.getLogger(__name__)


def is_expired(timestamps: Dict[str, float], category_id: str, *, now: float, ttl: float) -> bool:
    """A category without a timestamp has never been server-confirmed: expired."""
    ts = timestamps.get(category_id)
    if ts is None:
        return True
    return now - ts > ttl


def resolve_image_url(product: Product) -> str:
    if product.images:
        return product.images[0]
    return product.image_url or ""


def derive_products(categories: Iterable[Category]) -> List[Product]:
    """
    Flatten categories[].catalogs[].products[] into the display list.
    Each product carries its display image URL (first image).
    """
    out: List[Product] = []
    for cat in categories:
        for catalog in cat.catalogs:
            for p in catalog.products:
                url = resolve_image_url(p)
                out.append(p if p.image_url == url else p.model_copy(update={"image_url": url}))
    return out


def reconcile(
    cached: Optional[CatalogSnapshot],
    server_categories: List[Category],
    *,
    now: Optional[float] = None,
    ttl: float,
) -> CatalogSnapshot:
    """
    Merge freshly fetched server categories into the persisted cache.

    Per server category id:
      - new: insert, stamp now only if populated
      - server populated: server wins, stamp now
      - server skeleton + cached expired: adopt skeleton, drop timestamp
      - server skeleton + cached fresh and populated: server metadata, cached catalogs
      - server skeleton + cached fresh and empty: adopt skeleton
    The server list defines membership and order. Products are always re-derived.
    """
    now = time.time() if now is None else now
    cached = cached or CatalogSnapshot()
    cached_by_id = {c.id: c for c in cached.categories}
    old_ts = cached.category_timestamps

    merged: List[Category] = []
    timestamps: Dict[str, float] = {}
    seen: set[str] = set()

    for server_cat in server_categories:
        if server_cat.id in seen:
            logger.warning("reconcile duplicate category id=%s ignored", server_cat.id)
            continue
        seen.add(server_cat.id)
        existing = cached_by_id.get(server_cat.id)

        if existing is None:
            merged.append(server_cat)
            if not server_cat.is_skeleton:
                timestamps[server_cat.id] = now
            continue

        if not server_cat.is_skeleton:
            merged.append(server_cat)
            timestamps[server_cat.id] = now
            continue

        if is_expired(old_ts, server_cat.id, now=now, ttl=ttl):
            logger.debug("reconcile category=%s expired, adopting skeleton", server_cat.id)
            merged.append(server_cat)
        elif not existing.is_skeleton:
            merged.append(server_cat.model_copy(update={"catalogs": existing.catalogs}))
            timestamps[server_cat.id] = old_ts[server_cat.id]
        else:
            merged.append(server_cat)
            timestamps[server_cat.id] = old_ts[server_cat.id]

    return CatalogSnapshot(
        categories=merged,
        products=derive_products(merged),
        category_timestamps=timestamps,
    )
