# storefront/domain/stores/session.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List

from storefront.core.config import Settings
from storefront.db.storage import StorageBackend
from storefront.domain.models.state import CartSnapshot, CatalogSnapshot, WishlistSnapshot
from storefront.domain.stores.cart_store import CART_STORAGE_NAME, CartStore, Notifier
from storefront.domain.stores.catalog_store import CATALOG_STORAGE_NAME, CatalogStore
from storefront.domain.stores.persisted import PersistedStore
from storefront.domain.stores.wishlist_store import WISHLIST_STORAGE_NAME, WishlistStore


@dataclass
class SessionStores:
    """The three stores of one visitor session, built per request."""
    catalog: CatalogStore
    cart: CartStore
    wishlist: WishlistStore
    notifications: List[Dict[str, str]] = field(default_factory=list)


def storage_partition(session_id: str, tenant: str, settings: Settings) -> str:
    # Tenant-agnostic by default: one device shares its stores across tenants
    if settings.PARTITION_STORAGE_BY_TENANT:
        return f"{tenant}:{session_id}"
    return session_id


def build_session_stores(
    storage: StorageBackend,
    session_id: str,
    tenant: str,
    settings: Settings,
    notifier: Notifier | None = None,
) -> SessionStores:
    partition = storage_partition(session_id, tenant, settings)
    prefix = settings.storage_prefix
    notifications: List[Dict[str, str]] = []

    def _collect(title: str, description: str) -> None:
        notifications.append({"title": title, "description": description})

    catalog = CatalogStore(
        PersistedStore(storage, CATALOG_STORAGE_NAME, CatalogSnapshot,
                       partition=partition, prefix=prefix, ttl=settings.catalog_storage_ttl,
                       skip_hydration=True),
        ttl=settings.category_ttl,
    )
    cart = CartStore(
        PersistedStore(storage, CART_STORAGE_NAME, CartSnapshot,
                       partition=partition, prefix=prefix, ttl=settings.cart_session_ttl),
        session_ttl=settings.cart_session_ttl,
        notifier=notifier or _collect,
    )
    wishlist = WishlistStore(
        PersistedStore(storage, WISHLIST_STORAGE_NAME, WishlistSnapshot,
                       partition=partition, prefix=prefix, ttl=settings.wishlist_ttl),
        ttl=settings.wishlist_ttl,
    )
    return SessionStores(catalog=catalog, cart=cart, wishlist=wishlist, notifications=notifications)
