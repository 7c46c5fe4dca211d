import asyncio
import logging
import time
from typing import Any, Dict, List, Optional

from storefront.domain.models.product import Category, CompanyDetails
from storefront.domain.repositories.catalog_api_repo import CatalogApiError, CatalogApiRepo
from storefront.domain.services.initializer import StoreInitializer
from storefront.domain.stores.session import SessionStores

logger = logging.getLogger(__name__)


async def fetch_company_safe(repo: CatalogApiRepo, tenant: str) -> Optional[CompanyDetails]:
    try:
        return await repo.fetch_company_details(tenant)
    except CatalogApiError as e:
        logger.warning("company fetch failed tenant=%s err=%s", tenant, e)
        return None


async def fetch_categories_safe(repo: CatalogApiRepo, company: Optional[CompanyDetails]) -> List[Category]:
    """Any fetch failure degrades to an empty list so the page still renders."""
    if company is None:
        return []
    try:
        return await repo.fetch_categories(company.company_id, company.delivery_time)
    except CatalogApiError as e:
        logger.warning("categories fetch failed company_id=%s err=%s", company.company_id, e)
        return []


async def load_storefront_svc(
    repo: CatalogApiRepo,
    stores: SessionStores,
    tenant: str,
    initializer: Optional[StoreInitializer] = None,
) -> Dict[str, Any]:
    t0 = time.perf_counter()
    logger.info("storefront start tenant=%s", tenant)

    company = await fetch_company_safe(repo, tenant)
    initializer = initializer or StoreInitializer(stores.catalog, stores.cart, stores.wishlist)
    try:
        await initializer.initialize_from(fetch_categories_safe(repo, company), company)
    except asyncio.CancelledError:
        # request dropped mid page load: a late catalog response must not be written
        initializer.teardown()
        raise
    await initializer.wait_ready()

    catalog = stores.catalog
    logger.info(
        "storefront done tenant=%s categories=%s products=%s total_time=%.3fs",
        tenant, len(catalog.categories), len(catalog.products), time.perf_counter() - t0,
    )
    return {
        "tenant": tenant,
        "company": company.model_dump() if company else None,
        "categories": [c.model_dump() for c in catalog.categories],
        "products": [p.model_dump() for p in catalog.products],
        "cart": cart_summary(stores),
        "wishlist": wishlist_summary(stores),
    }


async def load_category_svc(
    repo: CatalogApiRepo,
    stores: SessionStores,
    tenant: str,
    category_id: str,
) -> Optional[Category]:
    """
    Lazy load of one category: served from the store while fresh and populated,
    otherwise fetched and stored. A failed fetch falls back to whatever the store has.
    """
    catalog = stores.catalog
    await catalog.restore()
    current = catalog.get_category(category_id)
    if current is not None and not current.is_skeleton and not catalog.is_category_expired(category_id):
        logger.info("category cache_hit id=%s", category_id)
        return current

    logger.info("category cache_miss id=%s", category_id)
    company = stores.cart.company_details or await fetch_company_safe(repo, tenant)
    if company is None:
        return current
    try:
        fresh = await repo.fetch_category(company.company_id, category_id, company.delivery_time)
    except CatalogApiError as e:
        logger.warning("category fetch failed id=%s err=%s", category_id, e)
        return current
    if fresh is None:
        return current
    return await catalog.populate_category(fresh)


def cart_summary(stores: SessionStores) -> Dict[str, Any]:
    cart = stores.cart
    return {
        "items": [i.model_dump() for i in cart.cart],
        "count": cart.get_cart_items_count(),
        "total": cart.get_cart_total(),
        "is_open": cart.is_cart_open,
        "last_added_item_id": cart.snapshot.last_added_item_id,
    }


def wishlist_summary(stores: SessionStores) -> Dict[str, Any]:
    wishlist = stores.wishlist
    return {
        "items": [p.model_dump() for p in wishlist.wishlist],
        "count": len(wishlist.wishlist),
        "timestamp": wishlist.timestamp,
        "is_open": wishlist.is_wishlist_open,
    }
