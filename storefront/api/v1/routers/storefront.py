# storefront/api/v1/routers/storefront.py
from fastapi import APIRouter, HTTPException
import time
import logging

from storefront.api.deps import CatalogApiDep, StoresDep, TenantDep
from storefront.domain.services.storefront_svc import load_category_svc, load_storefront_svc

logger = logging.getLogger(__name__)

router = APIRouter(tags=["storefront"])


@router.get("/storefront")
async def storefront_page(tenant: TenantDep, stores: StoresDep, repo: CatalogApiDep):
    """
    Page load: fetch company + categories, reconcile them with the session cache,
    then return catalog, cart and wishlist. Upstream failures render an empty catalog.
    """
    logger.info("Request: storefront tenant=%s", tenant)
    start_time = time.perf_counter()
    res = await load_storefront_svc(repo=repo, stores=stores, tenant=tenant)
    logger.info(
        "Response: storefront tenant=%s categories=%s elapsed_time=%.4fs",
        tenant, len(res["categories"]), time.perf_counter() - start_time,
    )
    return res


@router.get("/categories/{category_id}")
async def get_category(category_id: str, tenant: TenantDep, stores: StoresDep, repo: CatalogApiDep):
    """Lazy load of one category's catalogs."""
    logger.info("Request: category tenant=%s category_id=%s", tenant, category_id)
    category = await load_category_svc(repo=repo, stores=stores, tenant=tenant, category_id=category_id)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found.")
    return category.model_dump()


@router.get("/products/{product_id}")
async def get_product(product_id: str, stores: StoresDep):
    await stores.catalog.restore()
    product = stores.catalog.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found.")
    return product.model_dump()
