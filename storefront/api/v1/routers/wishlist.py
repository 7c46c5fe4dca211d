# storefront/api/v1/routers/wishlist.py
from fastapi import APIRouter, HTTPException
import logging

from storefront.api.deps import StoresDep
from storefront.api.v1.schemas.store import PanelOpenIn, WishlistItemIn
from storefront.domain.models.product import Product
from storefront.domain.services.storefront_svc import wishlist_summary
from storefront.domain.stores.session import SessionStores

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


async def _resolve_product(body: WishlistItemIn, stores: SessionStores) -> Product:
    await stores.catalog.restore()
    product = stores.catalog.get_product(body.product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found.")
    return product


@router.get("")
async def get_wishlist(stores: StoresDep):
    return wishlist_summary(stores)


@router.post("/items", status_code=201)
async def add_to_wishlist(body: WishlistItemIn, stores: StoresDep):
    product = await _resolve_product(body, stores)
    added = await stores.wishlist.add_to_wishlist(product)
    logger.info("Response: add_to_wishlist product_id=%s added=%s", product.id, added)
    return {"added": added, "wishlist": wishlist_summary(stores)}


@router.post("/toggle")
async def toggle_wishlist(body: WishlistItemIn, stores: StoresDep):
    product = await _resolve_product(body, stores)
    in_wishlist = await stores.wishlist.toggle_wishlist(product)
    return {"in_wishlist": in_wishlist, "wishlist": wishlist_summary(stores)}


@router.delete("/items/{product_id}")
async def remove_from_wishlist(product_id: str, stores: StoresDep):
    await stores.wishlist.remove_from_wishlist(product_id)
    return wishlist_summary(stores)


@router.put("/open")
async def set_wishlist_open(body: PanelOpenIn, stores: StoresDep):
    await stores.wishlist.set_wishlist_open(body.is_open)
    return wishlist_summary(stores)
