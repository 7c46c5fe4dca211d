# storefront/api/v1/routers/cart.py
from fastapi import APIRouter, HTTPException
import logging

from storefront.api.deps import StoresDep
from storefront.api.v1.schemas.store import AddToCartIn, PanelOpenIn, UpdateQuantityIn
from storefront.domain.services.storefront_svc import cart_summary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("")
async def get_cart(stores: StoresDep):
    return cart_summary(stores)


@router.post("/items", status_code=201)
async def add_to_cart(body: AddToCartIn, stores: StoresDep):
    """
    Add one unit of a product with the chosen variants.
    Only products of the session catalog can be added; 404 otherwise.
    """
    await stores.catalog.restore()
    product = stores.catalog.get_product(body.product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found.")

    line = await stores.cart.add_to_cart(product, body.selected_variants)
    logger.info("Response: add_to_cart product_id=%s quantity=%s", product.id, line.quantity)
    return {
        "item": line.model_dump(),
        "notifications": stores.notifications,
        "cart": cart_summary(stores),
    }


@router.patch("/items/{product_id}")
async def update_quantity(product_id: str, body: UpdateQuantityIn, stores: StoresDep):
    """Quantities below 1 are ignored."""
    await stores.cart.update_quantity(product_id, body.quantity)
    return cart_summary(stores)


@router.delete("/items/{product_id}")
async def remove_from_cart(product_id: str, stores: StoresDep):
    """Removes every line of the product, whatever the selected variants."""
    removed = await stores.cart.remove_from_cart(product_id)
    logger.info("Response: remove_from_cart product_id=%s removed_lines=%s", product_id, removed)
    return cart_summary(stores)


@router.delete("/lines/{cart_item_id}")
async def remove_line(cart_item_id: str, stores: StoresDep):
    if not await stores.cart.remove_line(cart_item_id):
        raise HTTPException(status_code=404, detail="Cart line not found.")
    return cart_summary(stores)


@router.delete("")
async def clear_cart(stores: StoresDep):
    await stores.cart.clear_cart()
    return cart_summary(stores)


@router.put("/open")
async def set_cart_open(body: PanelOpenIn, stores: StoresDep):
    await stores.cart.set_cart_open(body.is_open)
    return cart_summary(stores)
