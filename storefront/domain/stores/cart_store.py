# storefront/domain/stores/cart_store.py
from __future__ import annotations
from typing import Callable, Dict, List, Optional
import json
import time
import uuid

from storefront.domain.models.product import CartItem, CompanyDetails, Product
from storefront.domain.models.state import CartSnapshot
from storefront.domain.stores.persisted import PersistedStore

import logging
logger = logging.getLogger(__name__)

CART_STORAGE_NAME = "cart-storage"

Notifier = Callable[[str, str], None]


def serialize_variants(selected_variants: Dict[str, str]) -> str:
    """Stable serialization: key order never changes the line identity."""
    return json.dumps(selected_variants or {}, sort_keys=True, separators=(",", ":"))


def line_identity(product_id: str, selected_variants: Dict[str, str]) -> tuple[str, str]:
    return product_id, serialize_variants(selected_variants)


def _log_notifier(title: str, description: str) -> None:
    logger.info("notify title=%r description=%r", title, description)


class CartStore:
    """
    Session-scoped cart. Lines are deduplicated on (product id, selected variants).
    Every mutation persists the full snapshot and refreshes `timestamp`.
    """

    def __init__(
        self,
        persisted: PersistedStore[CartSnapshot],
        *,
        session_ttl: float,
        notifier: Optional[Notifier] = None,
    ):
        self.persisted = persisted
        self.session_ttl = session_ttl
        self.notifier = notifier or _log_notifier
        self._state = CartSnapshot.empty()

    @property
    def cart(self) -> List[CartItem]:
        return self._state.cart

    @property
    def snapshot(self) -> CartSnapshot:
        return self._state

    @property
    def is_cart_open(self) -> bool:
        return self._state.is_cart_open

    @property
    def company_details(self) -> Optional[CompanyDetails]:
        return self._state.company_details

    async def hydrate(self) -> None:
        snapshot = await self.persisted.hydrate()
        self._state = snapshot or CartSnapshot.empty()
        await self.check_expiration()

    async def _commit(self, **changes) -> None:
        self._state = self._state.model_copy(update=changes)
        await self.persisted.save(self._state)

    # ----- Mutations ---------------------------------------------------------

    async def add_to_cart(self, product: Product, selected_variants: Dict[str, str]) -> CartItem:
        identity = line_identity(product.id, selected_variants)
        cart = list(self._state.cart)
        idx = next(
            (i for i, item in enumerate(cart) if line_identity(item.id, item.selected_variants) == identity),
            None,
        )

        if idx is not None:
            current = cart[idx]
            # refresh product details in case they changed since the line was added
            line = current.model_copy(update={
                "name": product.name,
                "price": product.price,
                "price_after_discount": product.price_after_discount,
                "image_url": product.image_url,
                "images": product.images,
                "description": product.description,
                "quantity": current.quantity + 1,
            })
            cart[idx] = line
        else:
            line = CartItem(
                **product.model_dump(include=set(Product.model_fields)),
                cart_item_id=uuid.uuid4().hex,
                quantity=1,
                selected_variants=dict(selected_variants or {}),
            )
            cart.append(line)

        await self._commit(cart=cart, timestamp=time.time(), last_added_item_id=line.cart_item_id)
        logger.info("cart add product_id=%s variants=%s quantity=%s", product.id, identity[1], line.quantity)
        self.notifier("Added to cart", f"{product.name} has been added to your cart.")
        return line

    async def remove_from_cart(self, product_id: str) -> int:
        """Remove every line of this product, whatever its variants. Returns lines removed."""
        cart = [item for item in self._state.cart if item.id != product_id]
        removed = len(self._state.cart) - len(cart)
        await self._commit(cart=cart, timestamp=time.time())
        return removed

    async def remove_line(self, cart_item_id: str) -> bool:
        cart = [item for item in self._state.cart if item.cart_item_id != cart_item_id]
        removed = len(cart) != len(self._state.cart)
        await self._commit(cart=cart, timestamp=time.time())
        return removed

    async def update_quantity(self, product_id: str, quantity: int) -> None:
        if quantity < 1:
            return
        cart = [
            item.model_copy(update={"quantity": quantity}) if item.id == product_id else item
            for item in self._state.cart
        ]
        await self._commit(cart=cart, timestamp=time.time())

    async def clear_cart(self) -> None:
        await self._commit(cart=[], timestamp=time.time(), last_added_item_id=None)

    async def set_cart_open(self, is_open: bool) -> None:
        await self._commit(is_cart_open=is_open)

    async def set_company_details(self, details: Optional[CompanyDetails]) -> None:
        await self._commit(company_details=details)

    async def check_expiration(self, now: Optional[float] = None) -> bool:
        """Clear the cart when the session window has passed. Returns True if cleared."""
        now = time.time() if now is None else now
        if now - self._state.timestamp > self.session_ttl:
            logger.info("cart expired key=%s lines=%s", self.persisted.key, len(self._state.cart))
            await self._commit(cart=[], timestamp=now, last_added_item_id=None)
            return True
        return False

    # ----- Derived -----------------------------------------------------------

    def get_cart_total(self) -> float:
        return sum(item.price * item.quantity for item in self._state.cart)

    def get_cart_items_count(self) -> int:
        return sum(item.quantity for item in self._state.cart)
