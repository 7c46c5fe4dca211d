# Persisted snapshots: one blob per store, always written whole.
from pydantic import BaseModel
from typing import Optional, List, Dict
import time

from storefront.domain.models.product import Product, Category, CartItem, CompanyDetails


class CatalogSnapshot(BaseModel):
    products: List[Product] = []
    categories: List[Category] = []
    category_timestamps: Dict[str, float] = {}   # category id -> epoch seconds


class CartSnapshot(BaseModel):
    cart: List[CartItem] = []
    company_details: Optional[CompanyDetails] = None
    is_cart_open: bool = False
    timestamp: float = 0
    last_added_item_id: Optional[str] = None

    @classmethod
    def empty(cls) -> "CartSnapshot":
        return cls(timestamp=time.time())


class WishlistSnapshot(BaseModel):
    wishlist: List[Product] = []
    timestamp: float = 0
    is_wishlist_open: bool = False

    @classmethod
    def empty(cls) -> "WishlistSnapshot":
        return cls(timestamp=time.time())
