from pydantic import BaseModel, Field
from typing import Dict


# Bodies carry ids only: product details and prices always come from the session catalog
class AddToCartIn(BaseModel):
    product_id: str
    selected_variants: Dict[str, str] = Field(default_factory=dict)


class UpdateQuantityIn(BaseModel):
    quantity: int


class PanelOpenIn(BaseModel):
    is_open: bool


class WishlistItemIn(BaseModel):
    product_id: str
