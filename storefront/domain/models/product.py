from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict


class ProductVariant(BaseModel):
    name: str
    options: List[str] = []
    model_config = {"frozen": True}


class SizeColour(BaseModel):
    id: str
    name: str = ""
    price: Optional[float] = None
    images: List[str] = []
    quantity: int = 0           # stock for this size + colour
    status: Optional[str] = None
    model_config = {"frozen": True}


class PricingOption(BaseModel):
    id: str
    price: float = 0
    price_after_discount: Optional[float] = None
    quantity: str = ""          # size label, e.g. "1kg"
    size_quantity: int = 0      # stock for this size
    size_status: Optional[str] = None
    size_colours: List[SizeColour] = []
    model_config = {"frozen": True}


class ProductColour(BaseModel):
    id: str
    name: str = ""
    image: str = ""
    status: Optional[str] = None
    model_config = {"frozen": True}


class Review(BaseModel):
    id: str
    author: str = "Verified User"
    rating: float = 0
    text: str = ""
    date: str = ""              # YYYY-MM-DD
    model_config = {"frozen": True}


class Product(BaseModel):
    id: str
    name: str
    price: float = 0
    description: str = ""
    images: List[str] = []
    image_url: str = ""
    rating: float = 0
    reviews: List[Review] = []
    variants: List[ProductVariant] = []
    pricing: List[PricingOption] = []
    colors: List[ProductColour] = []
    price_after_discount: Optional[float] = None
    delivery_time: str = ""
    delivery_cost: float = 0
    famous: bool = False
    product_status: Optional[str] = None
    product_offer: Optional[str] = None
    product_type: Optional[str] = None
    ingredients: Optional[str] = None
    best_before: Optional[str] = None
    instructions: Optional[str] = None

    model_config = {"frozen": True}  # immuable = safe


class Catalog(BaseModel):
    id: str
    name: str = ""
    image: str = ""
    products: List[Product] = []
    model_config = {"frozen": True}


class Category(BaseModel):
    id: str
    name: str = ""
    image: str = ""
    catalogs: List[Catalog] = []
    model_config = {"frozen": True}

    @property
    def is_skeleton(self) -> bool:
        """A category with no catalogs is a lazy-load placeholder."""
        return not self.catalogs


class CompanyDetails(BaseModel):
    company_id: str
    company_name: str = ""
    company_domain: str = ""
    delivery_time: Optional[str] = None

    # the company service returns many more fields; keep them as-is
    model_config = ConfigDict(frozen=True, extra="allow")


class CartItem(Product):
    cart_item_id: str
    quantity: int = Field(default=1, ge=1)
    selected_variants: Dict[str, str] = {}
