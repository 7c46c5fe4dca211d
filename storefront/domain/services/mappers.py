# storefront/domain/services/mappers.py
from __future__ import annotations
from typing import Any, Dict, List, Optional

from storefront.domain.models.product import (
    Catalog, Category, CompanyDetails, PricingOption, Product, ProductColour, Review, SizeColour,
)

"""
Note:
    - The catalog service is not consistent about field names (camelCase, snake_case,
      bulk vs single-category shapes). Mappers accept all of them.
    - Image fields are '&&&'-separated URL lists; the service's placeholder image is dropped.
    - Field types are not trusted either: non-object list items are skipped, scalars are coerced.
"""

IMAGE_SEPARATOR = "&&&"
PLACEHOLDER_IMAGE = "https://cdn.example.com/products/default.jpg"
DEFAULT_DELIVERY_TIME = "2-3 Days"


def _first(d: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for k in keys:
        v = d.get(k)
        if v not in (None, ""):
            return v
    return default


def _to_float(v: Any, default: float = 0.0) -> float:
    try:
        return float(v)
    except (TypeError, ValueError):
        return default


def _opt_float(v: Any) -> Optional[float]:
    if v in (None, ""):
        return None
    return _to_float(v)


def _to_int(v: Any, default: int = 0) -> int:
    try:
        return int(float(v))
    except (TypeError, ValueError):
        return default


def _opt_str(v: Any) -> Optional[str]:
    if v in (None, ""):
        return None
    return str(v)


def _dicts(v: Any) -> List[Dict[str, Any]]:
    """Keep the object items of a list field; anything else maps to []."""
    if not isinstance(v, list):
        return []
    return [item for item in v if isinstance(item, dict)]


def parse_images(raw: Any) -> List[str]:
    if not raw:
        return []
    parts = str(raw).split(IMAGE_SEPARATOR)
    return [p.strip() for p in parts if p.strip() and p.strip() != PLACEHOLDER_IMAGE]


def _rating_value(r: Any) -> float:
    # ratings come as objects; bare numbers are accepted too
    if isinstance(r, dict):
        return _to_float(r.get("productRating"))
    return _to_float(r)


def map_review(api: Dict[str, Any]) -> Review:
    created = _opt_str(api.get("createdAt")) or ""
    return Review(
        id=str(api.get("productRatingId", "")),
        rating=_to_float(api.get("productRating")),
        text=str(api.get("productReview") or ""),
        date=created[:10],
    )


def map_size_colour(api: Dict[str, Any]) -> SizeColour:
    return SizeColour(
        id=str(api.get("productSizeColourId", "")),
        name=str(api.get("colourName") or ""),
        price=_opt_float(api.get("colourPrice")),
        images=parse_images(api.get("productPics")),
        quantity=_to_int(api.get("productSizeColourQuantity")),
        status=_opt_str(api.get("sizeColourStatus")),
    )


def map_pricing_option(api: Dict[str, Any], product_price: Any) -> PricingOption:
    return PricingOption(
        id=str(api.get("productSizeId", "")),
        price=_to_float(api.get("productSizePrice") or product_price),
        price_after_discount=_opt_float(api.get("productSizePriceAfterDiscount")),
        quantity=str(api.get("size") or ""),
        size_quantity=_to_int(api.get("sizeQuantity")),
        size_status=_opt_str(api.get("sizeStatus")),
        size_colours=[map_size_colour(c) for c in _dicts(api.get("productSizeColours"))],
    )


def map_product(api: Dict[str, Any], delivery_time: Optional[str] = None) -> Product:
    images = parse_images(_first(api, "productImage", "product_image", "productPics"))

    raw_ratings = api.get("productRatings") if isinstance(api.get("productRatings"), list) else []
    ratings = [_rating_value(r) for r in raw_ratings]
    rating = sum(ratings) / len(ratings) if ratings else 0.0

    sizes = _dicts(api.get("productSize"))
    pricing = [map_pricing_option(s, api.get("productPrice")) for s in sizes]
    price = _to_float(sizes[0].get("productSizePrice")) if sizes else _to_float(api.get("productPrice"))

    colors = [
        ProductColour(
            id=str(c.get("productColourId", "")),
            name=str(c.get("colour") or ""),
            image=str(c.get("productPics") or ""),
            status=_opt_str(c.get("colourStatus")),
        )
        for c in _dicts(api.get("productColour"))
    ]

    return Product(
        id=str(_first(api, "productId", "id", "product_id", default="")),
        name=str(_first(api, "productName", "name", default="")),
        description=str(_first(api, "productInfo", "description", default="")),
        price=price,
        price_after_discount=_opt_float(api.get("productPriceAfterDiscount")),
        images=images,
        image_url=images[0] if images else "",
        rating=rating,
        reviews=[map_review(r) for r in _dicts(raw_ratings)],
        pricing=pricing,
        colors=colors,
        delivery_time=_opt_str(delivery_time) or DEFAULT_DELIVERY_TIME,
        delivery_cost=_to_float(api.get("productDeliveryCost")),
        famous=bool(api.get("famous") or False),
        product_status=_opt_str(api.get("productStatus")),
        product_offer=_opt_str(api.get("productOffer")),
        product_type=_opt_str(api.get("productType")),
        ingredients=_opt_str(api.get("productIng")),
        best_before=_opt_str(api.get("productBestBefore")),
        instructions=_opt_str(api.get("productInst")),
    )


def map_catalog(api: Dict[str, Any], delivery_time: Optional[str] = None) -> Catalog:
    products = _first(api, "products", "productList", "product_list", default=[])
    return Catalog(
        id=str(_first(api, "catalogueId", "id", "catalogue_id", default="")),
        name=str(_first(api, "catalogueName", "name", default="")),
        image=str(_first(api, "catalogueImage", "image", default="")),
        products=[map_product(p, delivery_time) for p in _dicts(products)],
    )


def map_categories(items: List[Dict[str, Any]], delivery_time: Optional[str] = None) -> List[Category]:
    """
    Group raw items by category id, in first-seen order. Three payload styles:
      1. category with nested catalogues (bulk fetch)
      2. flat catalogue object carrying its category id (single category fetch)
      3. products directly under the category -> one synthetic 'All Products' catalog
    A category with none of those stays a skeleton.
    """
    by_id: Dict[str, Dict[str, Any]] = {}
    for item in items:
        cat_id = str(_first(item, "categoryId", "id", "category_id", default=""))
        if not cat_id:
            continue
        entry = by_id.setdefault(cat_id, {"id": cat_id, "name": "", "image": "", "catalogs": []})
        entry["name"] = entry["name"] or str(_first(item, "categoryName", "name", default=""))
        entry["image"] = entry["image"] or str(_first(item, "categoryImage", "image", default=""))

        nested = _first(item, "catalogues", "catalogueResponseList", "catalogue_response_list", default=[])
        direct_products = _first(item, "products", "productList", "product_list", default=[])

        if nested:
            entry["catalogs"].extend(map_catalog(c, delivery_time) for c in _dicts(nested))
        elif _first(item, "catalogueId", "catalogue_id") is not None:
            entry["catalogs"].append(map_catalog(item, delivery_time))
        elif direct_products:
            entry["catalogs"].append(Catalog(
                id=f"default-{cat_id}",
                name="All Products",
                image=entry["image"],
                products=[map_product(p, delivery_time) for p in _dicts(direct_products)],
            ))

    return [Category(**entry) for entry in by_id.values()]


def map_company_details(api: Dict[str, Any]) -> Optional[CompanyDetails]:
    company_id = _first(api, "companyId", "company_id", "id")
    if company_id is None:
        return None
    known = {"companyId", "company_id", "id", "companyName", "company_name",
             "companyDomain", "company_domain", "deliveryTime", "delivery_time"}
    return CompanyDetails(
        company_id=str(company_id),
        company_name=str(_first(api, "companyName", "company_name", default="")),
        company_domain=str(_first(api, "companyDomain", "company_domain", default="")),
        delivery_time=_opt_str(_first(api, "deliveryTime", "delivery_time")),
        **{k: v for k, v in api.items() if k not in known},
    )
