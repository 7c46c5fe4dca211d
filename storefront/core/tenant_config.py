# storefront/core/tenant_config.py
from __future__ import annotations
from typing import Any, Dict, Literal, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

"""
Note:
    - Tenant configuration is a pure lookup + merge: no state, no I/O.
    - TENANT_MAP entries are partial overrides; anything missing falls back to DEFAULT_CONFIG.
    - Raw config dicts and the JSON served to the front end use camelCase keys;
      attributes are snake_case (dump with by_alias=True).
"""


class ConfigModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ThemeColors(ConfigModel):
    primary: str
    primary_foreground: str
    secondary: str
    background: str


class ProductCardTheme(ConfigModel):
    background_color: str
    radius: str
    shadow: str
    border: str


class Theme(ConfigModel):
    colors: ThemeColors
    radius: str
    font_family: str
    product_card: ProductCardTheme


class Motion(ConfigModel):
    card_hover: str
    button_tap: str
    page_enter: str
    duration: str
    easing: str


class HeadingTypography(ConfigModel):
    weight: str
    letter_spacing: str
    transform: str


class ProductNameTypography(ConfigModel):
    weight: str
    letter_spacing: str


class PriceTypography(ConfigModel):
    weight: str
    tracking: str


class ButtonTypography(ConfigModel):
    uppercase: bool
    weight: str


class Typography(ConfigModel):
    heading: HeadingTypography
    product_name: ProductNameTypography
    price: PriceTypography
    button: ButtonTypography


class Layout(ConfigModel):
    density: Literal["comfortable", "compact", "luxury"]
    max_width: str
    grid_gap: str
    section_spacing: str


class Surface(ConfigModel):
    header: Literal["solid", "glass", "gradient"]
    footer: Literal["dark", "minimal", "branded"]
    product_card_style: Literal["flat", "elevated", "outlined", "glass"]


class BrandTone(ConfigModel):
    mood: Literal["calm", "energetic", "playful", "serious", "premium"]
    corner_style: Literal["sharp", "soft", "mixed"]
    animation_speed: Literal["slow", "normal", "fast"]


class Features(ConfigModel):
    enable_wishlist: bool
    enable_ratings: bool
    show_stock_count: bool


class Texts(ConfigModel):
    checkout_button: str
    empty_cart_params: str
    quick_add_button: Optional[str] = None
    search_placeholder: Optional[str] = None
    starts_from: Optional[str] = None


class TenantConfig(ConfigModel):
    id: str
    domain: Optional[str] = None
    company_id: Optional[str] = None
    name: str
    theme: Theme
    motion: Motion
    typography: Typography
    layout: Layout
    surface: Surface
    brand_tone: BrandTone
    features: Features
    text: Texts


DEFAULT_CONFIG: Dict[str, Any] = {
    "id": "default",
    "domain": "babaihomefoods",
    "name": "Digi Turu",
    "theme": {
        "colors": {
            "primary": "180 80% 35%",
            "primaryForeground": "210 40% 98%",
            "secondary": "210 20% 94%",
            "background": "210 20% 98%",
        },
        "radius": "0.5rem",
        "fontFamily": "var(--font-poppins)",
        "productCard": {
            "backgroundColor": "hsl(var(--card))",
            "radius": "1.5rem",
            "shadow": "0 1px 2px 0 rgb(0 0 0 / 0.05)",
            "border": "1px solid hsl(var(--border) / 0.5)",
        },
    },
    "motion": {
        "cardHover": "translateY(-4px) scale(1.01)",
        "buttonTap": "scale(0.96)",
        "pageEnter": "fade-up",
        "duration": "300ms",
        "easing": "cubic-bezier(0.4, 0, 0.2, 1)",
    },
    "typography": {
        "heading": {"weight": "700", "letterSpacing": "-0.02em", "transform": "none"},
        "productName": {"weight": "500", "letterSpacing": "-0.01em"},
        "price": {"weight": "600", "tracking": "tight"},
        "button": {"uppercase": False, "weight": "600"},
    },
    "layout": {"density": "comfortable", "maxWidth": "1280px", "gridGap": "1.5rem", "sectionSpacing": "4rem"},
    "surface": {"header": "glass", "footer": "minimal", "productCardStyle": "elevated"},
    "brandTone": {"mood": "calm", "cornerStyle": "soft", "animationSpeed": "normal"},
    "features": {"enableWishlist": True, "enableRatings": True, "showStockCount": True},
    "text": {
        "checkoutButton": "Checkout securely",
        "emptyCartParams": "Discover our best sellers!",
        "quickAddButton": "Quick Add",
        "searchPlaceholder": "Search products, brands, and more...",
        "startsFrom": "Starts from",
    },
}

# Partial overrides keyed by tenant id
TENANT_MAP: Dict[str, Dict[str, Any]] = {
    "bavahomefoods": {
        "id": "organic-greens",
        "name": "Home Foods",
        "theme": {
            "colors": {
                "primary": "142 76% 36%",
                "primaryForeground": "0 0% 100%",
                "secondary": "142 70% 95%",
                "background": "142 20% 97%",
            },
            "radius": "1rem",
            "fontFamily": "var(--font-inter)",
            "productCard": {
                "backgroundColor": "white",
                "radius": "1rem",
                "shadow": "0 4px 6px -1px rgb(22 163 74 / 0.1)",
                "border": "1px solid rgb(22 163 74 / 0.2)",
            },
        },
        "brandTone": {"mood": "energetic", "cornerStyle": "mixed"},
        "surface": {"footer": "branded"},
        "text": {
            "checkoutButton": "Order Fresh",
            "emptyCartParams": "Your basket needs some greens!",
            "quickAddButton": "Add Fresh",
            "searchPlaceholder": "Search fresh vegetables...",
            "startsFrom": "From",
        },
    },
    "midnighttech": {
        "id": "midnight-tech",
        "name": "Midnight Tech",
        "theme": {
            "colors": {
                "primary": "262 80% 50%",
                "primaryForeground": "0 0% 100%",
                "secondary": "240 10% 15%",
                "background": "220 30% 12%",
            },
            "radius": "2px",
            "productCard": {
                "backgroundColor": "hsl(220 30% 16%)",
                "radius": "4px",
                "shadow": "0 0 15px rgb(124 58 237 / 0.2)",
                "border": "1px solid rgb(124 58 237 / 0.3)",
            },
        },
        "motion": {"cardHover": "translateY(-2px) scale(1.02)", "pageEnter": "fade-in", "duration": "150ms", "easing": "steps(4)"},
        "typography": {
            "heading": {"weight": "800", "letterSpacing": "0.05em", "transform": "uppercase"},
            "button": {"uppercase": True, "weight": "700"},
        },
        "surface": {"header": "solid", "footer": "dark", "productCardStyle": "outlined"},
        "text": {
            "checkoutButton": "Secure Hardware",
            "emptyCartParams": "System integrity: Empty.",
            "quickAddButton": "Initialize",
        },
    },
    "royalgold": {
        "id": "royal-gold",
        "name": "Royal Gold",
        "theme": {
            "colors": {"primary": "45 90% 45%", "secondary": "45 20% 90%", "background": "40 20% 97%"},
            "radius": "2px",
            "fontFamily": "var(--font-playfair)",
        },
        "layout": {"density": "luxury", "maxWidth": "1100px", "gridGap": "3rem", "sectionSpacing": "6rem"},
        "motion": {"duration": "600ms", "easing": "ease-out"},
        "features": {"enableRatings": False, "showStockCount": False},
        "text": {"checkoutButton": "Request Consultation", "emptyCartParams": "Your selection is empty."},
    },
    "sandhyacollections": {
        "id": "sandhyacollections",
        "name": "Sandhya Collections",
        "theme": {"productCard": {"shadow": "0 4px 6px -1px rgb(0 0 0 / 0.1)"}},
    },
}


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursive dict merge; override wins on leaves, nested dicts are merged key by key."""
    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def resolve_tenant_config(tenant: str) -> TenantConfig:
    """
    Resolve the full config bundle for a tenant id.
    Unknown tenants get DEFAULT_CONFIG; the resolved tenant id is always injected as `domain`.
    """
    specific = TENANT_MAP.get(tenant, {})
    merged = deep_merge(DEFAULT_CONFIG, specific)
    merged["domain"] = tenant
    return TenantConfig.model_validate(merged)
