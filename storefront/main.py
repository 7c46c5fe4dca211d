from fastapi import FastAPI
from storefront.core.config import get_settings
from storefront.core.lifespan import lifespan
from storefront.core.tenant import TenantMiddleware
from storefront.api.v1.routers.health import router as health_router
from storefront.api.v1.routers.tenant import router as tenant_router
from storefront.api.v1.routers.storefront import router as storefront_router
from storefront.api.v1.routers.cart import router as cart_router
from storefront.api.v1.routers.wishlist import router as wishlist_router
from storefront.core.logging import configure_logging

from fastapi.middleware.cors import CORSMiddleware
import logging

settings = get_settings()
configure_logging(level=logging.DEBUG if settings.DEBUG else logging.INFO)

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# ------- CORS -------
# ALLOWED_ORIGINS is a CSV list, e.g. "https://shop.example.com,https://www.example.com"
allowed_origins = [o.strip() for o in settings.ALLOWED_ORIGINS.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,                          # session cookie
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=86400,
)

# ------- Tenant -------
# Added last so it runs first: every handler sees x-company-domain
app.add_middleware(TenantMiddleware)

# ------- Routes -------
app.include_router(health_router)
app.include_router(tenant_router, prefix=settings.api_prefix)
app.include_router(storefront_router, prefix=settings.api_prefix)   # page load, lazy categories, products
app.include_router(cart_router, prefix=settings.api_prefix)
app.include_router(wishlist_router, prefix=settings.api_prefix)
