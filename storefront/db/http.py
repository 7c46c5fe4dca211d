# storefront/db/http.py
import httpx
from storefront.core.config import get_settings

import logging
logger = logging.getLogger(__name__)

http_client: httpx.AsyncClient | None = None


async def connect():
    """Create the shared client for the catalog/company service."""
    global http_client
    settings = get_settings()
    http_client = httpx.AsyncClient(
        base_url=settings.CATALOG_API_BASE_URL,
        timeout=settings.catalog_api_timeout_s,
        headers={"Content-Type": "application/json"},
    )
    logger.info("Catalog API client ready base_url=%s", settings.CATALOG_API_BASE_URL)


async def disconnect():
    global http_client
    if http_client:
        await http_client.aclose()
        http_client = None
        logger.info("Catalog API client closed")


def get_http_client() -> httpx.AsyncClient:
    if http_client is None:
        raise RuntimeError("Catalog API client not initialized")
    return http_client
