# storefront/domain/repositories/catalog_api_repo.py
from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, TypeVar
import time
import httpx
from pydantic import ValidationError

from storefront.domain.models.product import Category, CompanyDetails
from storefront.domain.services.mappers import map_categories, map_company_details

import logging
logger = logging.getLogger(__name__)

T = TypeVar("T")

# raised by mappers on payloads of an unexpected shape
MAPPING_ERRORS = (ValidationError, TypeError, AttributeError, ValueError, KeyError)


class CatalogApiError(Exception):
    """The catalog/company service could not be reached or answered with an error."""

    def __init__(self, endpoint: str, message: str, status_code: Optional[int] = None):
        self.endpoint = endpoint
        self.status_code = status_code
        super().__init__(f"{endpoint}: {message}")


class CatalogApiRepo:
    """
    Adapter for the external catalog/company service.
    Raises CatalogApiError; deciding how to degrade is the caller's job.
    """

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def _get(self, endpoint: str, params: Dict[str, str]) -> Any:
        params = {k: v for k, v in params.items() if v}
        t0 = time.perf_counter()
        try:
            res = await self.client.get(endpoint, params=params)
        except httpx.HTTPError as e:
            raise CatalogApiError(endpoint, f"network error: {e}") from e

        logger.debug("catalog_api GET %s params=%s status=%s time=%.3fs",
                     endpoint, params, res.status_code, time.perf_counter() - t0)
        if res.status_code >= 400:
            raise CatalogApiError(endpoint, f"HTTP {res.status_code}", status_code=res.status_code)
        try:
            return res.json()
        except ValueError as e:
            raise CatalogApiError(endpoint, "invalid JSON body", status_code=res.status_code) from e

    @staticmethod
    def _map(endpoint: str, mapper: Callable[..., T], *args: Any) -> T:
        try:
            return mapper(*args)
        except MAPPING_ERRORS as e:
            raise CatalogApiError(endpoint, f"unexpected payload: {e}") from e

    async def fetch_company_details(self, tenant: str) -> Optional[CompanyDetails]:
        data = await self._get("/company/get", {"companyDomain": tenant})
        if not isinstance(data, dict):
            return None
        return self._map("/company/get", map_company_details, data)

    async def fetch_categories(self, company_id: str, delivery_time: Optional[str] = None) -> List[Category]:
        endpoint = "/product/catalogue/category/get"
        data = await self._get(endpoint, {"companyId": company_id})
        return self._map(endpoint, map_categories, _category_items(data), delivery_time)

    async def fetch_category(
        self, company_id: str, category_id: str, delivery_time: Optional[str] = None
    ) -> Optional[Category]:
        endpoint = "/product/catalogue/category/get"
        data = await self._get(endpoint, {"companyId": company_id, "categoryId": category_id})
        categories = self._map(endpoint, map_categories, _category_items(data), delivery_time)
        return next((c for c in categories if c.id == category_id), None)


def _category_items(data: Any) -> List[Dict[str, Any]]:
    """The service answers either a bare list or an inventory object with 'categories'."""
    if isinstance(data, list):
        return [d for d in data if isinstance(d, dict)]
    if isinstance(data, dict):
        return [d for d in data.get("categories") or [] if isinstance(d, dict)]
    return []
