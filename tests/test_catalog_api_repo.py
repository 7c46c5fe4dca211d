import httpx
import pytest

from storefront.domain.repositories.catalog_api_repo import CatalogApiError, CatalogApiRepo


def _repo(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://catalog.test/api")
    return CatalogApiRepo(client)


@pytest.mark.asyncio
async def test_fetch_company_details_sends_tenant_domain():
    seen = {}

    def handler(request: httpx.Request):
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"companyId": 5, "companyName": "Acme", "deliveryTime": "1 Day"})

    details = await _repo(handler).fetch_company_details("acme")
    assert seen == {"path": "/api/company/get", "params": {"companyDomain": "acme"}}
    assert details.company_id == "5"
    assert details.delivery_time == "1 Day"


@pytest.mark.asyncio
async def test_fetch_categories_accepts_inventory_object_and_bare_list():
    payload = [{"categoryId": 1, "categoryName": "Sweets"}]

    repo = _repo(lambda r: httpx.Response(200, json={"categories": payload}))
    assert [c.id for c in await repo.fetch_categories("5")] == ["1"]

    repo = _repo(lambda r: httpx.Response(200, json=payload))
    assert [c.id for c in await repo.fetch_categories("5")] == ["1"]


@pytest.mark.asyncio
async def test_fetch_category_picks_the_requested_one():
    def handler(request: httpx.Request):
        assert request.url.params["categoryId"] == "2"
        return httpx.Response(200, json=[
            {"categoryId": 2, "catalogueId": 20, "products": [{"productId": 1, "productName": "x"}]},
        ])

    category = await _repo(handler).fetch_category("5", "2")
    assert category.id == "2"
    assert not category.is_skeleton


@pytest.mark.asyncio
async def test_http_error_status_raises_catalog_api_error():
    with pytest.raises(CatalogApiError) as exc:
        await _repo(lambda r: httpx.Response(503)).fetch_categories("5")
    assert exc.value.status_code == 503


@pytest.mark.asyncio
async def test_network_error_raises_catalog_api_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(CatalogApiError):
        await _repo(handler).fetch_company_details("acme")


@pytest.mark.asyncio
async def test_invalid_json_raises_catalog_api_error():
    with pytest.raises(CatalogApiError):
        await _repo(lambda r: httpx.Response(200, content=b"<html>")).fetch_categories("5")


def test_mapping_failures_surface_as_catalog_api_error():
    with pytest.raises(CatalogApiError) as exc:
        CatalogApiRepo._map("/company/get", lambda data: data["companyId"], {})
    assert exc.value.endpoint == "/company/get"


@pytest.mark.asyncio
async def test_loosely_typed_payloads_still_map():
    def handler(request: httpx.Request):
        return httpx.Response(200, json=[{"categoryId": 1, "catalogues": [
            {"catalogueId": 10, "products": [{"productId": 7, "productName": "x", "productRatings": [4]}]},
            "not-a-catalogue",
        ]}])

    [category] = await _repo(handler).fetch_categories("5")
    assert category.catalogs[0].products[0].rating == 4.0
