# storefront/api/deps.py
from typing import Annotated
import uuid
from fastapi import Depends, Request, Response
from storefront.core.config import Settings, get_settings
from storefront.core.tenant import get_tenant
from storefront.db.http import get_http_client
from storefront.db.storage import StorageBackend, get_storage
from storefront.domain.repositories.catalog_api_repo import CatalogApiRepo
from storefront.domain.stores.session import SessionStores, build_session_stores

TenantDep = Annotated[str, Depends(get_tenant)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


# Dependency for injecting the session storage backend into endpoints/services
def storage_dep() -> StorageBackend:
    return get_storage()


def catalog_api_dep() -> CatalogApiRepo:
    return CatalogApiRepo(get_http_client())


def session_id_dep(request: Request, response: Response, settings: SettingsDep) -> str:
    """Visitor session id from the cookie; a new one is issued on first visit."""
    session_id = request.cookies.get(settings.session_cookie_name)
    if not session_id:
        session_id = uuid.uuid4().hex
        response.set_cookie(settings.session_cookie_name, session_id, httponly=True, samesite="lax")
    return session_id


async def session_stores_dep(
    tenant: TenantDep,
    settings: SettingsDep,
    session_id: str = Depends(session_id_dep),
    storage: StorageBackend = Depends(storage_dep),
) -> SessionStores:
    """
    Fresh store instances for this request.
    Cart and wishlist hydrate automatically (with their expiration checks);
    the catalog is hydrated manually by the Initializer or by `restore()`.
    """
    stores = build_session_stores(storage, session_id, tenant, settings)
    await stores.cart.hydrate()
    await stores.wishlist.hydrate()
    return stores


StoresDep = Annotated[SessionStores, Depends(session_stores_dep)]
CatalogApiDep = Annotated[CatalogApiRepo, Depends(catalog_api_dep)]
