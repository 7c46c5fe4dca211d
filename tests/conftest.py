import pytest

from storefront.core.config import Settings
from storefront.db.storage import MemoryStorage
from storefront.domain.models.product import Catalog, Category, Product
from storefront.domain.stores.session import build_session_stores

DAY = 24 * 3600


@pytest.fixture
def settings():
    return Settings(
        DEBUG=False,
        STORAGE_BACKEND="memory",
        category_ttl=3600,
        cart_session_ttl=10 * 3600,
        wishlist_ttl=7 * DAY,
    )


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def make_product():
    def _make(pid, name=None, price=100.0, images=None, **kw):
        return Product(
            id=pid,
            name=name or f"Product {pid}",
            price=price,
            images=images if images is not None else [f"https://img.test/{pid}.jpg"],
            **kw,
        )
    return _make


@pytest.fixture
def make_category(make_product):
    """make_category("c1", {"cat-a": ["p1", "p2"]}) -> populated; make_category("c1") -> skeleton."""
    def _make(cid, catalogs=None, name=None, image=""):
        return Category(
            id=cid,
            name=name or f"Category {cid}",
            image=image,
            catalogs=[
                Catalog(id=cat_id, name=f"Catalog {cat_id}", products=[make_product(p) for p in pids])
                for cat_id, pids in (catalogs or {}).items()
            ],
        )
    return _make


@pytest.fixture
def stores(storage, settings):
    return build_session_stores(storage, "sess-1", "acme", settings)
