import pytest

from storefront.db import http
from storefront.db.storage import MemoryStorage, get_storage, set_storage
from storefront.domain.models.state import WishlistSnapshot
from storefront.domain.stores.persisted import PersistedStore


def _store(storage, **kw):
    return PersistedStore(storage, "wishlist-storage", WishlistSnapshot, partition="sess-1", **kw)


def test_key_is_namespaced():
    assert _store(MemoryStorage()).key == "sf:sess-1:wishlist-storage"
    assert PersistedStore(MemoryStorage(), "cart-storage", WishlistSnapshot, prefix="").key == "cart-storage"


@pytest.mark.asyncio
async def test_missing_blob_loads_as_none(storage):
    assert await _store(storage).load() is None


@pytest.mark.asyncio
async def test_save_then_load_returns_whole_snapshot(storage, make_product):
    store = _store(storage)
    snap = WishlistSnapshot(wishlist=[make_product("p1")], timestamp=123.0, is_wishlist_open=True)
    await store.save(snap)
    assert await store.load() == snap


@pytest.mark.asyncio
@pytest.mark.parametrize("raw", ["{not json", '{"wishlist": "nope"}', "[]"])
async def test_corrupt_blob_is_treated_as_empty(storage, raw):
    store = _store(storage)
    await storage.set(store.key, raw)
    assert await store.load() is None


@pytest.mark.asyncio
async def test_skip_hydration_only_affects_automatic_hydration(storage):
    store = _store(storage, skip_hydration=True)
    await store.save(WishlistSnapshot(timestamp=1.0))
    assert await store.hydrate() is None
    assert (await store.rehydrate()).timestamp == 1.0


@pytest.mark.asyncio
async def test_clear_removes_blob(storage):
    store = _store(storage)
    await store.save(WishlistSnapshot(timestamp=1.0))
    await store.clear()
    assert await store.load() is None


@pytest.mark.asyncio
async def test_storage_errors_degrade_to_empty():
    class BrokenStorage:
        async def get(self, key):
            raise ConnectionError("down")

        async def set(self, key, value, ttl=None):
            raise ConnectionError("down")

        async def delete(self, key):
            raise ConnectionError("down")

    store = _store(BrokenStorage())
    assert await store.load() is None
    await store.save(WishlistSnapshot())   # logged, not raised
    await store.clear()


@pytest.mark.asyncio
async def test_memory_storage_ttl():
    clock = {"t": 1000.0}
    storage = MemoryStorage(clock=lambda: clock["t"])
    await storage.set("k", "v", ttl=10)
    assert await storage.get("k") == "v"
    clock["t"] += 11
    assert await storage.get("k") is None


def test_getters_raise_before_startup():
    set_storage(None)
    with pytest.raises(RuntimeError):
        get_storage()
    with pytest.raises(RuntimeError):
        http.get_http_client()
