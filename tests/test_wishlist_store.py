import time

import pytest

from storefront.domain.models.state import WishlistSnapshot
from storefront.domain.stores.persisted import PersistedStore
from storefront.domain.stores.wishlist_store import WishlistStore

DAY = 24 * 3600
TTL = 7 * DAY


@pytest.fixture
def wishlist(storage):
    persisted = PersistedStore(storage, "wishlist-storage", WishlistSnapshot, partition="sess-1")
    return WishlistStore(persisted, ttl=TTL)


@pytest.mark.asyncio
async def test_add_is_set_like_and_opens_panel(wishlist, make_product):
    p = make_product("p1")
    assert await wishlist.add_to_wishlist(p) is True
    first_ts = wishlist.timestamp
    assert await wishlist.add_to_wishlist(p) is False

    assert [i.id for i in wishlist.wishlist] == ["p1"]
    assert wishlist.is_wishlist_open is True
    assert wishlist.timestamp == first_ts


@pytest.mark.asyncio
async def test_remove_does_not_touch_timestamp(wishlist, make_product):
    await wishlist.add_to_wishlist(make_product("p1"))
    ts = wishlist.timestamp
    await wishlist.remove_from_wishlist("p1")
    assert wishlist.wishlist == []
    assert wishlist.timestamp == ts


@pytest.mark.asyncio
async def test_toggle(wishlist, make_product):
    p = make_product("p1")
    assert await wishlist.toggle_wishlist(p) is True
    assert wishlist.is_in_wishlist("p1")
    assert await wishlist.toggle_wishlist(p) is False
    assert not wishlist.is_in_wishlist("p1")


@pytest.mark.asyncio
async def test_expired_wishlist_is_emptied_on_rehydration(wishlist, make_product):
    stale = WishlistSnapshot(wishlist=[make_product("p1")], timestamp=time.time() - 8 * DAY)
    await wishlist.persisted.save(stale)

    await wishlist.hydrate()
    assert wishlist.wishlist == []
    assert wishlist.timestamp == pytest.approx(time.time(), abs=5)


@pytest.mark.asyncio
async def test_recent_wishlist_survives_rehydration(wishlist, make_product):
    await wishlist.persisted.save(WishlistSnapshot(wishlist=[make_product("p1")], timestamp=time.time() - 6 * DAY))
    await wishlist.hydrate()
    assert [i.id for i in wishlist.wishlist] == ["p1"]


@pytest.mark.asyncio
async def test_check_expiration_is_all_or_nothing(wishlist, make_product):
    await wishlist.add_to_wishlist(make_product("p1"))
    await wishlist.add_to_wishlist(make_product("p2"))
    assert await wishlist.check_expiration(now=wishlist.timestamp + TTL - 1) is False
    assert len(wishlist.wishlist) == 2
    assert await wishlist.check_expiration(now=wishlist.timestamp + TTL + 1) is True
    assert wishlist.wishlist == []


@pytest.mark.asyncio
async def test_sync_with_server_refreshes_snapshots_in_place(wishlist, make_product):
    await wishlist.add_to_wishlist(make_product("p1", price=100))
    await wishlist.add_to_wishlist(make_product("p2", price=50))
    await wishlist.add_to_wishlist(make_product("gone", price=10))

    refreshed = await wishlist.sync_with_server([make_product("p1", price=80), make_product("p2", price=50)])

    assert refreshed == 1
    assert [(i.id, i.price) for i in wishlist.wishlist] == [("p1", 80), ("p2", 50), ("gone", 10)]


@pytest.mark.asyncio
async def test_panel_flag_is_persisted(wishlist):
    await wishlist.set_wishlist_open(True)
    again = WishlistStore(wishlist.persisted, ttl=TTL)
    await again.hydrate()
    assert again.is_wishlist_open is True
