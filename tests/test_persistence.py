import asyncio
import json

import pytest

from buyway.shared.infrastructure.persistence.backing import KeyValueBacking, MemoryKeyValueStore
from buyway.shared.infrastructure.persistence.duckdb_backing import DuckDBKeyValueStore
from buyway.shared.infrastructure.persistence.write_queue import PersistenceQueue
from buyway.shared.domain.stores.cart import CartStore
from buyway.shared.domain.stores.wishlist import WishlistStore

from conftest import FailingBacking, RecordingBacking


def test_backings_satisfy_protocol():
    assert isinstance(MemoryKeyValueStore(), KeyValueBacking)
    assert isinstance(DuckDBKeyValueStore(), KeyValueBacking)


@pytest.mark.asyncio
async def test_mutation_notifies_before_write_lands(shirt):
    backing = RecordingBacking()
    cart = CartStore(backing)
    seen = []
    cart.subscribe(seen.append)

    cart.add_to_cart(shirt, "M")

    assert len(seen) == 2
    assert backing.writes == []
    assert cart.pending_writes == 1

    await cart.flush()
    assert len(backing.writes) == 1
    assert cart.pending_writes == 0


@pytest.mark.asyncio
async def test_slow_earlier_write_cannot_land_after_later_one(shirt):
    backing = RecordingBacking(delays=[0.05, 0.0, 0.0])
    cart = CartStore(backing)

    cart.add_to_cart(shirt, "M")
    cart.add_to_cart(shirt, "M")
    cart.add_to_cart(shirt, "M")
    await cart.flush()

    quantities = [json.loads(value)[0]["quantity"] for _, value in backing.writes]
    assert quantities == [1, 2, 3]
    assert json.loads(await backing.get("user_cart"))[0]["quantity"] == 3


@pytest.mark.asyncio
async def test_background_drain_runs_without_flush(shirt):
    backing = RecordingBacking()
    cart = CartStore(backing)

    cart.add_to_cart(shirt)
    for _ in range(5):
        await asyncio.sleep(0)

    assert len(backing.writes) == 1


@pytest.mark.asyncio
async def test_write_failure_is_logged_and_swallowed(shirt, caplog):
    backing = FailingBacking(fail_times=1)
    cart = CartStore(backing)

    cart.add_to_cart(shirt, "M")
    cart.add_to_cart(shirt, "L")
    await cart.flush()

    assert len(cart.get_all()) == 2
    assert cart._queue.failures == 1
    assert "Error saving 'user_cart'" in caplog.text
    assert len(json.loads(await backing.get("user_cart"))) == 2


@pytest.mark.asyncio
async def test_load_failure_keeps_state_and_logs(shirt, caplog):
    backing = FailingBacking(fail_get=True, fail_set=False)
    wishlist = WishlistStore(backing)
    wishlist.toggle_wishlist(shirt)

    await wishlist.load()

    assert wishlist.is_in_wishlist("1")
    assert "Error loading wishlist" in caplog.text


@pytest.mark.asyncio
async def test_load_ignores_corrupt_payload(caplog):
    backing = MemoryKeyValueStore({"user_cart": "{not json"})
    cart = CartStore(backing)

    await cart.load()

    assert cart.get_all() == []
    assert "Error loading cart" in caplog.text


def test_writes_wait_for_flush_without_running_loop(shirt):
    backing = RecordingBacking()
    cart = CartStore(backing)

    cart.add_to_cart(shirt, "M")
    cart.add_to_cart(shirt, "S")
    assert cart.pending_writes == 2
    assert backing.writes == []

    asyncio.run(cart.flush())

    assert len(backing.writes) == 2
    assert cart.pending_writes == 0


@pytest.mark.asyncio
async def test_queue_keeps_submission_order_across_concurrent_flushes():
    backing = RecordingBacking(delays=[0.02, 0.01, 0.0])
    queue = PersistenceQueue(backing, "k")

    queue.submit("a")
    queue.submit("b")
    flushing = asyncio.gather(queue.flush(), queue.flush())
    queue.submit("c")
    await flushing
    await queue.flush()

    assert [value for _, value in backing.writes] == ["a", "b", "c"]


@pytest.mark.asyncio
async def test_memory_store_remove():
    store = MemoryKeyValueStore({"a": "1", "b": "2"})

    await store.remove(["a", "missing"])

    assert store.snapshot() == {"b": "2"}


@pytest.mark.asyncio
async def test_duckdb_backing_round_trip(tmp_path):
    db_path = str(tmp_path / "db" / "kv.duckdb")
    store = DuckDBKeyValueStore(db_path)
    await store.start()

    assert await store.get("user_cart") is None
    await store.set("user_cart", "[]")
    await store.set("user_cart", '[{"id": "1"}]')
    await store.set("user_wishlist", "[]")
    assert await store.get("user_cart") == '[{"id": "1"}]'

    await store.remove(["user_wishlist"])
    assert await store.get("user_wishlist") is None
    store.close()

    reopened = DuckDBKeyValueStore(db_path)
    await reopened.start()
    assert await reopened.get("user_cart") == '[{"id": "1"}]'
    reopened.close()


@pytest.mark.asyncio
async def test_duckdb_backing_requires_start():
    store = DuckDBKeyValueStore()

    with pytest.raises(RuntimeError):
        await store.get("user_cart")


@pytest.mark.asyncio
async def test_cart_persists_through_duckdb(shirt):
    store = DuckDBKeyValueStore()
    await store.start()
    cart = CartStore(store)

    cart.add_to_cart(shirt, "XL")
    await cart.flush()

    reloaded = CartStore(store)
    await reloaded.load()
    assert reloaded.get_all()[0].key == ("1", "XL")
    store.close()
