"""Tests for the SQL document store."""
from campus.domain.common.store import field_equals


async def test_create_and_get(store):
    doc_id = await store.create("roles", {"id": "hnd", "name": "HND"})
    assert doc_id == "hnd"
    assert await store.get("roles", "hnd") == {"id": "hnd", "name": "HND"}
    assert await store.get("events", "hnd") is None


async def test_create_generates_id(store):
    doc_id = await store.create("notifications", {"title": "hi"})
    assert doc_id
    assert (await store.get("notifications", doc_id))["id"] == doc_id


async def test_update_merges_shallowly(store):
    await store.create("roles", {"id": "r1", "name": "Old", "color": "#111111"})

    assert await store.update("roles", "r1", {"name": "New"}) is True
    assert await store.get("roles", "r1") == {"id": "r1", "name": "New", "color": "#111111"}
    assert await store.update("roles", "missing", {"name": "x"}) is False


async def test_update_cannot_change_id(store):
    await store.create("roles", {"id": "r1", "name": "Old"})
    await store.update("roles", "r1", {"id": "other"})
    assert (await store.get("roles", "r1"))["id"] == "r1"


async def test_delete(store):
    await store.create("roles", {"id": "r1"})
    assert await store.delete("roles", "r1") is True
    assert await store.get("roles", "r1") is None
    assert await store.delete("roles", "r1") is False


async def test_query_in_insertion_order_with_predicate(store):
    for i, color in enumerate(["red", "blue", "red"]):
        await store.create("items", {"id": f"z{i}", "color": color})
    await store.create("other", {"id": "o1", "color": "red"})

    assert [d["id"] for d in await store.query("items")] == ["z0", "z1", "z2"]
    assert [d["id"] for d in await store.query("items", field_equals("color", "red"))] == ["z0", "z2"]
    assert await store.query("empty") == []
