from __future__ import annotations

import pytest

from savebot.state.pagination import clamp_limit, paginate
from savebot.state.store import SaveStore


def test_paginate_metadata():
    items, meta = paginate(list(range(15)), 2, 10)
    assert items == [10, 11, 12, 13, 14]
    assert meta == {
        "page": 2, "limit": 10, "total": 15, "total_pages": 2,
        "has_next": False, "has_prev": True,
    }


@pytest.mark.parametrize("page", [0, -1, 3, 100])
def test_out_of_range_pages_are_empty(page):
    items, meta = paginate(list(range(15)), page, 10)
    assert items == []
    assert meta["total"] == 15


def test_empty_collection():
    items, meta = paginate([], 1, 10)
    assert items == []
    assert meta["total_pages"] == 0
    assert not meta["has_next"] and not meta["has_prev"]


@pytest.mark.parametrize("raw, expected", [(0, 1), (-5, 1), (7, 7), (500, 50), ("3", 3), ("x", 10), (None, 10)])
def test_clamp_limit(raw, expected):
    assert clamp_limit(raw) == expected


@pytest.mark.asyncio
async def test_list_second_page_of_fifteen(store: SaveStore):
    codes = [(await store.put(f"note {i}", "u1")).code for i in range(15)]

    page = await store.list("u1", page=2, limit=10)

    assert len(page.items) == 5
    assert [p.id for p in page.items] == codes[10:]
    assert page.total == 15
    assert page.total_pages == 2
    assert page.has_prev and not page.has_next


@pytest.mark.asyncio
async def test_list_previews_are_truncated(store: SaveStore):
    await store.put("a" * 150, "u1", tags="#one")
    await store.put("short", "u1")

    page = await store.list("u1")

    assert page.items[0].preview == "a" * 100 + "..."
    assert page.items[0].tags == ("one",)
    assert page.items[1].preview == "short"
    assert not hasattr(page.items[0], "content")


@pytest.mark.asyncio
async def test_list_unknown_or_empty_owner(store: SaveStore):
    await store.put("x", "u1")
    for owner in ("nobody", ""):
        page = await store.list(owner)
        assert page.items == [] and page.total == 0


@pytest.mark.asyncio
async def test_list_skips_expired_and_does_not_count_views(store: SaveStore, clock):
    await store.put("short", "u1", ttl="1m")
    live = (await store.put("long", "u1", ttl="1d")).code
    clock.advance(minutes=1)

    page = await store.list("u1")

    assert [p.id for p in page.items] == [live]
    assert page.total == 1
    assert page.items[0].views == 0
