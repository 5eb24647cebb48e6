"""Unit tests for MemoryCacheProvider."""

from __future__ import annotations

import pytest

from catalog_proxy.providers.cache.memory_cache import MemoryCacheProvider
from tests.conftest import FakeClock


class TestMemoryCacheProvider:
    @pytest.mark.asyncio
    async def test_get_missing_key_returns_none(self, cache: MemoryCacheProvider) -> None:
        assert await cache.get("nonexistent") is None
        assert await cache.get_entry("nonexistent") is None

    @pytest.mark.asyncio
    async def test_set_and_get(self, cache: MemoryCacheProvider) -> None:
        await cache.set("key1", "value1")
        assert await cache.get("key1") == "value1"

    @pytest.mark.asyncio
    async def test_set_returns_stamped_entry(self, cache: MemoryCacheProvider, clock: FakeClock) -> None:
        entry = await cache.set("key1", [1, 2])
        assert entry.key == "key1"
        assert entry.value == [1, 2]
        assert entry.stored_at == clock.now

    @pytest.mark.asyncio
    async def test_get_returns_same_instance(self, cache: MemoryCacheProvider) -> None:
        value = [{"id": 1}]
        await cache.set("key1", value)
        assert await cache.get("key1") is value

    @pytest.mark.asyncio
    async def test_set_overwrites_existing(self, cache: MemoryCacheProvider, clock: FakeClock) -> None:
        await cache.set("key1", "old")
        clock.advance(5)
        await cache.set("key1", "new")
        entry = await cache.get_entry("key1")
        assert entry is not None
        assert entry.value == "new"
        assert entry.stored_at == clock.now

    @pytest.mark.asyncio
    async def test_delete_removes_key(self, cache: MemoryCacheProvider) -> None:
        await cache.set("key1", "value1")
        await cache.delete("key1")
        assert await cache.get("key1") is None

    @pytest.mark.asyncio
    async def test_delete_nonexistent_is_noop(self, cache: MemoryCacheProvider) -> None:
        await cache.delete("nonexistent")

    @pytest.mark.asyncio
    async def test_exists(self, cache: MemoryCacheProvider) -> None:
        await cache.set("key1", "value1")
        assert await cache.exists("key1") is True
        assert await cache.exists("missing") is False

    @pytest.mark.asyncio
    async def test_clear_and_size(self, cache: MemoryCacheProvider) -> None:
        await cache.set("a", 1)
        await cache.set("b", 2)
        assert cache.size() == 2
        await cache.clear()
        assert cache.size() == 0


class TestMemoryCacheExpiry:
    @pytest.mark.asyncio
    async def test_fresh_just_before_ttl(self, cache: MemoryCacheProvider, clock: FakeClock) -> None:
        await cache.set("key1", "value1")
        clock.advance(599.999)
        assert await cache.get("key1") == "value1"

    @pytest.mark.asyncio
    async def test_expired_exactly_at_ttl(self, cache: MemoryCacheProvider, clock: FakeClock) -> None:
        await cache.set("key1", "value1")
        clock.advance(600.0)
        assert await cache.get("key1") is None
        assert await cache.exists("key1") is False

    @pytest.mark.asyncio
    async def test_rewrite_after_expiry_restamps(self, cache: MemoryCacheProvider, clock: FakeClock) -> None:
        first = await cache.set("key1", "v1")
        clock.advance(601)
        assert await cache.get_entry("key1") is None
        second = await cache.set("key1", "v2")
        assert second.stored_at > first.stored_at
        assert await cache.get("key1") == "v2"

    @pytest.mark.asyncio
    async def test_keys_expire_independently(self, cache: MemoryCacheProvider, clock: FakeClock) -> None:
        await cache.set("early", 1)
        clock.advance(300)
        await cache.set("late", 2)
        clock.advance(301)
        assert await cache.get("early") is None
        assert await cache.get("late") == 2

    @pytest.mark.asyncio
    async def test_size_ignores_expired(self, cache: MemoryCacheProvider, clock: FakeClock) -> None:
        await cache.set("key1", 1)
        clock.advance(700)
        assert cache.size() == 0


class TestMemoryCacheBound:
    @pytest.mark.asyncio
    async def test_least_recently_used_evicted_when_full(self, clock: FakeClock) -> None:
        cache = MemoryCacheProvider(max_size=2, ttl=600.0, clock=clock)
        await cache.set("a", 1)
        await cache.set("b", 2)
        await cache.get("a")  # touch a so b is the LRU entry
        await cache.set("c", 3)

        assert await cache.get("a") == 1
        assert await cache.get("b") is None
        assert await cache.get("c") == 3
