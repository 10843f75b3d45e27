"""
Tests for the transform cache.
"""

import pytest

from sitelingo.cache import TransformCache
from sitelingo.core.models import CacheKey
from sitelingo.storage import InMemoryCacheStorage


class FakeTimer:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def key(text="Neubau", target="en"):
    return CacheKey("translate", "de", target, text)


# =============================================================================
# Lookups
# =============================================================================


class TestCacheLookups:
    @pytest.mark.asyncio
    async def test_put_then_get(self, cache):
        await cache.put(key(), "New building")

        assert await cache.get(key()) == "New building"
        assert len(cache) == 1

    @pytest.mark.asyncio
    async def test_miss_returns_none(self, cache):
        assert await cache.get(key()) is None
        assert cache.misses == 1

    @pytest.mark.asyncio
    async def test_key_components_are_distinct(self, cache):
        await cache.put(key(target="en"), "New building")

        assert await cache.get(key(target="fr")) is None
        assert await cache.get(CacheKey("extend", "de", "en", "Neubau")) is None
        assert await cache.get(CacheKey("translate", "en", "en", "Neubau")) is None

    @pytest.mark.asyncio
    async def test_text_match_is_exact(self, cache):
        await cache.put(key("Neubau"), "New building")

        assert await cache.get(key("neubau")) is None
        assert await cache.get(key("Neubau ")) is None

    @pytest.mark.asyncio
    async def test_empty_string_is_a_valid_value(self, cache):
        await cache.put(key(), "")

        assert await cache.get(key()) == ""

    @pytest.mark.asyncio
    async def test_last_write_wins(self, cache):
        await cache.put(key(), "first")
        await cache.put(key(), "second")

        assert await cache.get(key()) == "second"
        assert len(cache) == 1

    @pytest.mark.asyncio
    async def test_hit_and_miss_counters(self, cache):
        await cache.get(key())
        await cache.put(key(), "New building")
        await cache.get(key())
        await cache.get(key())

        assert cache.hits == 2
        assert cache.misses == 1


# =============================================================================
# Expiry & Capacity
# =============================================================================


class TestCacheExpiry:
    @pytest.mark.asyncio
    async def test_entry_alive_before_ttl(self):
        timer = FakeTimer()
        cache = TransformCache(ttl_seconds=60, timer=timer)
        await cache.put(key(), "New building")

        timer.advance(59)

        assert await cache.get(key()) == "New building"

    @pytest.mark.asyncio
    async def test_stale_entry_never_returned(self):
        timer = FakeTimer()
        cache = TransformCache(ttl_seconds=60, timer=timer)
        await cache.put(key(), "New building")

        timer.advance(61)

        assert await cache.get(key()) is None
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_max_entries_bounds_size(self):
        cache = TransformCache(max_entries=2)
        for text in ("a", "b", "c"):
            await cache.put(key(text), text.upper())

        assert len(cache) == 2

    def test_ttl_must_be_positive(self):
        with pytest.raises(ValueError):
            TransformCache(ttl_seconds=0)

    @pytest.mark.asyncio
    async def test_clear(self, cache):
        await cache.put(key("a"), "A")
        await cache.put(key("b"), "B")

        await cache.clear()

        assert len(cache) == 0
        assert await cache.get(key("a")) is None


# =============================================================================
# Shared Backend
# =============================================================================


class TestSharedCacheStorage:
    @pytest.mark.asyncio
    async def test_instances_share_results(self):
        shared = InMemoryCacheStorage()
        first = TransformCache(storage=shared)
        second = TransformCache(storage=shared)

        await first.put(key(), "New building")

        assert await second.get(key()) == "New building"
        # Pulled into the second instance's memory
        assert len(second) == 1

    @pytest.mark.asyncio
    async def test_backend_entries_carry_ttl(self):
        timer = FakeTimer()
        shared = InMemoryCacheStorage(timer=timer)
        cache = TransformCache(ttl_seconds=60, storage=shared)

        await cache.put(key(), "New building")
        timer.advance(61)

        assert await shared.get(key().storage_key()) is None

    @pytest.mark.asyncio
    async def test_shared_hit_keeps_original_age(self):
        timer = FakeTimer()
        shared = InMemoryCacheStorage()
        writer = TransformCache(ttl_seconds=100, storage=shared, timer=timer, clock=timer)
        reader = TransformCache(ttl_seconds=100, storage=shared, timer=timer, clock=timer)

        await writer.put(key(), "New building")
        timer.advance(99)
        assert await reader.get(key()) == "New building"

        # Past the writer's deadline, not the reader's first read + ttl
        timer.advance(51)
        assert await reader.get(key()) is None
        assert reader.misses == 1

    @pytest.mark.asyncio
    async def test_expired_shared_record_is_a_miss(self):
        clock = FakeTimer()
        shared = InMemoryCacheStorage()
        await shared.set(
            key().storage_key(),
            {"value": "New building", "created_at": clock() - 120},
        )
        cache = TransformCache(ttl_seconds=100, storage=shared, clock=clock)

        assert await cache.get(key()) is None
        assert len(cache) == 0
        assert cache.misses == 1

    @pytest.mark.asyncio
    async def test_clear_drops_shared_entries(self):
        shared = InMemoryCacheStorage()
        await shared.set("unrelated", "keep me")
        cache = TransformCache(storage=shared)
        await cache.put(key(), "New building")

        await cache.clear()

        assert await TransformCache(storage=shared).get(key()) is None
        assert await shared.get("unrelated") == "keep me"

    def test_storage_key_is_stable(self):
        assert key().storage_key() == key().storage_key()
        assert key().storage_key() != key(target="fr").storage_key()
        assert key().storage_key().startswith("transform:translate:")
