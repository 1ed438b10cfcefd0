"""
Tests for campfire.core.cache module.

Covers:
- InMemoryCache: get/set/delete/exists/clear, LRU eviction, TTL expiry
- RecordCache: entity-scoped keys, eviction, clear_type
- Process default built from settings
"""

import time

from campfire.core.cache import InMemoryCache, RecordCache, get_record_cache, set_record_cache


class TestInMemoryCache:
    """Test InMemoryCache backend."""

    def test_basic_get_set(self):
        cache = InMemoryCache(max_size=100, default_ttl_seconds=None)
        cache.set("key1", {"data": [1, 2, 3]})
        assert cache.get("key1") == {"data": [1, 2, 3]}

    def test_get_missing_key(self):
        assert InMemoryCache().get("missing") is None

    def test_delete(self):
        cache = InMemoryCache()
        cache.set("key1", "value1")
        cache.delete("key1")
        assert not cache.exists("key1")
        cache.delete("key1")

    def test_clear(self):
        cache = InMemoryCache()
        cache.set("k1", 1)
        cache.set("k2", 2)
        cache.clear()
        assert cache.size() == 0

    def test_ttl_expiry(self):
        cache = InMemoryCache(default_ttl_seconds=1)
        cache.set("temp", "value")
        assert cache.exists("temp")
        time.sleep(1.1)
        assert cache.get("temp") is None

    def test_lru_eviction(self):
        cache = InMemoryCache(max_size=2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")
        cache.set("c", 3)
        assert cache.exists("a")
        assert not cache.exists("b")
        assert cache.exists("c")

    def test_stores_the_object_itself(self):
        cache = InMemoryCache()
        value = {"mutable": True}
        cache.set("k", value)
        assert cache.get("k") is value


class TestRecordCache:
    def test_make_key(self):
        assert RecordCache.make_key("Screen", 1) == "Screen:id:1"

    def test_int_and_str_keys_share_an_entry(self):
        cache = RecordCache()
        marker = object()
        cache.put("Screen", 1, marker)
        assert cache.get("Screen", "1") is marker

    def test_types_are_separate(self):
        cache = RecordCache()
        cache.put("Screen", 1, "screen")
        cache.put("Room", 1, "room")
        assert cache.get("Screen", 1) == "screen"
        assert cache.get("Room", 1) == "room"

    def test_put_ignores_missing_key(self):
        cache = RecordCache()
        cache.put("Screen", None, "unsaved")
        assert cache.backend.size() == 0

    def test_evict_only_touches_one_key(self):
        cache = RecordCache()
        cache.put("Screen", 1, "one")
        cache.put("Screen", 2, "two")
        cache.evict("Screen", 1)
        assert not cache.contains("Screen", 1)
        assert cache.get("Screen", 2) == "two"

    def test_clear_type(self):
        cache = RecordCache()
        cache.put("Screen", 1, "s1")
        cache.put("Screen", 2, "s2")
        cache.put("Room", 1, "r1")
        cache.clear_type("Screen")
        assert cache.get("Screen", 1) is None
        assert cache.get("Screen", 2) is None
        assert cache.get("Room", 1) == "r1"


class TestProcessDefault:
    def test_singleton(self):
        assert get_record_cache() is get_record_cache()

    def test_built_from_settings(self, monkeypatch):
        from campfire.core.settings import get_settings

        monkeypatch.setenv("CAMPFIRE_CACHE_MAX_SIZE", "2")
        get_settings.cache_clear()
        set_record_cache(None)

        cache = get_record_cache()
        for key in range(3):
            cache.put("Screen", key + 1, key)
        assert cache.backend.size() == 2
