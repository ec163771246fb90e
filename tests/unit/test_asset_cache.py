"""Tests for the bounded image cache."""

import threading

import pytest
from PIL import Image

from review_feed.assets.cache import AssetCache


def _image(color="red"):
    return Image.new("RGB", (2, 2), color)


class TestAssetCache:
    def test_put_then_get(self):
        cache = AssetCache(capacity=3)
        image = _image()
        cache.put("a", image)
        assert cache.get("a") is image

    def test_get_missing(self):
        assert AssetCache(capacity=3).get("missing") is None

    def test_replace_existing_key(self):
        cache = AssetCache(capacity=3)
        first, second = _image("red"), _image("blue")
        cache.put("a", first)
        cache.put("a", second)
        assert cache.get("a") is second
        assert len(cache) == 1

    def test_capacity_never_exceeded(self):
        cache = AssetCache(capacity=5)
        for i in range(50):
            cache.put(f"key-{i}", _image())
            assert len(cache) <= 5
        assert cache.get_stats()["evictions"] == 45

    def test_evicts_least_recently_used(self):
        cache = AssetCache(capacity=2)
        cache.put("a", _image())
        cache.put("b", _image())
        cache.get("a")
        cache.put("c", _image())
        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache

    def test_invalidate_and_clear(self):
        cache = AssetCache(capacity=3)
        cache.put("a", _image())
        cache.put("b", _image())
        cache.invalidate("a")
        assert "a" not in cache
        cache.clear()
        assert len(cache) == 0

    def test_hit_miss_stats(self):
        cache = AssetCache(capacity=3)
        cache.put("a", _image())
        cache.get("a")
        cache.get("b")
        stats = cache.get_stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["size"] == 1

    def test_rejects_non_positive_capacity(self):
        with pytest.raises(ValueError):
            AssetCache(capacity=0)

    def test_concurrent_puts_respect_bound(self):
        cache = AssetCache(capacity=10)
        image = _image()

        def writer(prefix):
            for i in range(200):
                cache.put(f"{prefix}-{i}", image)
                cache.get(f"{prefix}-{i // 2}")

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(cache) == 10
        stats = cache.get_stats()
        assert stats["evictions"] == 8 * 200 - 10
