"""Tests for cache-aware asset loading."""

import asyncio

import pytest
from PIL import Image

from review_feed.assets.cache import AssetCache
from review_feed.assets.loader import AssetLoader
from review_feed.assets.placeholders import default_avatar, photo_placeholder
from review_feed.core.errors import AssetError


@pytest.fixture
def cache():
    return AssetCache(capacity=10)


class TestLoadImage:
    def test_cache_hit_skips_fetch(self, make_fetcher, cache):
        fetcher = make_fetcher()
        cached = Image.new("RGB", (1, 1))
        cache.put("u", cached)
        loader = AssetLoader(fetcher, cache)

        assert asyncio.run(loader.load_image("u")) is cached
        assert fetcher.asset_calls == []

    def test_miss_fetches_and_caches(self, make_fetcher, cache, red_png):
        fetcher = make_fetcher(assets={"u": red_png})
        loader = AssetLoader(fetcher, cache)

        image = asyncio.run(loader.load_image("u"))

        assert image.size == (4, 4)
        assert cache.get("u") is image
        assert fetcher.asset_calls == ["u"]

    def test_transport_failure_raises_asset_error(self, make_fetcher, cache):
        loader = AssetLoader(make_fetcher(), cache)
        with pytest.raises(AssetError) as exc:
            asyncio.run(loader.load_image("missing"))
        assert exc.value.url == "missing"
        assert "missing" not in cache

    def test_undecodable_bytes_raise_asset_error(self, make_fetcher, cache):
        loader = AssetLoader(make_fetcher(assets={"u": b"not an image"}), cache)
        with pytest.raises(AssetError):
            asyncio.run(loader.load_image("u"))

    def test_concurrent_requests_share_one_fetch(self, make_fetcher, cache, red_png):
        fetcher = make_fetcher(assets={"u": red_png})
        loader = AssetLoader(fetcher, cache)

        async def scenario():
            return await asyncio.gather(loader.load_image("u"), loader.load_image("u"), loader.load_image("u"))

        first, second, third = asyncio.run(scenario())
        assert first is second is third
        assert fetcher.asset_calls == ["u"]
        assert loader.get_stats()["shared"] == 2

    def test_shared_failure_reaches_every_waiter(self, make_fetcher, cache):
        loader = AssetLoader(make_fetcher(), cache)

        async def scenario():
            return await asyncio.gather(loader.load_image("u"), loader.load_image("u"), return_exceptions=True)

        results = asyncio.run(scenario())
        assert all(isinstance(result, AssetError) for result in results)


class TestLoadPhotos:
    def test_mixed_hit_miss_failure(self, make_fetcher, cache, red_png):
        hit = Image.new("RGB", (1, 1))
        cache.put("hit", hit)
        fetcher = make_fetcher(assets={"miss": red_png})
        loader = AssetLoader(fetcher, cache)

        photos = asyncio.run(loader.load_photos(["hit", "miss", "broken"]))

        assert len(photos) == 3
        assert photos[0] is hit
        assert photos[1].size == (4, 4)
        assert photos[2] is photo_placeholder()
        assert sorted(fetcher.asset_calls) == ["broken", "miss"]

    def test_keeps_order(self, make_fetcher, cache, make_png):
        fetcher = make_fetcher(assets={"a": make_png("red", (1, 1)), "b": make_png("blue", (2, 2))})
        photos = asyncio.run(AssetLoader(fetcher, cache).load_photos(("a", "b")))
        assert [photo.size for photo in photos] == [(1, 1), (2, 2)]

    def test_oversized_photo_becomes_placeholder(self, make_fetcher, cache, red_png, oversized_png):
        fetcher = make_fetcher(assets={"ok": red_png, "big": oversized_png})
        loader = AssetLoader(fetcher, cache)

        photos = asyncio.run(loader.load_photos(["ok", "big"]))

        assert photos[0].size == (4, 4)
        assert photos[1] is photo_placeholder()
        assert "big" not in cache


class TestLoadAvatar:
    def test_loaded(self, make_fetcher, cache, red_png):
        avatar = asyncio.run(AssetLoader(make_fetcher(assets={"a": red_png}), cache).load_avatar("a"))
        assert avatar.size == (4, 4)

    def test_failure_falls_back_to_default(self, make_fetcher, cache):
        avatar = asyncio.run(AssetLoader(make_fetcher(), cache).load_avatar("a"))
        assert avatar is default_avatar()

    def test_oversized_avatar_falls_back_to_default(self, make_fetcher, cache, oversized_png):
        avatar = asyncio.run(AssetLoader(make_fetcher(assets={"a": oversized_png}), cache).load_avatar("a"))
        assert avatar is default_avatar()
