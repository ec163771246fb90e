"""Cache-aware loading of review photos and avatars."""

import asyncio

from loguru import logger
from PIL import Image

from review_feed.assets.cache import AssetCache
from review_feed.assets.placeholders import decode_image, default_avatar, photo_placeholder
from review_feed.core.errors import AssetError, TransportError
from review_feed.fetchers.base import ReviewFetcher


class AssetLoader:
    """
    Loads images through a shared ``AssetCache``.

    A cache hit resolves without suspending. A miss fetches the bytes,
    decodes them on a worker thread and stores the result. Concurrent
    requests for the same URL share a single fetch.
    """

    def __init__(self, fetcher: ReviewFetcher, cache: AssetCache):
        self.fetcher = fetcher
        self.cache = cache
        self._in_flight: dict[str, asyncio.Future] = {}
        self._stats = {"fetched": 0, "failed": 0, "shared": 0}

    async def load_image(self, url: str) -> Image.Image:
        """
        Return the decoded image for *url*.

        Raises:
            AssetError: The asset could not be fetched or decoded
        """
        cached = self.cache.get(url)
        if cached is not None:
            return cached

        pending = self._in_flight.get(url)
        if pending is not None:
            self._stats["shared"] += 1
            return await asyncio.shield(pending)

        future = asyncio.get_running_loop().create_future()
        self._in_flight[url] = future
        try:
            image = await self._fetch_and_decode(url)
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as e:
            self._stats["failed"] += 1
            future.set_exception(e)
            # Mark retrieved so an unshared failure is not reported as unhandled
            future.exception()
            raise
        else:
            self._stats["fetched"] += 1
            self.cache.put(url, image)
            future.set_result(image)
            return image
        finally:
            self._in_flight.pop(url, None)

    async def load_photos(self, urls: list[str] | tuple[str, ...]) -> tuple[Image.Image, ...]:
        """
        Load every photo of one review, in order.

        Resolves only once all photos have resolved; failed photos are
        replaced by a placeholder.
        """
        photos = await asyncio.gather(*(self._photo_or_placeholder(url) for url in urls))
        return tuple(photos)

    async def load_avatar(self, url: str) -> Image.Image:
        """Load an avatar, falling back to the default avatar on failure."""
        try:
            return await self.load_image(url)
        except AssetError as e:
            logger.warning(f"Avatar unavailable, using default: {e}")
            return default_avatar()

    def get_stats(self) -> dict[str, int]:
        return dict(self._stats)

    async def _photo_or_placeholder(self, url: str) -> Image.Image:
        try:
            return await self.load_image(url)
        except AssetError as e:
            logger.warning(f"Photo unavailable, using placeholder: {e}")
            return photo_placeholder()

    async def _fetch_and_decode(self, url: str) -> Image.Image:
        try:
            data = await self.fetcher.fetch_asset(url)
        except TransportError as e:
            raise AssetError(url, str(e)) from e
        return await asyncio.to_thread(decode_image, url, data)
