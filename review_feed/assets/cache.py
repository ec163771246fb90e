"""Bounded in-memory cache of decoded images."""

import threading
from collections import OrderedDict

from PIL import Image

from config.settings import settings


class AssetCache:
    """
    LRU cache mapping asset URLs to decoded images.

    The cache never holds more than ``capacity`` entries; inserting past the
    bound evicts the least recently used one. Every public method takes the
    lock, so decode workers running in threads may share one instance with
    the event loop.
    """

    def __init__(self, capacity: int | None = None):
        self._capacity = settings.asset_cache_capacity if capacity is None else capacity
        if self._capacity < 1:
            raise ValueError("capacity must be positive")
        self._entries: OrderedDict[str, Image.Image] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, key: str) -> Image.Image | None:
        with self._lock:
            image = self._entries.get(key)
            if image is None:
                self._misses += 1
                return None
            self._entries.move_to_end(key)
            self._hits += 1
            return image

    def put(self, key: str, image: Image.Image) -> None:
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
            elif len(self._entries) >= self._capacity:
                self._entries.popitem(last=False)
                self._evictions += 1
            self._entries[key] = image

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @property
    def capacity(self) -> int:
        return self._capacity

    def get_stats(self) -> dict[str, int]:
        """Get hit/miss/eviction counters and the current size."""
        with self._lock:
            return {
                "size": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }
