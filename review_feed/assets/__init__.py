"""Image asset caching and loading."""

from review_feed.assets.cache import AssetCache
from review_feed.assets.loader import AssetLoader
from review_feed.assets.placeholders import decode_image, default_avatar, photo_placeholder

__all__ = [
    "AssetCache",
    "AssetLoader",
    "decode_image",
    "default_avatar",
    "photo_placeholder",
]
