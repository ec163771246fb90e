"""Fallback images and image decoding."""

from functools import lru_cache
from io import BytesIO

from PIL import Image, ImageDraw, UnidentifiedImageError

from review_feed.core.errors import AssetError

PHOTO_SIZE = (55, 66)
AVATAR_SIZE = (36, 36)

_PLACEHOLDER_BACKGROUND = (229, 229, 234, 255)
_PLACEHOLDER_FOREGROUND = (174, 174, 178, 255)


@lru_cache(maxsize=None)
def photo_placeholder() -> Image.Image:
    """Image shown in place of a photo that failed to load."""
    image = Image.new("RGBA", PHOTO_SIZE, _PLACEHOLDER_BACKGROUND)
    draw = ImageDraw.Draw(image)
    w, h = PHOTO_SIZE
    # A simple "mountain" pictogram
    draw.polygon([(8, h - 14), (24, h - 38), (36, h - 22), (42, h - 30), (w - 8, h - 14)], fill=_PLACEHOLDER_FOREGROUND)
    draw.ellipse((w - 20, 12, w - 10, 22), fill=_PLACEHOLDER_FOREGROUND)
    return image


@lru_cache(maxsize=None)
def default_avatar() -> Image.Image:
    """Avatar shown until the user's own avatar arrives, or if it never does."""
    image = Image.new("RGBA", AVATAR_SIZE, (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)
    w, h = AVATAR_SIZE
    draw.ellipse((0, 0, w - 1, h - 1), fill=_PLACEHOLDER_BACKGROUND)
    draw.ellipse((w * 0.33, h * 0.18, w * 0.67, h * 0.52), fill=_PLACEHOLDER_FOREGROUND)
    draw.pieslice((w * 0.18, h * 0.58, w * 0.82, h * 1.2), 180, 360, fill=_PLACEHOLDER_FOREGROUND)
    return image


def decode_image(url: str, data: bytes) -> Image.Image:
    """
    Decode raw bytes into a fully loaded image.

    Raises:
        AssetError: The bytes are not a readable image or exceed the pixel limit
    """
    try:
        image = Image.open(BytesIO(data))
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise AssetError(url, f"cannot decode image: {e}") from e
    return image
