"""Star-row glyph for review ratings."""

import math
from functools import lru_cache

from PIL import Image, ImageDraw

RATING_IMAGE_SIZE = (84, 16)


class RatingRenderer:
    """
    Draws a row of five stars with ``rating`` of them filled.

    Images are cached per rating; ratings outside 0..5 are clamped for
    drawing only.
    """

    def __init__(
        self,
        star_count: int = 5,
        spacing: float = 1.0,
        filled_color: str = "#FFA500",
        empty_color: str = "#D1D1D6",
    ):
        self.star_count = star_count
        self.spacing = spacing
        self.filled_color = filled_color
        self.empty_color = empty_color
        self._render = lru_cache(maxsize=None)(self._draw)

    def rating_image(self, rating: int) -> Image.Image:
        """Return the cached star row for *rating*."""
        return self._render(max(0, min(self.star_count, rating)))

    def _draw(self, rating: int) -> Image.Image:
        width, height = RATING_IMAGE_SIZE
        image = Image.new("RGBA", RATING_IMAGE_SIZE, (0, 0, 0, 0))
        draw = ImageDraw.Draw(image)
        star_size = min(height, (width - self.spacing * (self.star_count - 1)) / self.star_count)
        for index in range(self.star_count):
            left = index * (star_size + self.spacing)
            color = self.filled_color if index < rating else self.empty_color
            draw.polygon(_star_points(left, 0.0, star_size), fill=color)
        return image


def _star_points(left: float, top: float, size: float) -> list[tuple[float, float]]:
    """Vertices of a five-pointed star inscribed in a square."""
    cx, cy = left + size / 2, top + size / 2
    outer, inner = size / 2, size / 5
    points = []
    for i in range(10):
        radius = outer if i % 2 == 0 else inner
        angle = math.pi / 5 * i - math.pi / 2
        points.append((cx + radius * math.cos(angle), cy + radius * math.sin(angle)))
    return points
