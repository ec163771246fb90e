"""Glyph rendering helpers."""

from review_feed.rendering.rating import RATING_IMAGE_SIZE, RatingRenderer

__all__ = ["RATING_IMAGE_SIZE", "RatingRenderer"]
