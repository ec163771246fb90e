"""Deterministic row layout."""

from review_feed.layout.engine import CountRowLayout, LayoutEngine, ReviewRowLayout
from review_feed.layout.geometry import Rect, Size
from review_feed.layout.text_measure import TextMeasurer

__all__ = [
    "CountRowLayout",
    "LayoutEngine",
    "Rect",
    "ReviewRowLayout",
    "Size",
    "TextMeasurer",
]
