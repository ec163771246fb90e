"""Data models for the review feed."""

from review_feed.models.items import ListItem, ReviewCountItem, ReviewDisplayItem
from review_feed.models.review import ReviewRecord, ReviewsPage
from review_feed.models.typography import StyledText, TextStyle

__all__ = [
    "ListItem",
    "ReviewCountItem",
    "ReviewDisplayItem",
    "ReviewRecord",
    "ReviewsPage",
    "StyledText",
    "TextStyle",
]
