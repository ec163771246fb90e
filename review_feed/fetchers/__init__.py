"""Review sources."""

from review_feed.fetchers.base import ReviewFetcher
from review_feed.fetchers.file import FileReviewFetcher
from review_feed.fetchers.http import HttpReviewFetcher

__all__ = [
    "FileReviewFetcher",
    "HttpReviewFetcher",
    "ReviewFetcher",
]
