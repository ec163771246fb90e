"""Core transport, error and notification components."""

from review_feed.core.errors import (
    AssetError,
    DecodeError,
    NotFoundError,
    ReviewFeedError,
    TransportError,
)
from review_feed.core.http_client import HttpClient
from review_feed.core.retry_handler import RetryHandler
from review_feed.core.signal import Signal

__all__ = [
    "AssetError",
    "DecodeError",
    "HttpClient",
    "NotFoundError",
    "RetryHandler",
    "ReviewFeedError",
    "Signal",
    "TransportError",
]
