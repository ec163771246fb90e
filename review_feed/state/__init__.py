"""Review list state machine."""

from review_feed.state.builder import ItemBuilder, review_word
from review_feed.state.list_state import ListState
from review_feed.state.machine import ReviewListState

__all__ = [
    "ItemBuilder",
    "ListState",
    "ReviewListState",
    "review_word",
]
