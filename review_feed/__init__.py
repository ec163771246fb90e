"""Paginated review list with async asset loading and row layout."""

__version__ = "0.1.0"
