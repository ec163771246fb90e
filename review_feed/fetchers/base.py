"""Abstract review source."""

from abc import ABC, abstractmethod


class ReviewFetcher(ABC):
    """
    Capability to fetch raw review pages and raw image assets.

    Implementations raise ``TransportError`` (or ``NotFoundError``) on
    failure and never decode anything themselves.
    """

    name: str = "base"

    async def __aenter__(self) -> "ReviewFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @abstractmethod
    async def fetch_page(self, offset: int, limit: int) -> bytes:
        """
        Fetch one page of reviews.

        Args:
            offset: Index of the first review on the page
            limit: Page size requested

        Returns:
            Raw JSON payload
        """

    @abstractmethod
    async def fetch_asset(self, url: str) -> bytes:
        """
        Fetch a binary asset (photo or avatar).

        Args:
            url: Asset location

        Returns:
            Raw image bytes
        """

    async def close(self) -> None:
        """Release any held resources."""
