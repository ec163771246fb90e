"""Review source backed by an HTTP endpoint."""

from loguru import logger

from review_feed.core.http_client import HttpClient
from review_feed.fetchers.base import ReviewFetcher


class HttpReviewFetcher(ReviewFetcher):
    """
    Fetches review pages from ``GET {reviews_url}?offset=&limit=``.

    Assets are fetched from their own absolute URLs through the same client.
    """

    name = "http"

    def __init__(self, reviews_url: str, http_client: HttpClient | None = None):
        self.reviews_url = reviews_url
        self._http_client = http_client or HttpClient()
        self._owns_client = http_client is None

    @property
    def http_client(self) -> HttpClient:
        return self._http_client

    async def fetch_page(self, offset: int, limit: int) -> bytes:
        logger.debug(f"[{self.name}] Requesting page offset={offset} limit={limit}")
        return await self._http_client.get_bytes(
            self.reviews_url,
            params={"offset": offset, "limit": limit},
        )

    async def fetch_asset(self, url: str) -> bytes:
        return await self._http_client.get_bytes(url)

    async def close(self) -> None:
        if self._owns_client:
            await self._http_client.close()
