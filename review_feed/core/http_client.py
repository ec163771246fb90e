"""Async HTTP client with retry logic and bounded concurrency."""

import asyncio
from typing import Any

import httpx
from loguru import logger

from config.settings import settings
from review_feed.core.errors import NotFoundError, TransportError
from review_feed.core.retry_handler import RetryHandler


class HttpClient:
    """Async HTTP client used for review pages and image assets."""

    def __init__(
        self,
        timeout: int | None = None,
        max_concurrent: int | None = None,
        retry_handler: RetryHandler | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        headers: dict[str, str] | None = None,
    ):
        self.timeout = timeout or settings.request_timeout
        self.retry_handler = retry_handler or RetryHandler()
        self.headers = headers or {"Accept": "application/json, image/*"}
        self._transport = transport
        self._semaphore = asyncio.Semaphore(max_concurrent or settings.max_concurrent_requests)
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "HttpClient":
        """Async context manager entry."""
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def start(self) -> None:
        """Initialize the HTTP client."""
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            transport=self._transport,
            headers=self.headers,
            follow_redirects=True,
            http2=self._transport is None,
        )
        logger.debug("HTTP client initialized")

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.debug("HTTP client closed")

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """
        Perform a GET request with retry logic.

        Args:
            url: The URL to fetch
            params: Optional query parameters

        Returns:
            httpx.Response object
        """
        if not self._client:
            await self.start()

        async with self._semaphore:
            return await self.retry_handler.execute(self._make_request, url=url, params=params)

    async def _make_request(
        self,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Make the actual HTTP request."""
        logger.debug(f"Fetching: {url}")
        response = await self._client.get(url, params=params)
        response.raise_for_status()
        return response

    async def get_bytes(
        self,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> bytes:
        """
        Fetch URL and return the response body.

        Raises:
            NotFoundError: The server answered 404/410
            TransportError: Any other HTTP or network failure, or a malformed URL
        """
        try:
            response = await self.get(url, params=params)
        except httpx.HTTPStatusError as e:
            if e.response.status_code in (404, 410):
                raise NotFoundError(f"{url} not found") from e
            raise TransportError(f"{url} returned {e.response.status_code}") from e
        except (httpx.HTTPError, httpx.InvalidURL, ConnectionError, asyncio.TimeoutError) as e:
            raise TransportError(f"{url} unreachable: {e}") from e
        return response.content
