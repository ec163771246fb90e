"""Retry handler with exponential backoff for transient transport failures."""

import asyncio
import random
from typing import Any, Awaitable, Callable, TypeVar

import httpx
from loguru import logger

from config.settings import settings

T = TypeVar("T")


class RetryHandler:
    """
    Retries a request coroutine with exponential backoff.

    Only transient failures are retried: timeouts, connection problems,
    rate limiting and server errors. Anything else is raised immediately.
    """

    # Status codes that should trigger a retry
    RETRYABLE_STATUS_CODES = {
        408,  # Request Timeout
        429,  # Too Many Requests
        500,  # Internal Server Error
        502,  # Bad Gateway
        503,  # Service Unavailable
        504,  # Gateway Timeout
    }

    # Exceptions that should trigger a retry
    RETRYABLE_EXCEPTIONS = (
        httpx.TimeoutException,
        httpx.NetworkError,
        ConnectionError,
        asyncio.TimeoutError,
    )

    def __init__(
        self,
        max_retries: int | None = None,
        base_delay: float = 0.5,
        max_delay: float = 10.0,
        exponential_base: float = 2.0,
    ):
        self.max_retries = settings.max_retries if max_retries is None else max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base

    async def execute(
        self,
        func: Callable[..., Awaitable[T]],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """
        Execute a coroutine function with retry logic.

        Args:
            func: The async function to execute
            *args: Positional arguments for the function
            **kwargs: Keyword arguments for the function

        Returns:
            The result of the function

        Raises:
            The last exception if all retries are exhausted
        """
        for attempt in range(self.max_retries + 1):
            try:
                return await func(*args, **kwargs)

            except self.RETRYABLE_EXCEPTIONS as e:
                await self._handle_retry(attempt, e)

            except httpx.HTTPStatusError as e:
                if e.response.status_code not in self.RETRYABLE_STATUS_CODES:
                    raise
                await self._handle_retry(attempt, e)

        raise RuntimeError("Retry loop exited without a result")

    async def _handle_retry(self, attempt: int, exception: Exception) -> None:
        """Sleep before the next attempt, or re-raise on the last one."""
        if attempt >= self.max_retries:
            if self.max_retries:
                logger.error(f"All {self.max_retries} retries exhausted: {exception}")
            raise exception

        delay = self._calculate_delay(attempt)
        logger.warning(
            f"Attempt {attempt + 1}/{self.max_retries + 1} failed: {exception}. "
            f"Retrying in {delay:.2f}s..."
        )
        await asyncio.sleep(delay)

    def _calculate_delay(self, attempt: int) -> float:
        """Calculate the delay for a retry attempt using exponential backoff."""
        delay = self.base_delay * (self.exponential_base ** attempt)
        # Jitter of +/-25%
        jitter = delay * 0.25 * (2 * random.random() - 1)
        delay = min(delay + jitter, self.max_delay)
        return max(0.05, delay)
