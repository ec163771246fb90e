"""Review source backed by a bundled JSON response file."""

import asyncio
import json
import random
from pathlib import Path
from urllib.parse import unquote, urlparse

import aiofiles
from loguru import logger

from config.settings import settings
from review_feed.core.errors import NotFoundError, TransportError
from review_feed.core.http_client import HttpClient
from review_feed.fetchers.base import ReviewFetcher


class FileReviewFetcher(ReviewFetcher):
    """
    Serves review pages from a local JSON file with a simulated network delay.

    The file holds a full ``{"count": ..., "items": [...]}`` response. When
    ``paginate`` is enabled the items are sliced by offset/limit so that
    consecutive pages differ; malformed files are passed through untouched
    and left for the decoder to reject.

    Assets with ``file://`` URLs or plain paths are read from disk (relative
    paths resolve against ``asset_dir``). ``http(s)`` assets go through an
    ``HttpClient``.
    """

    name = "file"

    def __init__(
        self,
        response_path: str | Path | None = None,
        asset_dir: str | Path | None = None,
        latency: tuple[float, float] | None = None,
        paginate: bool = True,
        http_client: HttpClient | None = None,
    ):
        self.response_path = Path(response_path) if response_path else settings.resolve_path(settings.response_file)
        self.asset_dir = Path(asset_dir) if asset_dir else self.response_path.parent
        self.latency = latency or (settings.simulated_latency_min, settings.simulated_latency_max)
        self.paginate = paginate
        self._http_client = http_client
        self._owns_client = http_client is None

    async def fetch_page(self, offset: int, limit: int) -> bytes:
        await self._simulate_latency()
        data = await self._read(self.response_path)
        logger.debug(f"[{self.name}] Read {len(data)} bytes from {self.response_path}")
        if not self.paginate:
            return data
        return self._slice(data, offset, limit)

    async def fetch_asset(self, url: str) -> bytes:
        parsed = urlparse(url)
        if parsed.scheme in ("http", "https"):
            if self._http_client is None:
                self._http_client = HttpClient()
            return await self._http_client.get_bytes(url)

        if parsed.scheme == "file":
            path = Path(unquote(parsed.path))
        elif parsed.scheme == "":
            path = Path(url)
        else:
            raise TransportError(f"Unsupported asset scheme: {url}")

        if not path.is_absolute():
            path = self.asset_dir / path
        return await self._read(path)

    async def close(self) -> None:
        if self._owns_client and self._http_client:
            await self._http_client.close()
            self._http_client = None

    async def _simulate_latency(self) -> None:
        low, high = self.latency
        if high <= 0:
            return
        await asyncio.sleep(random.uniform(low, high))

    @staticmethod
    async def _read(path: Path) -> bytes:
        try:
            async with aiofiles.open(path, "rb") as f:
                return await f.read()
        except FileNotFoundError as e:
            raise NotFoundError(f"{path} not found") from e
        except OSError as e:
            raise TransportError(f"Could not read {path}: {e}") from e

    @staticmethod
    def _slice(data: bytes, offset: int, limit: int) -> bytes:
        """Cut one page out of a full response, keeping the reported count."""
        try:
            payload = json.loads(data)
        except ValueError:
            return data

        if not isinstance(payload, dict) or not isinstance(payload.get("items"), list):
            return data

        items = payload["items"]
        page = {**payload, "items": items[offset:offset + limit]}
        return json.dumps(page, ensure_ascii=False).encode("utf-8")
