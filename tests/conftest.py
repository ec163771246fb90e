"""Pytest configuration and fixtures."""

import asyncio
import json
import struct
import zlib
from io import BytesIO

import pytest
from PIL import Image

from review_feed.core.errors import NotFoundError, TransportError
from review_feed.fetchers.base import ReviewFetcher
from review_feed.layout.text_measure import TextMeasurer
from review_feed.models.review import ReviewRecord
from review_feed.models.typography import TextStyle


def png_bytes(color: str = "red", size: tuple[int, int] = (4, 4)) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def oversized_png_bytes(width: int = 20000, height: int = 20000) -> bytes:
    """A 1x1 PNG whose header claims *width* x *height* pixels."""
    data = bytearray(png_bytes(size=(1, 1)))
    struct.pack_into(">II", data, 16, width, height)
    struct.pack_into(">I", data, 29, zlib.crc32(bytes(data[12:29])))
    return bytes(data)


def record_data(index: int = 1, **overrides) -> dict:
    data = {
        "avatar_url": f"https://cdn.test/avatars/{index}.png",
        "first_name": f"Имя{index}",
        "last_name": f"Фамилия{index}",
        "rating": (index % 5) + 1,
        "photo_urls": None,
        "text": f"Отзыв номер {index}",
        "created": f"{index} мая",
    }
    data.update(overrides)
    return data


def page_payload(count: int, items: list[dict]) -> bytes:
    return json.dumps({"count": count, "items": items}, ensure_ascii=False).encode("utf-8")


class FakeFetcher(ReviewFetcher):
    """
    In-memory review source.

    ``pages`` maps offsets to payload bytes, an exception to raise, or a
    list of those consumed one per call; ``assets`` maps URLs to bytes or
    an exception. A page can be held back with
    ``hold(offset)`` until ``release(offset)`` is called.
    """

    name = "fake"

    def __init__(self, pages: dict | None = None, assets: dict | None = None):
        self.pages = pages or {}
        self.assets = assets or {}
        self.page_calls: list[tuple[int, int]] = []
        self.asset_calls: list[str] = []
        self._gates: dict[int, asyncio.Event] = {}

    def hold(self, offset: int) -> None:
        self._gates[offset] = asyncio.Event()

    def release(self, offset: int) -> None:
        self._gates[offset].set()

    async def fetch_page(self, offset: int, limit: int) -> bytes:
        self.page_calls.append((offset, limit))
        result = self.pages.get(offset)
        if isinstance(result, list):
            result = result.pop(0)
        gate = self._gates.get(offset)
        if gate is not None:
            await gate.wait()
        if result is None:
            raise NotFoundError(f"no page at offset {offset}")
        if isinstance(result, Exception):
            raise result
        return result

    async def fetch_asset(self, url: str) -> bytes:
        self.asset_calls.append(url)
        await asyncio.sleep(0)
        result = self.assets.get(url)
        if result is None:
            raise TransportError(f"{url} unreachable")
        if isinstance(result, Exception):
            raise result
        return result


class FixedWidthMeasurer(TextMeasurer):
    """Every character is ``char_width`` wide and every line ``line_px`` tall."""

    def __init__(self, char_width: float = 10.0, line_px: float = 20.0):
        super().__init__(font_path="")
        self.char_width = char_width
        self.line_px = line_px

    def line_height(self, style: TextStyle) -> float:
        return self.line_px

    def text_width(self, text: str, style: TextStyle) -> float:
        return len(text) * self.char_width


@pytest.fixture
def sample_record():
    """Create a sample review record."""
    return ReviewRecord.model_validate(record_data(1, photo_urls=["https://cdn.test/p/1.png"]))


@pytest.fixture
def make_fetcher():
    """Factory for in-memory fetchers."""
    return FakeFetcher


@pytest.fixture
def make_record():
    """Factory for wire-format review dicts."""
    return record_data


@pytest.fixture
def make_payload():
    """Factory for encoded page payloads."""
    return page_payload


@pytest.fixture
def make_png():
    """Factory for small PNG images as bytes."""
    return png_bytes


@pytest.fixture
def measurer():
    return FixedWidthMeasurer()


@pytest.fixture
def red_png():
    return png_bytes("red")


@pytest.fixture
def blue_png():
    return png_bytes("blue")


@pytest.fixture
def oversized_png():
    """A tiny PNG that decodes as a decompression bomb."""
    return oversized_png_bytes()
