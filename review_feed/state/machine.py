"""Pagination and asset-loading state machine for the review list."""

import asyncio
from typing import Any, Coroutine
from uuid import UUID

from loguru import logger

from config.settings import settings
from review_feed.assets.cache import AssetCache
from review_feed.assets.loader import AssetLoader
from review_feed.assets.placeholders import default_avatar
from review_feed.core.errors import DecodeError, TransportError
from review_feed.core.signal import Signal
from review_feed.fetchers.base import ReviewFetcher
from review_feed.layout.engine import LayoutEngine
from review_feed.models.items import ListItem, ReviewCountItem, ReviewDisplayItem
from review_feed.models.review import ReviewsPage
from review_feed.state.builder import ItemBuilder
from review_feed.state.list_state import ListState


class ReviewListState:
    """
    Owns the review list and drives page and asset loading.

    All transitions run on the event loop that calls into this object;
    page payloads and images are decoded on worker threads. Each transition
    replaces the ``ListState`` snapshot and emits it through
    ``state_changed``.

    Only one page load is in flight at a time: ``request_next_page`` clears
    ``should_load`` before fetching and the flag is set again on success
    (if more pages remain), on error or on refresh. A refresh starts a new
    generation; page responses from older generations are dropped, and
    asset patches for items that are gone are dropped by id lookup.

    Signals:
        state_changed(ListState)
        photo_tapped(index: int, images: list[Image])
    """

    def __init__(
        self,
        fetcher: ReviewFetcher,
        cache: AssetCache | None = None,
        builder: ItemBuilder | None = None,
        layout: LayoutEngine | None = None,
        limit: int | None = None,
        prefetch_screens: float | None = None,
    ):
        self.fetcher = fetcher
        self.cache = cache or AssetCache()
        self.loader = AssetLoader(fetcher, self.cache)
        self.builder = builder or ItemBuilder()
        self.layout = layout or LayoutEngine()
        self.prefetch_screens = settings.prefetch_screens if prefetch_screens is None else prefetch_screens

        self.state_changed = Signal("state_changed")
        self.photo_tapped = Signal("photo_tapped")

        self._state = ListState(limit=limit or settings.page_limit)
        self._generation = 0
        self._page_task: asyncio.Task | None = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def state(self) -> ListState:
        """Current snapshot."""
        return self._state

    @property
    def is_loading(self) -> bool:
        """Whether a page request is in flight."""
        return self._page_task is not None and not self._page_task.done()

    # -- Pagination ----------------------------------------------------------

    def request_next_page(self) -> asyncio.Task | None:
        """
        Start loading the next page.

        Must be called from within a running event loop.

        Returns:
            The page-load task, or None when no load was started
        """
        if not self._state.should_load:
            logger.debug("Page request ignored: nothing to load or a load is in flight")
            return None

        self._state = self._state.model_copy(update={"should_load": False})
        offset, limit = self._state.offset, self._state.limit
        logger.debug(f"Requesting reviews offset={offset} limit={limit}")
        self._page_task = self._spawn(self._load_page(self._generation, offset, limit))
        return self._page_task

    def refresh(self) -> asyncio.Task | None:
        """Drop every item, start over from the first page."""
        self._generation += 1
        self._state = ListState(limit=self._state.limit)
        logger.info("Review list refreshed")
        self.state_changed.emit(self._state)
        return self.request_next_page()

    def should_prefetch(self, viewport_height: float, content_height: float, target_offset_y: float) -> bool:
        """
        Whether scrolling to *target_offset_y* should trigger the next page.

        True when less than ``prefetch_screens`` viewport heights of content
        remain below the target position.
        """
        if not self._state.should_load:
            return False
        remaining = content_height - viewport_height - target_offset_y
        return remaining <= viewport_height * self.prefetch_screens

    async def _load_page(self, generation: int, offset: int, limit: int) -> None:
        try:
            payload = await self.fetcher.fetch_page(offset, limit)
            page = await asyncio.to_thread(ReviewsPage.decode, payload)
        except (TransportError, DecodeError) as e:
            if generation != self._generation:
                logger.debug(f"Ignoring failure of superseded page load: {e}")
                return
            logger.warning(f"Failed to load reviews at offset {offset}: {e}")
            self._transition(should_load=True, has_error=True)
            return

        if generation != self._generation:
            logger.debug(f"Dropping superseded page at offset {offset}")
            return

        self._ingest(page)

    def _ingest(self, page: ReviewsPage) -> None:
        new_items = self.builder.make_review_items(page.items)
        items = [item for item in self._state.items if not isinstance(item, ReviewCountItem)]
        items.extend(new_items)
        items.append(self.builder.make_count_item(page.count))

        offset = self._state.offset + self._state.limit
        should_load = offset < page.count
        logger.info(f"Loaded {len(new_items)} reviews (offset {offset}/{page.count}, more: {should_load})")
        self._transition(items=tuple(items), offset=offset, should_load=should_load, has_error=False)

        for item in new_items:
            self._load_assets(item)

    # -- Item commands -------------------------------------------------------

    def expand(self, item_id: UUID) -> None:
        """Lift the line limit of a review's text. Unknown ids are ignored."""
        item = self._state.find(item_id)
        if not isinstance(item, ReviewDisplayItem) or item.is_expanded:
            return
        self._patch(item_id, max_lines=0)

    def tap_photo(self, item_id: UUID, index: int) -> None:
        """
        Ask the consumer to show a review's photos starting at *index*.

        Index -1 addresses the avatar, which is shown on its own.
        """
        item = self._state.find(item_id)
        if not isinstance(item, ReviewDisplayItem):
            return

        if index == -1:
            self.photo_tapped.emit(0, [item.avatar_image or default_avatar()])
            return

        photos = list(item.photos or ())
        if 0 <= index < len(photos):
            self.photo_tapped.emit(index, photos)

    def height(self, item: ListItem, width: float) -> float:
        """Row height of *item* at *width*."""
        return self.layout.height(item, width)

    # -- Assets --------------------------------------------------------------

    def _load_assets(self, item: ReviewDisplayItem) -> None:
        if item.photo_urls:
            self._spawn(self._load_photos(item.id, item.photo_urls))
        if item.avatar_url:
            self._spawn(self._load_avatar(item.id, item.avatar_url))

    async def _load_photos(self, item_id: UUID, urls: tuple[str, ...]) -> None:
        photos = await self.loader.load_photos(urls)
        self._patch(item_id, photos=photos)

    async def _load_avatar(self, item_id: UUID, url: str) -> None:
        avatar = await self.loader.load_avatar(url)
        self._patch(item_id, avatar_image=avatar)

    # -- Internals -----------------------------------------------------------

    def _patch(self, item_id: UUID, **changes: Any) -> None:
        index = self._state.index_of(item_id)
        if index is None:
            logger.debug(f"Dropping update for item {item_id} no longer in the list")
            return
        items = list(self._state.items)
        items[index] = items[index].model_copy(update=changes)
        self._transition(items=tuple(items))

    def _transition(self, **changes: Any) -> None:
        self._state = self._state.model_copy(update=changes)
        self.state_changed.emit(self._state)

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.opt(exception=task.exception()).error("Background load failed")

    async def wait_idle(self) -> None:
        """Wait until no page or asset load is in flight."""
        while self._tasks:
            await asyncio.wait(list(self._tasks))
