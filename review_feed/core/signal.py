"""Observer-pattern signal used for outbound notifications."""

import threading
from typing import Any, Callable

from loguru import logger


class Signal:
    """
    Minimal signal/slot implementation.

    Handlers are called in connection order. A failing handler is logged
    and does not prevent the remaining handlers from running.
    """

    def __init__(self, name: str = "signal"):
        self.name = name
        self._handlers: list[Callable[..., Any]] = []
        self._lock = threading.Lock()

    def connect(self, handler: Callable[..., Any]) -> None:
        with self._lock:
            if handler not in self._handlers:
                self._handlers.append(handler)

    def disconnect(self, handler: Callable[..., Any]) -> None:
        with self._lock:
            self._handlers.remove(handler)

    def emit(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            handlers = list(self._handlers)
        for handler in handlers:
            try:
                handler(*args, **kwargs)
            except Exception as e:
                logger.error(f"Handler {handler!r} for {self.name} failed: {e}")

    @property
    def handler_count(self) -> int:
        with self._lock:
            return len(self._handlers)
