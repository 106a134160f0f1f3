"""Debounced search input."""

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger("soundshelf.search")


class SearchDebouncer:
    """Delay a search until the input has been stable for ``delay`` seconds.

    Each ``submit`` cancels the pending query, if any, and schedules a new
    one. Input shorter than ``min_length`` never queries; ``on_clear`` is
    called instead so the caller can empty its results.
    """

    def __init__(
        self,
        callback: Callable[[str], None],
        delay: float = 0.5,
        min_length: int = 3,
        on_clear: Optional[Callable[[], None]] = None,
    ):
        self.callback = callback
        self.delay = delay
        self.min_length = min_length
        self.on_clear = on_clear
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def submit(self, text: str) -> None:
        """Register new input text."""
        query = (text or "").strip()
        with self._lock:
            self._cancel_locked()
            if len(query) < self.min_length:
                clear = self.on_clear
            else:
                clear = None
                timer = threading.Timer(self.delay, self._fire, args=(query,))
                timer.daemon = True
                self._timer = timer
                timer.start()
        if clear is not None:
            clear()

    def cancel(self) -> None:
        """Drop any pending query."""
        with self._lock:
            self._cancel_locked()

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, query: str) -> None:
        with self._lock:
            if self._timer is None or self._timer is not threading.current_thread():
                # Superseded by a newer submit
                return
            self._timer = None
        logger.debug(f"Running debounced search: {query}")
        self.callback(query)
