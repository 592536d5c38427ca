"""
Audio Tool: Debounce listen-event logging.

Keeps a small time-windowed set of recently logged (chapter, verse,
track type) keys. A key is accepted at most once per window; the set is
bounded and evicts the least recently logged key when full.
"""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from typing import Callable, Hashable

from gita_study.config.constants import (
    LISTEN_LOG_DEBOUNCE_SECONDS,
    LISTEN_LOG_MAX_ENTRIES,
)

logger = logging.getLogger(__name__)


class ListenLogDebouncer:
    """Time-windowed LRU of recently logged keys."""

    def __init__(
        self,
        window_seconds: float = LISTEN_LOG_DEBOUNCE_SECONDS,
        max_entries: int = LISTEN_LOG_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ):
        if window_seconds < 0:
            raise ValueError("window_seconds must be >= 0")
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self.window_seconds = window_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._seen: OrderedDict[Hashable, float] = OrderedDict()

    def __len__(self) -> int:
        return len(self._seen)

    def _expire(self, now: float) -> None:
        # Oldest first, so stop at the first unexpired key
        while self._seen:
            key, logged_at = next(iter(self._seen.items()))
            if now - logged_at < self.window_seconds:
                break
            del self._seen[key]

    def should_log(self, key: Hashable) -> bool:
        """Return True (and remember ``key``) unless it was logged within the window."""
        now = self._clock()
        self._expire(now)

        if key in self._seen:
            logger.debug("Listen log debounced: %s", key)
            return False

        self._seen[key] = now
        while len(self._seen) > self.max_entries:
            self._seen.popitem(last=False)
        return True

    def clear(self) -> None:
        self._seen.clear()
