"""
Data cache module for the AirSniffer dashboard.

This module contains the DataCache class, a small read-through cache that
fronts each upstream query (latest indoor reading, history per window,
current outdoor conditions). Entries expire after a fixed time-to-live and
are evicted lazily when read; the whole cache is also swept on a longer
interval to bound memory.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

_LOGGER = logging.getLogger(__name__)


@dataclass
class CachedEntry:
    """A cached payload and the clock time it was stored at."""

    data: Any
    timestamp: float


class DataCache:
    """
    Time-to-live cache keyed by query name.

    An entry older than ``ttl_seconds`` is stale: it is deleted and reported
    as a miss. ``sweep_if_due`` clears everything once ``sweep_interval_seconds``
    have passed since the previous sweep.

    The cache is not locked; callers mutate it from a single thread.
    """

    DEFAULT_TTL_SECONDS = 30
    DEFAULT_SWEEP_INTERVAL_SECONDS = 300

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        sweep_interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.sweep_interval_seconds = sweep_interval_seconds
        self._clock = clock
        self._entries: dict[str, CachedEntry] = {}
        self._last_sweep = clock()

    def set(self, key: str, data: Any) -> None:
        self._entries[key] = CachedEntry(data=data, timestamp=self._clock())

    def get(self, key: str) -> Optional[Any]:
        """
        Returns the cached payload for a key, or None on a miss.

        A stale entry is evicted before reporting the miss.
        """
        entry = self._entries.get(key)
        if entry is None:
            return None

        age = self._clock() - entry.timestamp
        if age > self.ttl_seconds:
            del self._entries[key]
            _LOGGER.debug("Cache entry %s expired after %.1fs", key, age)
            return None

        return entry.data

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        """Drops every entry and restarts the sweep interval."""
        self._entries.clear()
        self._last_sweep = self._clock()

    def purge_expired(self) -> int:
        """Evicts every stale entry; returns how many were removed."""
        now = self._clock()
        stale = [k for k, e in self._entries.items() if now - e.timestamp > self.ttl_seconds]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def sweep_if_due(self) -> bool:
        """
        Clears the whole cache when the sweep interval has elapsed.

        Returns:
            True if a sweep happened
        """
        if self._clock() - self._last_sweep < self.sweep_interval_seconds:
            return False

        _LOGGER.debug("Sweeping %d cache entries", len(self._entries))
        self.clear()
        return True
