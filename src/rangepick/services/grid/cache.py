"""LRU cache of month grid structures.

Month grids depend only on the month, the week start and the locale, so they
survive every selection or hover change. Repeated lookups for the same month
return the same :class:`CalendarGrid` instance, which lets the decoration
cache key on it and lets callers compare grids with ``is``.
"""

from __future__ import annotations

import threading
from datetime import date, datetime
from logging import getLogger

from rangepick.services.grid.factory import CalendarGridFactory
from rangepick.services.grid.lru import CacheStats, EvictingLRUCache
from rangepick.services.grid.types import CalendarGrid

logger = getLogger(__name__)

DEFAULT_GRID_CACHE_SIZE = 24


def grid_cache_key(month_date: datetime | date, week_start: int, locale: str | None) -> str:
    """Return ``"{year}-{month0}-{week_start}[-{locale}]"`` for a month."""

    key = f"{month_date.year}-{month_date.month - 1}-{week_start}"
    return f"{key}-{locale}" if locale else key


class CalendarGridCache:
    __slots__ = ("_factory", "_maxsize", "_entries", "_stats", "_lock")

    def __init__(
        self,
        factory: CalendarGridFactory | None = None,
        *,
        maxsize: int = DEFAULT_GRID_CACHE_SIZE,
    ) -> None:
        if maxsize < 1:
            raise ValueError("maxsize must be a positive integer")
        self._factory = factory or CalendarGridFactory()
        self._maxsize = maxsize
        self._stats = CacheStats()
        self._entries = self._new_backend()
        self._lock = threading.Lock()

    def _new_backend(self) -> EvictingLRUCache:
        return EvictingLRUCache(self._maxsize, name="grid cache", stats=self._stats)

    @property
    def maxsize(self) -> int:
        return self._maxsize

    def get(
        self,
        month_date: datetime | date,
        week_start: int = 0,
        locale: str | None = None,
    ) -> CalendarGrid:
        key = grid_cache_key(month_date, week_start, locale)
        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self._stats.hits += 1
                return cached
            self._stats.misses += 1
            grid = self._factory.create_grid(month_date, week_start, locale)
            self._entries[key] = grid
            return grid

    def has(
        self,
        month_date: datetime | date,
        week_start: int = 0,
        locale: str | None = None,
    ) -> bool:
        return grid_cache_key(month_date, week_start, locale) in self._entries

    def size(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries = self._new_backend()
        logger.debug("Grid cache cleared")

    def stats(self) -> CacheStats:
        return CacheStats(**self._stats.as_dict())

    def __len__(self) -> int:
        return self.size()


__all__ = ["CalendarGridCache", "DEFAULT_GRID_CACHE_SIZE", "grid_cache_key"]
