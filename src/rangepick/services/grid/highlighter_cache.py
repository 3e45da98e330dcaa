"""LRU cache of decorated grids.

Cache key layout (pipe separated)::

    {year}-{month0}-{week_start}-{locale}|start|end|min|max|hover|disabled|multi|selecting

Missing dates are spelled ``null``. The disabled-dates signature is ``none``
for an empty or missing collection, the sorted comma-joined ISO days for a
collection, and ``function`` for a predicate. Predicate decorations are never
read from or written to the cache because a function's identity says nothing
about which days it disables.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from dataclasses import dataclass
from logging import getLogger
from typing import Any

from rangepick.services.dates import DateAdapter, NativeDateAdapter
from rangepick.services.grid.highlighter import RangeHighlighter
from rangepick.services.grid.lru import CacheStats, EvictingLRUCache
from rangepick.services.grid.types import (
    CalendarGrid,
    DecoratedGrid,
    DisabledDates,
    RangeDecorationParams,
)

logger = getLogger(__name__)

DEFAULT_HIGHLIGHT_CACHE_SIZE = 48
FUNCTION_SIGNATURE = "function"


@dataclass(slots=True, frozen=True)
class DecoratedGridCacheKey:
    month_key: str
    start_iso: str
    end_iso: str
    min_iso: str
    max_iso: str
    hover_iso: str
    disabled_signature: str
    multi_range_flag: str
    selecting_start_flag: str

    @property
    def full(self) -> str:
        return "|".join(
            (
                self.month_key,
                self.start_iso,
                self.end_iso,
                self.min_iso,
                self.max_iso,
                self.hover_iso,
                self.disabled_signature,
                self.multi_range_flag,
                self.selecting_start_flag,
            )
        )

    @property
    def cacheable(self) -> bool:
        return self.disabled_signature != FUNCTION_SIGNATURE


class RangeHighlighterCache:
    __slots__ = ("_highlighter", "_dates", "_maxsize", "_entries", "_stats", "_lock")

    def __init__(
        self,
        highlighter: RangeHighlighter | None = None,
        dates: DateAdapter | None = None,
        *,
        maxsize: int = DEFAULT_HIGHLIGHT_CACHE_SIZE,
    ) -> None:
        if maxsize < 1:
            raise ValueError("maxsize must be a positive integer")
        self._dates = dates or NativeDateAdapter()
        self._highlighter = highlighter or RangeHighlighter(self._dates)
        self._maxsize = maxsize
        self._stats = CacheStats()
        self._entries = self._new_backend()
        self._lock = threading.Lock()

    def _new_backend(self) -> EvictingLRUCache:
        return EvictingLRUCache(self._maxsize, name="highlight cache", stats=self._stats)

    @property
    def maxsize(self) -> int:
        return self._maxsize

    def get(
        self,
        grid: CalendarGrid,
        params: RangeDecorationParams | Mapping[str, Any] | None = None,
    ) -> DecoratedGrid:
        options = RangeDecorationParams.coerce(params)
        key = self.build_key(grid, options)
        if not key.cacheable:
            self._stats.misses += 1
            return self._highlighter.decorate(grid, options)

        full_key = key.full
        with self._lock:
            cached = self._entries.get(full_key)
            if cached is not None:
                self._stats.hits += 1
                return cached
            self._stats.misses += 1
            decorated = self._highlighter.decorate(grid, options)
            self._entries[full_key] = decorated
            return decorated

    def build_key(
        self,
        grid: CalendarGrid,
        params: RangeDecorationParams | Mapping[str, Any] | None = None,
    ) -> DecoratedGridCacheKey:
        options = RangeDecorationParams.coerce(params)
        month_key = (
            f"{grid.month_id.year}-{grid.month_id.month}-{grid.week_start}-{grid.locale or ''}"
        )
        return DecoratedGridCacheKey(
            month_key=month_key,
            start_iso=self._iso_or_null(options.start),
            end_iso=self._iso_or_null(options.end),
            min_iso=self._iso_or_null(options.min_date),
            max_iso=self._iso_or_null(options.max_date),
            hover_iso=self._highlighter.hover_iso(options.hover_date) or "null",
            disabled_signature=self.disabled_signature(options.disabled_dates),
            multi_range_flag="1" if options.multi_range else "0",
            selecting_start_flag="1" if options.selecting_start_date else "0",
        )

    def disabled_signature(self, disabled_dates: DisabledDates | None) -> str:
        if disabled_dates is None:
            return "none"
        if callable(disabled_dates):
            return FUNCTION_SIGNATURE
        isos = sorted(self._dates.to_iso_date(day) for day in disabled_dates)
        if not isos:
            return "none"
        return ",".join(isos)

    def _iso_or_null(self, value: Any) -> str:
        return self._dates.to_iso_date(value) if value is not None else "null"

    def has(
        self,
        grid: CalendarGrid,
        params: RangeDecorationParams | Mapping[str, Any] | None = None,
    ) -> bool:
        return self.build_key(grid, params).full in self._entries

    def size(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries = self._new_backend()
        logger.debug("Highlight cache cleared")

    def stats(self) -> CacheStats:
        return CacheStats(**self._stats.as_dict())

    def __len__(self) -> int:
        return self.size()


__all__ = [
    "DEFAULT_HIGHLIGHT_CACHE_SIZE",
    "DecoratedGridCacheKey",
    "RangeHighlighterCache",
]
