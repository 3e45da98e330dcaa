"""Bounded LRU storage shared by the grid and decoration caches."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from logging import getLogger
from typing import Any

from cachetools import LRUCache

logger = getLogger(__name__)


@dataclass(slots=True)
class CacheStats:
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


class EvictingLRUCache(LRUCache):
    """:class:`cachetools.LRUCache` that records and logs evictions."""

    def __init__(self, maxsize: int, *, name: str, stats: CacheStats) -> None:
        super().__init__(maxsize=maxsize)
        self._name = name
        self._stats = stats

    def popitem(self) -> tuple[str, Any]:
        key, value = super().popitem()
        self._stats.evictions += 1
        logger.debug("%s evicted least recently used entry %s", self._name, key)
        return key, value


__all__ = ["CacheStats", "EvictingLRUCache"]
