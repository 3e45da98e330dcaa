"""Month grid structure, decoration and their caches."""

from .cache import CalendarGridCache, grid_cache_key
from .factory import CalendarGridFactory
from .highlighter import RangeHighlighter
from .highlighter_cache import RangeHighlighterCache
from .lru import CacheStats
from .types import (
    CalendarCell,
    CalendarGrid,
    DecoratedCell,
    DecoratedGrid,
    MonthId,
    RangeDecorationParams,
)

__all__ = [
    "CacheStats",
    "CalendarCell",
    "CalendarGrid",
    "CalendarGridCache",
    "CalendarGridFactory",
    "DecoratedCell",
    "DecoratedGrid",
    "MonthId",
    "RangeDecorationParams",
    "RangeHighlighter",
    "RangeHighlighterCache",
    "grid_cache_key",
]
