"""Explicit construction of the date-range services."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime

from rangepick.services.clock import Clock, SystemClock
from rangepick.services.core_config import CoreConfig
from rangepick.services.dates import DateAdapter, NativeDateAdapter
from rangepick.services.grid.cache import CalendarGridCache
from rangepick.services.grid.factory import CalendarGridFactory
from rangepick.services.grid.highlighter import RangeHighlighter
from rangepick.services.grid.highlighter_cache import RangeHighlighterCache
from rangepick.services.grid.types import CalendarGrid
from rangepick.services.presets.fiscal import fiscal_presets
from rangepick.services.presets.registry import (
    PresetRegistry,
    register_builtin_presets,
    register_preset_package,
)
from rangepick.services.presets.resolver import PresetResolver
from rangepick.services.store import DateRangeConfig, DateRangeStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RangeCore:
    """Bundle the long-lived services a date-range picker talks to."""

    config: CoreConfig
    dates: DateAdapter
    clock: Clock
    registry: PresetRegistry
    resolver: PresetResolver
    grid_factory: CalendarGridFactory
    grid_cache: CalendarGridCache
    highlighter: RangeHighlighter
    highlighter_cache: RangeHighlighterCache

    @classmethod
    def create(
        cls,
        config: CoreConfig | None = None,
        *,
        clock: Clock | None = None,
        dates: DateAdapter | None = None,
        register_builtins: bool = True,
    ) -> "RangeCore":
        if config is None:
            from rangepick.settings import settings

            config = CoreConfig.from_settings(settings)

        dates = dates or NativeDateAdapter(default_locale=config.default_locale)
        clock = clock or SystemClock()

        registry = PresetRegistry()
        if register_builtins:
            register_builtin_presets(registry)
        if config.fiscal_year_start_month is not None:
            register_preset_package(
                registry, "fiscal", fiscal_presets(config.fiscal_year_start_month)
            )

        grid_factory = CalendarGridFactory(dates)
        highlighter = RangeHighlighter(dates)
        core = cls(
            config=config,
            dates=dates,
            clock=clock,
            registry=registry,
            resolver=PresetResolver(registry, dates, clock),
            grid_factory=grid_factory,
            grid_cache=CalendarGridCache(grid_factory, maxsize=config.grid_cache_maxsize),
            highlighter=highlighter,
            highlighter_cache=RangeHighlighterCache(
                highlighter, dates, maxsize=config.highlight_cache_maxsize
            ),
        )
        logger.debug(
            "Range core ready: %d presets, grid cache %d, highlight cache %d",
            registry.count(),
            config.grid_cache_maxsize,
            config.highlight_cache_maxsize,
        )
        return core

    def week_start(self, locale: str | None = None) -> int:
        """Return the configured week start, else the locale's convention."""

        if self.config.default_week_start is not None and locale is None:
            return self.config.default_week_start
        return self.dates.get_week_start(locale)

    def create_store(self, config: DateRangeConfig | None = None) -> DateRangeStore:
        return DateRangeStore(self.resolver, self.dates, self.clock, config=config)

    def clear_caches(self) -> None:
        self.grid_cache.clear()
        self.highlighter_cache.clear()

    def today(self) -> datetime:
        return self.dates.normalize(self.clock.now())

    def month_grid(
        self, month_date: datetime | date, *, locale: str | None = None
    ) -> CalendarGrid:
        """Return the cached grid for ``month_date`` using :meth:`week_start`."""

        return self.grid_cache.get(month_date, self.week_start(locale), locale)


__all__ = ["RangeCore"]
