from __future__ import annotations

from datetime import date, datetime
from logging import getLogger

from rangepick.services.clock import Clock, SystemClock, as_clock
from rangepick.services.dates import DateAdapter, NativeDateAdapter
from rangepick.services.presets.registry import PresetRegistry
from rangepick.services.presets.plugin import PresetRange

logger = getLogger(__name__)


class PresetResolver:
    """Turn preset keys into concrete ISO ranges.

    The resolver owns a default clock, but any single call may pass ``now``
    (a clock, ``datetime`` or ``date``) to pin the current time for that call
    without replacing the default.
    """

    __slots__ = ("_registry", "_dates", "_clock")

    def __init__(
        self,
        registry: PresetRegistry,
        dates: DateAdapter | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._registry = registry
        self._dates = dates or NativeDateAdapter()
        self._clock = clock or SystemClock()

    @property
    def registry(self) -> PresetRegistry:
        return self._registry

    @property
    def clock(self) -> Clock:
        return self._clock

    def resolve(
        self, key: str, now: Clock | datetime | date | None = None
    ) -> PresetRange | None:
        plugin = self._registry.get(key)
        if plugin is None:
            logger.warning("Preset %r not found in registry", key)
            return None

        effective_clock = as_clock(now) if now is not None else self._clock
        result = plugin.resolve(effective_clock, self._dates)
        return PresetRange(
            start=self._dates.to_iso_date(result.start),
            end=self._dates.to_iso_date(result.end),
        )

    def preset_keys(self) -> list[str]:
        return self._registry.get_all_keys()

    def has_preset(self, key: str) -> bool:
        return self._registry.has(key)


__all__ = ["PresetResolver"]
