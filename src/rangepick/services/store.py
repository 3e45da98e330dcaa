"""Explicit state container for a date-range selection.

The store holds the current selection, the visible months and any pending
(not yet applied) selection. Derived values are computed by
:meth:`DateRangeStore.recompute`, which every mutation calls before notifying
listeners; callers that mutate configuration out of band can call it
themselves.

Invalid selections (disabled days, an end before the start, malformed
times) are rejected without touching state and logged as warnings.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import asdict, dataclass, replace
from datetime import date, datetime
from logging import getLogger
from typing import Any

from rangepick.services.clock import Clock, SystemClock
from rangepick.services.dates import DateAdapter, NativeDateAdapter
from rangepick.services.grid.types import DisabledDates
from rangepick.services.presets.resolver import PresetResolver
from rangepick.services.range_validation import (
    apply_bounds,
    is_date_disabled,
    validate_range_bounds,
    validate_range_order,
)

logger = getLogger(__name__)

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
_MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

DateInput = datetime | date | str | None


@dataclass(slots=True, frozen=True)
class DateRangeConfig:
    min_date: datetime | date | None = None
    max_date: datetime | date | None = None
    disabled_dates: DisabledDates | None = None
    enable_time_picker: bool = False
    default_start_time: str = "00:00"
    default_end_time: str = "23:59"

    def __post_init__(self) -> None:
        disabled = self.disabled_dates
        if disabled is not None and not callable(disabled) and not isinstance(disabled, tuple):
            object.__setattr__(self, "disabled_dates", tuple(disabled))


@dataclass(slots=True, frozen=True)
class RangeState:
    start: str
    end: str
    start_time: str | None = None
    end_time: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}


@dataclass(slots=True)
class StoreEvent:
    name: str
    state: RangeState


StoreListener = Callable[[StoreEvent], None]


class DateRangeStore:
    def __init__(
        self,
        resolver: PresetResolver,
        dates: DateAdapter | None = None,
        clock: Clock | None = None,
        config: DateRangeConfig | None = None,
    ) -> None:
        self._resolver = resolver
        self._dates = dates or NativeDateAdapter()
        self._clock = clock or SystemClock()
        self._config = config or DateRangeConfig()
        self._listeners: list[StoreListener] = []

        self._start: datetime | None = None
        self._end: datetime | None = None
        self._selecting_start = True
        self._start_time = self._config.default_start_time
        self._end_time = self._config.default_end_time

        self._pending_start: datetime | None = None
        self._pending_end: datetime | None = None
        self._has_pending_changes = False

        current_month = self._dates.start_of_month(self._clock.now())
        self._left_month = current_month
        self._right_month = self._dates.add_months(current_month, 1)

        self._range = RangeState(start="", end="")
        self._is_valid = True
        self._range_text = ""
        self.recompute()

    # -- read-only state -------------------------------------------------

    @property
    def config(self) -> DateRangeConfig:
        return self._config

    @property
    def start_date(self) -> datetime | None:
        return self._start

    @property
    def end_date(self) -> datetime | None:
        return self._end

    @property
    def left_month(self) -> datetime:
        return self._left_month

    @property
    def right_month(self) -> datetime:
        return self._right_month

    @property
    def selecting_start(self) -> bool:
        return self._selecting_start

    @property
    def start_time(self) -> str:
        return self._start_time

    @property
    def end_time(self) -> str:
        return self._end_time

    @property
    def pending_start(self) -> datetime | None:
        return self._pending_start

    @property
    def pending_end(self) -> datetime | None:
        return self._pending_end

    @property
    def has_pending_changes(self) -> bool:
        return self._has_pending_changes

    @property
    def range(self) -> RangeState:
        return self._range

    @property
    def is_valid(self) -> bool:
        return self._is_valid

    @property
    def range_text(self) -> str:
        return self._range_text

    # -- listeners -------------------------------------------------------

    def add_listener(self, listener: StoreListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: StoreListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            logger.debug("Attempted to remove unknown listener %r", listener)

    # -- derived values --------------------------------------------------

    def recompute(self) -> RangeState:
        """Refresh ``range``, ``is_valid`` and ``range_text`` from state."""

        dates = self._dates
        cfg = self._config
        state = RangeState(start=dates.to_iso_date(self._start), end=dates.to_iso_date(self._end))
        if cfg.enable_time_picker:
            state = replace(state, start_time=self._start_time, end_time=self._end_time)
        self._range = state

        self._is_valid = (
            validate_range_order(self._start, self._end, dates).valid
            and validate_range_bounds(
                self._start, self._end, cfg.min_date, cfg.max_date, dates
            ).valid
        )
        self._range_text = self._format_range_text()
        return state

    def _format_range_text(self) -> str:
        start, end = self._start, self._end
        if start is None and end is None:
            return ""
        if start is None:
            return f"? - {self._format_short(end)}"
        if end is None:
            return self._format_short(start)
        return f"{self._format_short(start)} - {self._format_short(end)}"

    def _format_short(self, value: datetime | None) -> str:
        if value is None:
            return ""
        return f"{self._dates.get_date(value)} {_MONTH_ABBR[self._dates.get_month(value)]}"

    def _changed(self, name: str) -> None:
        state = self.recompute()
        if not self._listeners:
            return
        event = StoreEvent(name=name, state=state)
        for listener in tuple(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Range store listener %r failed", listener)

    # -- configuration ---------------------------------------------------

    def configure(self, **changes: Any) -> None:
        self._config = replace(self._config, **changes)
        self._changed("config")

    # -- selection -------------------------------------------------------

    def _parse(self, value: DateInput) -> datetime | None:
        if value is None or value == "":
            return None
        if isinstance(value, str):
            parsed = self._dates.parse_iso_date(value)
            if parsed is None:
                logger.warning("Ignoring malformed date %r", value)
            return parsed
        return self._dates.normalize(value)

    def _bounded(self, value: datetime) -> datetime | None:
        cfg = self._config
        bounded = apply_bounds(value, cfg.min_date, cfg.max_date, self._dates)
        if is_date_disabled(bounded, cfg.disabled_dates, self._dates):
            logger.warning("Cannot select disabled date %s", self._dates.to_iso_date(bounded))
            return None
        return bounded

    def _apply_start(self, value: DateInput) -> bool:
        parsed = self._parse(value)
        if parsed is None:
            if value is None or value == "":
                self._start = None
                return True
            return False
        bounded = self._bounded(parsed)
        if bounded is None:
            return False
        self._start = bounded
        self._selecting_start = False
        if self._end is not None and self._dates.is_before_day(self._end, bounded):
            self._end = None
        return True

    def _apply_end(self, value: DateInput) -> bool:
        parsed = self._parse(value)
        if parsed is None:
            if value is None or value == "":
                self._end = None
                return True
            return False
        bounded = self._bounded(parsed)
        if bounded is None:
            return False
        if self._start is not None and self._dates.is_before_day(bounded, self._start):
            logger.warning("End date cannot be before start date")
            return False
        self._end = bounded
        self._selecting_start = True
        return True

    def set_start(self, value: DateInput) -> None:
        if self._apply_start(value):
            self._changed("start")

    def set_end(self, value: DateInput) -> None:
        if self._apply_end(value):
            self._changed("end")

    def set_range(self, start: DateInput, end: DateInput) -> None:
        start_applied = self._apply_start(start)
        end_applied = self._apply_end(end)
        if start_applied or end_applied:
            self._changed("range")

    def set_pending_start(self, value: DateInput) -> None:
        self._pending_start = self._parse(value)
        self._has_pending_changes = True
        self._changed("pending")

    def set_pending_end(self, value: DateInput) -> None:
        self._pending_end = self._parse(value)
        self._has_pending_changes = True
        self._changed("pending")

    def apply_pending(self) -> None:
        if self._pending_start is not None:
            self._apply_start(self._pending_start)
        if self._pending_end is not None:
            self._apply_end(self._pending_end)
        self._clear_pending()
        self._changed("apply")

    def cancel_pending(self) -> None:
        self._clear_pending()
        self._changed("pending")

    def _clear_pending(self) -> None:
        self._pending_start = None
        self._pending_end = None
        self._has_pending_changes = False

    def reset(self) -> None:
        self._start = None
        self._end = None
        self._selecting_start = True
        self._clear_pending()
        self._changed("reset")

    def apply_preset(self, key: str, now: Clock | datetime | date | None = None) -> bool:
        """Select the range of preset ``key``; returns ``False`` if unknown."""

        resolved = self._resolver.resolve(key, now if now is not None else self._clock)
        if resolved is None:
            logger.warning("Preset %r not found; selection unchanged", key)
            return False
        self.set_range(resolved.start, resolved.end)
        return True

    # -- visible months --------------------------------------------------

    def set_left_month(self, value: datetime | date) -> None:
        self._left_month = self._dates.start_of_month(value)
        if not self._dates.is_after_day(self._right_month, self._left_month):
            self._right_month = self._dates.add_months(self._left_month, 1)
        self._changed("months")

    def set_right_month(self, value: datetime | date) -> None:
        self._right_month = self._dates.start_of_month(value)
        if not self._dates.is_before_day(self._left_month, self._right_month):
            self._left_month = self._dates.add_months(self._right_month, -1)
        self._changed("months")

    # -- times -----------------------------------------------------------

    def set_start_time(self, value: str) -> None:
        if not _TIME_RE.match(value or ""):
            logger.warning("Ignoring malformed start time %r", value)
            return
        self._start_time = value
        self._changed("time")

    def set_end_time(self, value: str) -> None:
        if not _TIME_RE.match(value or ""):
            logger.warning("Ignoring malformed end time %r", value)
            return
        self._end_time = value
        self._changed("time")

    # -- snapshots -------------------------------------------------------

    def get_snapshot(self) -> RangeState:
        return self._range

    def load_snapshot(self, snapshot: RangeState | Mapping[str, Any]) -> None:
        if isinstance(snapshot, Mapping):
            snapshot = RangeState(
                start=str(snapshot.get("start") or ""),
                end=str(snapshot.get("end") or ""),
                start_time=snapshot.get("start_time"),
                end_time=snapshot.get("end_time"),
            )
        self.set_range(snapshot.start or None, snapshot.end or None)
        if snapshot.start_time:
            self.set_start_time(snapshot.start_time)
        if snapshot.end_time:
            self.set_end_time(snapshot.end_time)


__all__ = [
    "DateRangeConfig",
    "DateRangeStore",
    "RangeState",
    "StoreEvent",
    "StoreListener",
]
