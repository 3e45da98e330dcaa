from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, fields
from datetime import date, datetime
from typing import Any

GRID_WEEKS = 6
DAYS_PER_WEEK = 7
GRID_CELLS = GRID_WEEKS * DAYS_PER_WEEK

DisabledDates = Sequence[datetime | date] | Callable[[datetime], bool]


@dataclass(slots=True, frozen=True)
class MonthId:
    year: int
    month: int  # 0-based


@dataclass(slots=True, frozen=True)
class CalendarCell:
    date: datetime
    iso: str
    day: int
    month: int  # 0-based
    year: int
    day_of_week: int  # 0 = Sunday
    in_current_month: bool


@dataclass(slots=True, frozen=True)
class CalendarGrid:
    """A 6x7 month layout including padding days from adjacent months."""

    month_id: MonthId
    week_start: int
    locale: str | None
    weeks: tuple[tuple[CalendarCell, ...], ...]
    cells: tuple[CalendarCell, ...]


@dataclass(slots=True, frozen=True)
class DecoratedCell(CalendarCell):
    is_selected_start: bool
    is_selected_end: bool
    is_in_range: bool
    is_in_hover_range: bool
    is_disabled: bool


@dataclass(slots=True, frozen=True)
class DecoratedGrid:
    base: CalendarGrid
    weeks: tuple[tuple[DecoratedCell, ...], ...]
    cells: tuple[DecoratedCell, ...]


@dataclass(slots=True, frozen=True)
class RangeDecorationParams:
    """Selection state used to decorate a grid.

    ``hover_date`` may be an ISO string or a date; ``disabled_dates`` is
    either a collection of days or a predicate. Predicates cannot be part of
    a cache key, so decorations using one are always recomputed.
    """

    start: datetime | date | None = None
    end: datetime | date | None = None
    min_date: datetime | date | None = None
    max_date: datetime | date | None = None
    hover_date: str | datetime | date | None = None
    disabled_dates: DisabledDates | None = None
    multi_range: bool = False
    selecting_start_date: bool = False

    def __post_init__(self) -> None:
        disabled = self.disabled_dates
        if disabled is not None and not callable(disabled) and not isinstance(disabled, tuple):
            # Key building and decoration both iterate the collection.
            object.__setattr__(self, "disabled_dates", tuple(disabled))

    @classmethod
    def coerce(
        cls, params: "RangeDecorationParams | Mapping[str, Any] | None"
    ) -> "RangeDecorationParams":
        """Accept params as an instance, a keyword mapping, or ``None``."""

        if params is None:
            return cls()
        if isinstance(params, cls):
            return params
        known = {field.name for field in fields(cls)}
        unknown = set(params) - known
        if unknown:
            raise TypeError(
                f"Unknown decoration parameters: {', '.join(sorted(unknown))}"
            )
        return cls(**dict(params))


def split_weeks(cells: Sequence[Any]) -> tuple[tuple[Any, ...], ...]:
    return tuple(
        tuple(cells[index : index + DAYS_PER_WEEK])
        for index in range(0, len(cells), DAYS_PER_WEEK)
    )


__all__ = [
    "CalendarCell",
    "CalendarGrid",
    "DAYS_PER_WEEK",
    "DecoratedCell",
    "DecoratedGrid",
    "DisabledDates",
    "GRID_CELLS",
    "GRID_WEEKS",
    "MonthId",
    "RangeDecorationParams",
    "split_weeks",
]
