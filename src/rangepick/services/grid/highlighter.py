"""Decorate month grids with selection, hover and disabled flags.

This layer is pure; see :mod:`rangepick.services.grid.highlighter_cache` for
memoization. ISO strings are fixed-width and zero-padded, so range checks
compare them lexicographically.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from rangepick.services.dates import DateAdapter, NativeDateAdapter
from rangepick.services.grid.types import (
    CalendarCell,
    CalendarGrid,
    DecoratedCell,
    DecoratedGrid,
    DisabledDates,
    RangeDecorationParams,
    split_weeks,
)


@dataclass(slots=True, frozen=True)
class HoverRange:
    min: str
    max: str

    def contains(self, iso: str) -> bool:
        return self.min <= iso <= self.max


def compute_hover_range(
    start_iso: str | None,
    hover_iso: str | None,
    selecting_start: bool,
) -> HoverRange | None:
    """Return the order-normalized hover preview, if one applies."""

    if selecting_start or not hover_iso or not start_iso:
        return None
    return HoverRange(min=min(start_iso, hover_iso), max=max(start_iso, hover_iso))


def _decorate_cell(cell: CalendarCell, **flags: bool) -> DecoratedCell:
    return DecoratedCell(
        date=cell.date,
        iso=cell.iso,
        day=cell.day,
        month=cell.month,
        year=cell.year,
        day_of_week=cell.day_of_week,
        in_current_month=cell.in_current_month,
        is_selected_start=flags.get("is_selected_start", False),
        is_selected_end=flags.get("is_selected_end", False),
        is_in_range=flags.get("is_in_range", False),
        is_in_hover_range=flags.get("is_in_hover_range", False),
        is_disabled=flags.get("is_disabled", False),
    )


class RangeHighlighter:
    __slots__ = ("_dates",)

    def __init__(self, dates: DateAdapter | None = None) -> None:
        self._dates = dates or NativeDateAdapter()

    def hover_iso(self, value: str | datetime | date | None) -> str | None:
        if value is None or value == "":
            return None
        if isinstance(value, str):
            return value
        return self._dates.to_iso_date(value)

    def _iso_or_none(self, value: datetime | date | None) -> str | None:
        return self._dates.to_iso_date(value) if value is not None else None

    def decorate(
        self,
        grid: CalendarGrid,
        params: RangeDecorationParams | Mapping[str, Any] | None = None,
    ) -> DecoratedGrid:
        options = RangeDecorationParams.coerce(params)
        start_iso = self._iso_or_none(options.start)
        end_iso = self._iso_or_none(options.end)
        min_iso = self._iso_or_none(options.min_date)
        max_iso = self._iso_or_none(options.max_date)
        hover_range = compute_hover_range(
            start_iso,
            self.hover_iso(options.hover_date),
            options.selecting_start_date,
        )
        disabled = options.disabled_dates
        disabled_isos: frozenset[str] | None = None
        if disabled is not None and not callable(disabled):
            disabled_isos = frozenset(self._dates.to_iso_date(day) for day in disabled)

        decorated: list[DecoratedCell] = []
        for cell in grid.cells:
            if not cell.in_current_month:
                decorated.append(_decorate_cell(cell))
                continue
            iso = cell.iso
            decorated.append(
                _decorate_cell(
                    cell,
                    is_selected_start=start_iso == iso,
                    is_selected_end=end_iso == iso,
                    is_in_range=bool(start_iso and end_iso and start_iso <= iso <= end_iso),
                    is_in_hover_range=bool(hover_range and hover_range.contains(iso)),
                    is_disabled=self._is_disabled(
                        cell, min_iso, max_iso, disabled, disabled_isos
                    ),
                )
            )

        cells = tuple(decorated)
        return DecoratedGrid(base=grid, weeks=split_weeks(cells), cells=cells)

    @staticmethod
    def _is_disabled(
        cell: CalendarCell,
        min_iso: str | None,
        max_iso: str | None,
        disabled: DisabledDates | None,
        disabled_isos: frozenset[str] | None,
    ) -> bool:
        if min_iso and cell.iso < min_iso:
            return True
        if max_iso and cell.iso > max_iso:
            return True
        if disabled is None:
            return False
        if disabled_isos is not None:
            return cell.iso in disabled_isos
        return bool(disabled(cell.date))


__all__ = ["HoverRange", "RangeHighlighter", "compute_hover_range"]
