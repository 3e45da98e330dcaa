from __future__ import annotations

from datetime import date, datetime

from rangepick.services.dates import DateAdapter, NativeDateAdapter
from rangepick.services.grid.types import (
    GRID_CELLS,
    CalendarCell,
    CalendarGrid,
    MonthId,
    split_weeks,
)


def leading_padding(first_weekday: int, week_start: int) -> int:
    """Return how many days of the previous month precede the 1st."""

    return (first_weekday - week_start + 7) % 7


class CalendarGridFactory:
    """Build 42-cell month grids.

    The grid always has six weeks, even for months that fit in four or five,
    so the calendar keeps the same height while navigating. Instances carry
    no state beyond the date adapter; sharing grids is the cache's job.
    """

    __slots__ = ("_dates",)

    def __init__(self, dates: DateAdapter | None = None) -> None:
        self._dates = dates or NativeDateAdapter()

    def create_grid(
        self,
        month_date: datetime | date,
        week_start: int = 0,
        locale: str | None = None,
    ) -> CalendarGrid:
        if not 0 <= week_start <= 6:
            raise ValueError(f"week_start must be between 0 and 6, got {week_start!r}")

        dates = self._dates
        first = dates.start_of_month(month_date)
        year = dates.get_year(first)
        month = dates.get_month(first)

        offset = leading_padding(dates.get_day(first), week_start)
        current = dates.add_days(first, -offset)

        cells: list[CalendarCell] = []
        for _ in range(GRID_CELLS):
            cell_year = dates.get_year(current)
            cell_month = dates.get_month(current)
            cells.append(
                CalendarCell(
                    date=current,
                    iso=dates.to_iso_date(current),
                    day=dates.get_date(current),
                    month=cell_month,
                    year=cell_year,
                    day_of_week=dates.get_day(current),
                    in_current_month=(cell_year, cell_month) == (year, month),
                )
            )
            current = dates.add_days(current, 1)

        frozen_cells = tuple(cells)
        return CalendarGrid(
            month_id=MonthId(year=year, month=month),
            week_start=week_start,
            locale=locale,
            weeks=split_weeks(frozen_cells),
            cells=frozen_cells,
        )


__all__ = ["CalendarGridFactory", "leading_padding"]
