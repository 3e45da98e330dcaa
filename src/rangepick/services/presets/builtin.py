"""Built-in range presets.

Semantics are frozen:

- ``LAST_N_DAYS`` counts today as the Nth day, so ``LAST_7_DAYS`` on a
  Saturday spans the previous Sunday through that Saturday.
- Weeks run Monday to Sunday for both ``THIS_WEEK`` and ``LAST_WEEK``.
- Quarters start in January, April, July and October.
"""

from __future__ import annotations

from datetime import datetime

from rangepick.services.clock import Clock
from rangepick.services.dates import DateAdapter
from rangepick.services.presets.plugin import DateRange, RangePreset, preset

LAST_N_DAYS_SPANS: tuple[int, ...] = (7, 14, 30, 60, 90)


def _days_to_monday(dates: DateAdapter, value: datetime) -> int:
    day_of_week = dates.get_day(value)
    return 6 if day_of_week == 0 else day_of_week - 1


def _month_start(dates: DateAdapter, year: int, month: int) -> datetime:
    """Return local midnight on the 1st of 0-based ``month``, rolling years."""

    return dates.add_months(datetime(year, 1, 1), month)


def _quarter_bounds(dates: DateAdapter, year: int, start_month: int) -> DateRange:
    start = _month_start(dates, year, start_month)
    last_month = dates.add_months(start, 2)
    end = dates.normalize(dates.end_of_month(last_month))
    return DateRange(start=start, end=end)


@preset("TODAY")
def today(clock: Clock, dates: DateAdapter) -> DateRange:
    normalized = dates.normalize(clock.now())
    return DateRange(start=normalized, end=normalized)


@preset("YESTERDAY")
def yesterday(clock: Clock, dates: DateAdapter) -> DateRange:
    value = dates.add_days(clock.now(), -1)
    return DateRange(start=value, end=value)


def last_n_days(days: int) -> RangePreset:
    """Build ``LAST_{days}_DAYS``: ``days`` calendar days ending today."""

    if days < 1:
        raise ValueError("days must be a positive integer")

    def resolve(clock: Clock, dates: DateAdapter) -> DateRange:
        now = clock.now()
        return DateRange(start=dates.add_days(now, -(days - 1)), end=dates.normalize(now))

    return RangePreset(key=f"LAST_{days}_DAYS", resolve=resolve)


@preset("THIS_WEEK")
def this_week(clock: Clock, dates: DateAdapter) -> DateRange:
    now = clock.now()
    start = dates.add_days(now, -_days_to_monday(dates, now))
    return DateRange(start=start, end=dates.add_days(start, 6))


@preset("LAST_WEEK")
def last_week(clock: Clock, dates: DateAdapter) -> DateRange:
    now = clock.now()
    last_monday = dates.add_days(now, -_days_to_monday(dates, now) - 7)
    return DateRange(start=last_monday, end=dates.add_days(last_monday, 6))


@preset("THIS_MONTH")
def this_month(clock: Clock, dates: DateAdapter) -> DateRange:
    now = clock.now()
    return DateRange(start=dates.start_of_month(now), end=dates.end_of_month(now))


@preset("LAST_MONTH")
def last_month(clock: Clock, dates: DateAdapter) -> DateRange:
    previous = dates.add_months(clock.now(), -1)
    return DateRange(start=dates.start_of_month(previous), end=dates.end_of_month(previous))


@preset("MONTH_TO_DATE")
def month_to_date(clock: Clock, dates: DateAdapter) -> DateRange:
    now = clock.now()
    return DateRange(start=dates.start_of_month(now), end=dates.normalize(now))


@preset("THIS_QUARTER")
def this_quarter(clock: Clock, dates: DateAdapter) -> DateRange:
    now = clock.now()
    quarter_start = (dates.get_month(now) // 3) * 3
    return _quarter_bounds(dates, dates.get_year(now), quarter_start)


@preset("LAST_QUARTER")
def last_quarter(clock: Clock, dates: DateAdapter) -> DateRange:
    now = clock.now()
    previous_start = (dates.get_month(now) // 3) * 3 - 3
    year = dates.get_year(now)
    if previous_start < 0:
        year -= 1
        previous_start = 9
    return _quarter_bounds(dates, year, previous_start)


@preset("QUARTER_TO_DATE")
def quarter_to_date(clock: Clock, dates: DateAdapter) -> DateRange:
    now = clock.now()
    quarter_start = (dates.get_month(now) // 3) * 3
    start = _month_start(dates, dates.get_year(now), quarter_start)
    return DateRange(start=start, end=dates.normalize(now))


@preset("THIS_YEAR")
def this_year(clock: Clock, dates: DateAdapter) -> DateRange:
    year = dates.get_year(clock.now())
    return DateRange(start=datetime(year, 1, 1), end=datetime(year, 12, 31))


@preset("LAST_YEAR")
def last_year(clock: Clock, dates: DateAdapter) -> DateRange:
    year = dates.get_year(clock.now()) - 1
    return DateRange(start=datetime(year, 1, 1), end=datetime(year, 12, 31))


@preset("YEAR_TO_DATE")
def year_to_date(clock: Clock, dates: DateAdapter) -> DateRange:
    now = clock.now()
    return DateRange(start=datetime(dates.get_year(now), 1, 1), end=dates.normalize(now))


BUILT_IN_PRESETS: tuple[RangePreset, ...] = (
    today,
    yesterday,
    *(last_n_days(days) for days in LAST_N_DAYS_SPANS),
    this_week,
    last_week,
    this_month,
    last_month,
    month_to_date,
    this_quarter,
    last_quarter,
    quarter_to_date,
    this_year,
    last_year,
    year_to_date,
)


__all__ = [
    "BUILT_IN_PRESETS",
    "LAST_N_DAYS_SPANS",
    "last_n_days",
]
