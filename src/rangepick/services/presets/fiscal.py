"""Fiscal-calendar presets for organisations whose year does not start in January."""

from __future__ import annotations

from datetime import datetime

from rangepick.services.clock import Clock
from rangepick.services.dates import DateAdapter
from rangepick.services.presets.plugin import DateRange, RangePreset


def _fiscal_year_start(dates: DateAdapter, now: datetime, start_month: int) -> datetime:
    # start_month is 1-based here, matching how it is configured.
    year = dates.get_year(now)
    if dates.get_month(now) + 1 < start_month:
        year -= 1
    return datetime(year, start_month, 1)


def _fiscal_quarter_start(dates: DateAdapter, now: datetime, start_month: int) -> datetime:
    fiscal_start = _fiscal_year_start(dates, now, start_month)
    offset = (dates.get_month(now) + 1 - start_month) % 12
    return dates.add_months(fiscal_start, (offset // 3) * 3)


def _quarter_from(dates: DateAdapter, start: datetime) -> DateRange:
    end = dates.add_days(dates.add_months(start, 3), -1)
    return DateRange(start=start, end=end)


def fiscal_presets(start_month: int = 4) -> tuple[RangePreset, ...]:
    """Return fiscal presets for a year beginning on the 1st of ``start_month``.

    With the default of April, ``THIS_FISCAL_YEAR`` on 2026-02-21 is
    2025-04-01..2026-03-31.
    """

    if not 1 <= start_month <= 12:
        raise ValueError("start_month must be between 1 and 12")

    def this_fiscal_quarter(clock: Clock, dates: DateAdapter) -> DateRange:
        return _quarter_from(dates, _fiscal_quarter_start(dates, clock.now(), start_month))

    def last_fiscal_quarter(clock: Clock, dates: DateAdapter) -> DateRange:
        current = _fiscal_quarter_start(dates, clock.now(), start_month)
        return _quarter_from(dates, dates.add_months(current, -3))

    def this_fiscal_year(clock: Clock, dates: DateAdapter) -> DateRange:
        start = _fiscal_year_start(dates, clock.now(), start_month)
        end = dates.add_days(dates.add_months(start, 12), -1)
        return DateRange(start=start, end=end)

    def fiscal_year_to_date(clock: Clock, dates: DateAdapter) -> DateRange:
        now = clock.now()
        return DateRange(
            start=_fiscal_year_start(dates, now, start_month), end=dates.normalize(now)
        )

    return (
        RangePreset(key="THIS_FISCAL_QUARTER", resolve=this_fiscal_quarter),
        RangePreset(key="LAST_FISCAL_QUARTER", resolve=last_fiscal_quarter),
        RangePreset(key="THIS_FISCAL_YEAR", resolve=this_fiscal_year),
        RangePreset(key="FISCAL_YEAR_TO_DATE", resolve=fiscal_year_to_date),
    )


__all__ = ["fiscal_presets"]
