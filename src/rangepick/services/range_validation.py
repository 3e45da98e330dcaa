"""Validation helpers for selected ranges.

All checks compare calendar days through the date adapter, so the time of
day carried by an input never changes the verdict.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from rangepick.services.dates import DateAdapter, NativeDateAdapter
from rangepick.services.grid.types import DisabledDates

_DEFAULT_DATES = NativeDateAdapter()

DateValue = datetime | date


@dataclass(slots=True, frozen=True)
class ValidationResult:
    valid: bool
    error: str | None = None


VALID = ValidationResult(valid=True)


def validate_range_order(
    start: DateValue | None,
    end: DateValue | None,
    dates: DateAdapter = _DEFAULT_DATES,
) -> ValidationResult:
    """End before start is invalid; an incomplete selection is valid."""

    if start is None or end is None:
        return VALID
    if dates.is_before_day(end, start):
        return ValidationResult(False, "End date cannot be before start date")
    return VALID


def validate_date_bounds(
    value: DateValue | None,
    min_date: DateValue | None = None,
    max_date: DateValue | None = None,
    dates: DateAdapter = _DEFAULT_DATES,
) -> ValidationResult:
    if value is None:
        return VALID
    if min_date is not None and dates.is_before_day(value, min_date):
        return ValidationResult(
            False, f"Date cannot be before {dates.to_iso_date(min_date)}"
        )
    if max_date is not None and dates.is_after_day(value, max_date):
        return ValidationResult(
            False, f"Date cannot be after {dates.to_iso_date(max_date)}"
        )
    return VALID


def validate_range_bounds(
    start: DateValue | None,
    end: DateValue | None,
    min_date: DateValue | None = None,
    max_date: DateValue | None = None,
    dates: DateAdapter = _DEFAULT_DATES,
) -> ValidationResult:
    start_result = validate_date_bounds(start, min_date, max_date, dates)
    if not start_result.valid:
        return start_result
    return validate_date_bounds(end, min_date, max_date, dates)


def is_date_disabled(
    value: DateValue,
    disabled_dates: DisabledDates | None,
    dates: DateAdapter = _DEFAULT_DATES,
) -> bool:
    if disabled_dates is None:
        return False
    if callable(disabled_dates):
        return bool(disabled_dates(dates.normalize(value)))
    return any(dates.is_same_day(value, disabled) for disabled in disabled_dates)


def apply_bounds(
    value: DateValue,
    min_date: DateValue | None = None,
    max_date: DateValue | None = None,
    dates: DateAdapter = _DEFAULT_DATES,
) -> datetime:
    """Clamp ``value`` into ``[min_date, max_date]`` at day granularity."""

    result = dates.normalize(value)
    if min_date is not None and dates.is_before_day(result, min_date):
        result = dates.normalize(min_date)
    if max_date is not None and dates.is_after_day(result, max_date):
        result = dates.normalize(max_date)
    return result


__all__ = [
    "ValidationResult",
    "apply_bounds",
    "is_date_disabled",
    "validate_date_bounds",
    "validate_range_bounds",
    "validate_range_order",
]
