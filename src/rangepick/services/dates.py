"""Timezone-safe, day-level date primitives.

Every value handled here is a naive :class:`~datetime.datetime` in local
wall-clock time. Nothing is ever converted to or from UTC: ISO strings are
assembled from the local year/month/day fields and parsed back into the same
fields, so a late-evening timestamp can never drift into the next or previous
day. ``date`` inputs are accepted everywhere and treated as local midnight.
"""

from __future__ import annotations

import calendar as _calendar
import locale as _locale
import re
from datetime import date, datetime, time, timedelta
from logging import getLogger
from typing import Protocol, runtime_checkable

logger = getLogger(__name__)

DateLike = datetime | date

_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$", re.ASCII)
_END_OF_DAY = time(23, 59, 59, 999_000)
_FALLBACK_LOCALE = "en-US"

# Locales whose calendars start the week on Monday. Matched as
# case-insensitive prefixes, so "de" covers "de-LU" as well.
MONDAY_START_LOCALES: tuple[str, ...] = (
    "en-GB", "en-IE", "en-AU", "en-NZ", "en-CA",
    "es", "es-ES", "es-MX",
    "fr", "fr-FR", "fr-CA",
    "de", "de-DE", "de-AT", "de-CH",
    "it", "it-IT",
    "pt", "pt-PT", "pt-BR",
    "nl", "nl-NL", "nl-BE",
    "ru", "ru-RU",
    "zh", "zh-CN", "zh-TW",
    "ja", "ja-JP",
    "ko", "ko-KR",
)


@runtime_checkable
class DateAdapter(Protocol):
    """Day-level date operations used by grids, highlighters and presets."""

    def normalize(self, value: DateLike) -> datetime: ...

    def is_same_day(self, a: DateLike, b: DateLike) -> bool: ...

    def is_before_day(self, a: DateLike, b: DateLike) -> bool: ...

    def is_after_day(self, a: DateLike, b: DateLike) -> bool: ...

    def add_days(self, value: DateLike, days: int) -> datetime: ...

    def add_months(self, value: DateLike, months: int) -> datetime: ...

    def start_of_day(self, value: DateLike) -> datetime: ...

    def end_of_day(self, value: DateLike) -> datetime: ...

    def start_of_month(self, value: DateLike) -> datetime: ...

    def end_of_month(self, value: DateLike) -> datetime: ...

    def get_year(self, value: DateLike) -> int: ...

    def get_month(self, value: DateLike) -> int: ...

    def get_date(self, value: DateLike) -> int: ...

    def get_day(self, value: DateLike) -> int: ...

    def days_in_month(self, year: int, month: int) -> int: ...

    def to_iso_date(self, value: DateLike | None) -> str: ...

    def parse_iso_date(self, value: object) -> datetime | None: ...

    def get_week_start(self, locale: str | None = None) -> int: ...


def _as_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def ambient_locale() -> str | None:
    """Return the process locale as a BCP 47-ish tag (``en-US``), if any."""

    try:
        language, _encoding = _locale.getlocale()
    except ValueError:
        logger.debug("Unable to read the process locale", exc_info=True)
        return None
    if not language or language in {"C", "POSIX"}:
        return None
    return language.replace("_", "-")


class NativeDateAdapter:
    """Default :class:`DateAdapter` backed by the standard library.

    Months are 0-based (January is ``0``) and weekdays are Sunday-based
    (Sunday is ``0``) so grid cells and preset arithmetic share one
    convention.
    """

    __slots__ = ("_default_locale",)

    def __init__(self, default_locale: str | None = None) -> None:
        self._default_locale = default_locale or _FALLBACK_LOCALE

    def normalize(self, value: DateLike) -> datetime:
        return datetime.combine(_as_datetime(value).date(), time.min)

    def is_same_day(self, a: DateLike, b: DateLike) -> bool:
        return (a.year, a.month, a.day) == (b.year, b.month, b.day)

    def is_before_day(self, a: DateLike, b: DateLike) -> bool:
        return self.normalize(a) < self.normalize(b)

    def is_after_day(self, a: DateLike, b: DateLike) -> bool:
        return self.normalize(a) > self.normalize(b)

    def add_days(self, value: DateLike, days: int) -> datetime:
        return self.normalize(value) + timedelta(days=days)

    def add_months(self, value: DateLike, months: int) -> datetime:
        """Shift by calendar months, clamping to the target month's last day.

        Jan 31 + 1 month is Feb 28 (Feb 29 in leap years), never Mar 3.
        """

        total = value.year * 12 + (value.month - 1) + months
        year, month_index = divmod(total, 12)
        month = month_index + 1
        day = min(value.day, self.days_in_month(year, month_index))
        return datetime(year, month, day)

    def start_of_day(self, value: DateLike) -> datetime:
        return self.normalize(value)

    def end_of_day(self, value: DateLike) -> datetime:
        return datetime.combine(_as_datetime(value).date(), _END_OF_DAY)

    def start_of_month(self, value: DateLike) -> datetime:
        return datetime(value.year, value.month, 1)

    def end_of_month(self, value: DateLike) -> datetime:
        last_day = self.days_in_month(value.year, value.month - 1)
        return datetime.combine(date(value.year, value.month, last_day), _END_OF_DAY)

    def get_year(self, value: DateLike) -> int:
        return value.year

    def get_month(self, value: DateLike) -> int:
        return value.month - 1

    def get_date(self, value: DateLike) -> int:
        return value.day

    def get_day(self, value: DateLike) -> int:
        # date.weekday() is Monday-based; shift so Sunday is 0.
        return (value.weekday() + 1) % 7

    def days_in_month(self, year: int, month: int) -> int:
        """Return the number of days in 0-based ``month`` of ``year``."""

        return _calendar.monthrange(year, month + 1)[1]

    def to_iso_date(self, value: DateLike | None) -> str:
        if value is None:
            return ""
        return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"

    def parse_iso_date(self, value: object) -> datetime | None:
        """Parse ``YYYY-MM-DD`` into local midnight, or ``None`` if invalid.

        Impossible dates such as ``2026-02-31`` or ``2026-13-01`` are
        rejected instead of rolling over into the next month.
        """

        if not isinstance(value, str) or not value:
            return None
        match = _ISO_DATE_RE.match(value.strip())
        if match is None:
            return None
        year, month, day = (int(part) for part in match.groups())
        try:
            return datetime(year, month, day)
        except ValueError:
            return None

    def get_week_start(self, locale: str | None = None) -> int:
        """Return ``1`` for Monday-start locales and ``0`` (Sunday) otherwise."""

        tag = locale or ambient_locale() or self._default_locale
        normalized = tag.replace("_", "-").lower()
        for candidate in MONDAY_START_LOCALES:
            if normalized.startswith(candidate.lower()):
                return 1
        return 0


__all__ = [
    "DateAdapter",
    "DateLike",
    "MONDAY_START_LOCALES",
    "NativeDateAdapter",
    "ambient_locale",
]
