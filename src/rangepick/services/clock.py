"""Injectable sources of "now".

Preset resolution reads the current time only through a :class:`Clock`, so
two processes given the same fixed clock produce byte-identical ranges.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Clock backed by the local wall-clock time."""

    __slots__ = ()

    def now(self) -> datetime:
        return datetime.now()

    def __repr__(self) -> str:
        return "SystemClock()"


class FixedClock:
    """Clock frozen at a constructor-supplied instant.

    ``datetime`` values are immutable, so handing out the stored value
    cannot leak mutations between callers.
    """

    __slots__ = ("_value",)

    def __init__(self, value: datetime | date) -> None:
        if isinstance(value, datetime):
            self._value = value
        else:
            self._value = datetime(value.year, value.month, value.day)

    def now(self) -> datetime:
        return self._value

    def __repr__(self) -> str:
        return f"FixedClock({self._value.isoformat()!r})"


def as_clock(value: Clock | datetime | date) -> Clock:
    """Return ``value`` unchanged if it is a clock, else freeze it."""

    if isinstance(value, (datetime, date)):
        return FixedClock(value)
    return value


__all__ = ["Clock", "FixedClock", "SystemClock", "as_clock"]
