"""Preset plugin contract.

A preset is a named, pure function of ``(clock, dates)`` returning a
:class:`DateRange`. Presets never read ambient time themselves.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from rangepick.services.clock import Clock
    from rangepick.services.dates import DateAdapter


@dataclass(slots=True, frozen=True)
class DateRange:
    start: datetime
    end: datetime


@dataclass(slots=True, frozen=True)
class PresetRange:
    """A resolved preset expressed as ISO ``YYYY-MM-DD`` strings."""

    start: str
    end: str

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


PresetResolve = Callable[["Clock", "DateAdapter"], DateRange]


@dataclass(slots=True, frozen=True)
class RangePreset:
    key: str
    resolve: PresetResolve


class PresetValidationError(ValueError):
    """Raised when an object does not satisfy the preset plugin contract."""


def is_range_preset(candidate: object) -> bool:
    """Return ``True`` if ``candidate`` has a string key and callable resolve."""

    key = getattr(candidate, "key", None)
    resolve = getattr(candidate, "resolve", None)
    return isinstance(key, str) and callable(resolve)


def preset(key: str) -> Callable[[PresetResolve], RangePreset]:
    """Decorate a ``(clock, dates) -> DateRange`` function into a preset."""

    def decorator(func: PresetResolve) -> RangePreset:
        return RangePreset(key=key, resolve=func)

    return decorator


__all__ = [
    "DateRange",
    "PresetRange",
    "PresetResolve",
    "PresetValidationError",
    "RangePreset",
    "is_range_preset",
    "preset",
]
