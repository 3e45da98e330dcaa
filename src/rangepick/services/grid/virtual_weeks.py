"""Week windowing for compact layouts that show only part of a month grid."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class VirtualWeekWindow:
    start_index: int
    window_size: int
    total_weeks: int
    can_navigate_up: bool
    can_navigate_down: bool


def clamp_week_start(start_index: int, total_weeks: int, window_size: int) -> int:
    if window_size >= total_weeks:
        return 0
    max_start = total_weeks - window_size
    return max(0, min(start_index, max_start))


def get_visible_weeks(
    weeks: Sequence[T], start_index: int, window_size: int | None
) -> list[T]:
    """Return the slice of ``weeks`` visible in the window.

    ``window_size`` of ``None`` (or one covering every week) disables
    windowing and returns all weeks.
    """

    if not weeks:
        return []
    if window_size is None or window_size >= len(weeks):
        return list(weeks)
    start = clamp_week_start(start_index, len(weeks), window_size)
    return list(weeks[start : start + window_size])


def navigate_week_window(
    current_start: int, direction: int, total_weeks: int, window_size: int
) -> int:
    return clamp_week_start(current_start + direction, total_weeks, window_size)


def get_virtual_week_window(
    start_index: int, total_weeks: int, window_size: int
) -> VirtualWeekWindow:
    start = clamp_week_start(start_index, total_weeks, window_size)
    max_start = max(0, total_weeks - window_size)
    return VirtualWeekWindow(
        start_index=start,
        window_size=window_size,
        total_weeks=total_weeks,
        can_navigate_up=start > 0,
        can_navigate_down=start < max_start,
    )


def is_virtual_weeks_enabled(window_size: int | None, total_weeks: int) -> bool:
    return window_size is not None and window_size < total_weeks


__all__ = [
    "VirtualWeekWindow",
    "clamp_week_start",
    "get_virtual_week_window",
    "get_visible_weeks",
    "is_virtual_weeks_enabled",
    "navigate_week_window",
]
