from __future__ import annotations

import logging
from datetime import date, datetime

import pytest

from rangepick.services.clock import FixedClock
from rangepick.services.dates import NativeDateAdapter
from rangepick.services.presets.fiscal import fiscal_presets
from rangepick.services.presets.plugin import PresetRange
from rangepick.services.presets.registry import PresetRegistry, register_builtin_presets
from rangepick.services.presets.resolver import PresetResolver


@pytest.mark.parametrize(
    ("key", "start", "end"),
    [
        ("TODAY", "2026-02-21", "2026-02-21"),
        ("YESTERDAY", "2026-02-20", "2026-02-20"),
        ("LAST_7_DAYS", "2026-02-15", "2026-02-21"),
        ("LAST_14_DAYS", "2026-02-08", "2026-02-21"),
        ("LAST_30_DAYS", "2026-01-23", "2026-02-21"),
        ("LAST_60_DAYS", "2025-12-24", "2026-02-21"),
        ("LAST_90_DAYS", "2025-11-24", "2026-02-21"),
        ("THIS_WEEK", "2026-02-16", "2026-02-22"),
        ("LAST_WEEK", "2026-02-09", "2026-02-15"),
        ("THIS_MONTH", "2026-02-01", "2026-02-28"),
        ("LAST_MONTH", "2026-01-01", "2026-01-31"),
        ("MONTH_TO_DATE", "2026-02-01", "2026-02-21"),
        ("THIS_QUARTER", "2026-01-01", "2026-03-31"),
        ("LAST_QUARTER", "2025-10-01", "2025-12-31"),
        ("QUARTER_TO_DATE", "2026-01-01", "2026-02-21"),
        ("THIS_YEAR", "2026-01-01", "2026-12-31"),
        ("LAST_YEAR", "2025-01-01", "2025-12-31"),
        ("YEAR_TO_DATE", "2026-01-01", "2026-02-21"),
    ],
)
def test_builtin_presets_resolve_against_fixed_now(
    resolver: PresetResolver, key: str, start: str, end: str
) -> None:
    assert resolver.resolve(key) == PresetRange(start=start, end=end)


def test_this_week_on_sunday_still_starts_monday(resolver: PresetResolver) -> None:
    resolved = resolver.resolve("THIS_WEEK", datetime(2026, 2, 22, 9))

    assert resolved == PresetRange(start="2026-02-16", end="2026-02-22")


def test_last_quarter_mid_year(resolver: PresetResolver) -> None:
    resolved = resolver.resolve("LAST_QUARTER", date(2026, 8, 14))

    assert resolved == PresetRange(start="2026-04-01", end="2026-06-30")


def test_leap_year_last_month(resolver: PresetResolver) -> None:
    resolved = resolver.resolve("LAST_MONTH", date(2024, 3, 31))

    assert resolved == PresetRange(start="2024-02-01", end="2024-02-29")


def test_resolve_is_case_insensitive(resolver: PresetResolver) -> None:
    assert resolver.resolve("last_7_days") == resolver.resolve("LAST_7_DAYS")


def test_unknown_preset_logs_warning_and_returns_none(
    resolver: PresetResolver, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING):
        assert resolver.resolve("NEXT_CENTURY") is None

    assert "Preset 'NEXT_CENTURY' not found in registry" in caplog.text


@pytest.mark.parametrize("key", [None, 42])
def test_non_string_keys_resolve_to_none(
    resolver: PresetResolver, key: object, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING):
        assert resolver.resolve(key) is None  # type: ignore[arg-type]

    assert "not found in registry" in caplog.text
    assert not resolver.has_preset(key)  # type: ignore[arg-type]


def test_now_override_applies_to_a_single_call(resolver: PresetResolver) -> None:
    overridden = resolver.resolve("TODAY", date(2025, 12, 31))
    default = resolver.resolve("TODAY")

    assert overridden == PresetRange(start="2025-12-31", end="2025-12-31")
    assert default == PresetRange(start="2026-02-21", end="2026-02-21")


def test_now_override_accepts_a_clock(resolver: PresetResolver) -> None:
    resolved = resolver.resolve("YESTERDAY", FixedClock(datetime(2026, 1, 1, 0, 5)))

    assert resolved == PresetRange(start="2025-12-31", end="2025-12-31")


def test_resolution_is_deterministic_across_instances() -> None:
    moment = datetime(2026, 2, 21, 23, 59, 59)

    def build() -> PresetResolver:
        registry = PresetRegistry()
        register_builtin_presets(registry)
        return PresetResolver(registry, NativeDateAdapter(), FixedClock(moment))

    first, second = build(), build()

    for key in first.preset_keys():
        assert first.resolve(key) == second.resolve(key)
        assert first.resolve(key) == first.resolve(key)


def test_preset_keys_and_has_preset(resolver: PresetResolver) -> None:
    assert len(resolver.preset_keys()) == 18
    assert resolver.has_preset("this_month")
    assert not resolver.has_preset("THIS_DECADE")


def test_resolved_range_as_dict(resolver: PresetResolver) -> None:
    resolved = resolver.resolve("TODAY")

    assert resolved is not None
    assert resolved.as_dict() == {"start": "2026-02-21", "end": "2026-02-21"}


@pytest.mark.parametrize(
    ("key", "start", "end"),
    [
        ("THIS_FISCAL_YEAR", "2025-04-01", "2026-03-31"),
        ("FISCAL_YEAR_TO_DATE", "2025-04-01", "2026-02-21"),
        ("THIS_FISCAL_QUARTER", "2026-01-01", "2026-03-31"),
        ("LAST_FISCAL_QUARTER", "2025-10-01", "2025-12-31"),
    ],
)
def test_fiscal_presets_with_april_start(
    registry: PresetRegistry,
    dates: NativeDateAdapter,
    clock: FixedClock,
    key: str,
    start: str,
    end: str,
) -> None:
    registry.register_all(fiscal_presets(4))
    resolver = PresetResolver(registry, dates, clock)

    assert resolver.resolve(key) == PresetRange(start=start, end=end)


def test_fiscal_year_in_second_half(
    registry: PresetRegistry, dates: NativeDateAdapter
) -> None:
    registry.register_all(fiscal_presets(4))
    resolver = PresetResolver(registry, dates, FixedClock(datetime(2026, 5, 2)))

    assert resolver.resolve("THIS_FISCAL_YEAR") == PresetRange(
        start="2026-04-01", end="2027-03-31"
    )
    assert resolver.resolve("THIS_FISCAL_QUARTER") == PresetRange(
        start="2026-04-01", end="2026-06-30"
    )
    assert resolver.resolve("LAST_FISCAL_QUARTER") == PresetRange(
        start="2026-01-01", end="2026-03-31"
    )


def test_january_fiscal_year_matches_calendar_year(
    registry: PresetRegistry, resolver: PresetResolver
) -> None:
    registry.register_all(fiscal_presets(1))

    assert resolver.resolve("THIS_FISCAL_YEAR") == resolver.resolve("THIS_YEAR")
    assert resolver.resolve("THIS_FISCAL_QUARTER") == resolver.resolve("THIS_QUARTER")


@pytest.mark.parametrize("start_month", [0, 13])
def test_fiscal_presets_reject_invalid_start_month(start_month: int) -> None:
    with pytest.raises(ValueError):
        fiscal_presets(start_month)
