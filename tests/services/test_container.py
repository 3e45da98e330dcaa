from __future__ import annotations

from datetime import date, datetime

import pytest

from rangepick import RangeCore as LazyRangeCore
from rangepick.services.clock import FixedClock, SystemClock
from rangepick.services.container import RangeCore
from rangepick.services.core_config import CoreConfig
from rangepick.services.dates import NativeDateAdapter
from rangepick.services.presets.plugin import PresetRange


@pytest.fixture
def core(clock: FixedClock) -> RangeCore:
    return RangeCore.create(CoreConfig(), clock=clock)


def test_package_exposes_range_core_lazily() -> None:
    assert LazyRangeCore is RangeCore


def test_create_wires_services_together(core: RangeCore, clock: FixedClock) -> None:
    assert core.clock is clock
    assert isinstance(core.dates, NativeDateAdapter)
    assert core.resolver.registry is core.registry
    assert core.registry.count() == 18
    assert core.grid_cache.maxsize == 24
    assert core.highlighter_cache.maxsize == 48
    assert core.resolver.resolve("TODAY") == PresetRange(start="2026-02-21", end="2026-02-21")


def test_create_honours_config() -> None:
    config = CoreConfig(
        grid_cache_maxsize=3,
        highlight_cache_maxsize=5,
        fiscal_year_start_month=4,
    )

    core = RangeCore.create(config, clock=FixedClock(date(2026, 2, 21)))

    assert core.config is config
    assert core.grid_cache.maxsize == 3
    assert core.highlighter_cache.maxsize == 5
    assert core.registry.count() == 22
    assert core.resolver.resolve("THIS_FISCAL_YEAR") == PresetRange(
        start="2025-04-01", end="2026-03-31"
    )


def test_create_without_builtins() -> None:
    core = RangeCore.create(CoreConfig(), register_builtins=False)

    assert core.registry.count() == 0
    assert isinstance(core.clock, SystemClock)


def test_instances_do_not_share_state(clock: FixedClock) -> None:
    first = RangeCore.create(CoreConfig(), clock=clock)
    second = RangeCore.create(CoreConfig(), clock=clock)

    assert first.registry is not second.registry
    assert first.grid_cache is not second.grid_cache
    assert first.month_grid(datetime(2026, 2, 1)) is not second.month_grid(datetime(2026, 2, 1))


def test_week_start_prefers_configuration_then_locale(clock: FixedClock) -> None:
    core = RangeCore.create(CoreConfig(default_week_start=1), clock=clock)

    assert core.week_start() == 1
    assert core.week_start("en-US") == 0
    assert core.week_start("de-DE") == 1


def test_month_grid_is_cached(clock: FixedClock) -> None:
    core = RangeCore.create(CoreConfig(default_week_start=0), clock=clock)

    grid = core.month_grid(date(2026, 2, 14))

    assert grid is core.month_grid(datetime(2026, 2, 28))
    assert grid.week_start == 0

    core.clear_caches()
    assert core.grid_cache.size() == 0


def test_create_store_returns_fresh_stores(core: RangeCore) -> None:
    first = core.create_store()
    second = core.create_store()

    first.apply_preset("LAST_30_DAYS")

    assert first is not second
    assert first.range.start == "2026-01-23"
    assert second.range.start == ""
    assert core.today() == datetime(2026, 2, 21)


def test_create_reads_application_settings_by_default() -> None:
    core = RangeCore.create(clock=FixedClock(datetime(2026, 2, 21)))

    assert core.registry.has("TODAY")
    assert core.grid_cache.maxsize >= 1
