from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any

import pytest
from dynaconf import Dynaconf

from rangepick.services.clock import FixedClock
from rangepick.services.dates import NativeDateAdapter
from rangepick.services.grid.factory import CalendarGridFactory
from rangepick.services.grid.types import CalendarGrid
from rangepick.services.presets.registry import PresetRegistry, register_builtin_presets
from rangepick.services.presets.resolver import PresetResolver

# Saturday, a fixed point every preset scenario is written against.
NOW = datetime(2026, 2, 21, 15, 45)


@pytest.fixture
def dates() -> NativeDateAdapter:
    return NativeDateAdapter(default_locale="en-US")


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def registry() -> PresetRegistry:
    registry = PresetRegistry()
    register_builtin_presets(registry)
    return registry


@pytest.fixture
def resolver(
    registry: PresetRegistry, dates: NativeDateAdapter, clock: FixedClock
) -> PresetResolver:
    return PresetResolver(registry, dates, clock)


@pytest.fixture
def february_grid(dates: NativeDateAdapter) -> CalendarGrid:
    return CalendarGridFactory(dates).create_grid(datetime(2026, 2, 1), 0)


@pytest.fixture
def make_settings() -> Callable[..., Dynaconf]:
    def factory(**values: Any) -> Dynaconf:
        settings = Dynaconf(envvar_prefix="RANGEPICK_TEST")
        for key, value in values.items():
            settings.set(key, value)
        return settings

    return factory
