"""Preset plugins, their registry and the resolver."""

from .builtin import BUILT_IN_PRESETS, last_n_days
from .fiscal import fiscal_presets
from .plugin import (
    DateRange,
    PresetRange,
    PresetValidationError,
    RangePreset,
    is_range_preset,
    preset,
)
from .registry import PresetRegistry, register_builtin_presets, register_preset_package
from .resolver import PresetResolver

__all__ = [
    "BUILT_IN_PRESETS",
    "DateRange",
    "PresetRange",
    "PresetRegistry",
    "PresetResolver",
    "PresetValidationError",
    "RangePreset",
    "fiscal_presets",
    "is_range_preset",
    "last_n_days",
    "preset",
    "register_builtin_presets",
    "register_preset_package",
]
