from __future__ import annotations

import threading
from collections.abc import Iterable
from logging import getLogger

from rangepick.services.presets.plugin import (
    PresetValidationError,
    RangePreset,
    is_range_preset,
)

logger = getLogger(__name__)


def _normalise_key(key: str) -> str:
    return key.strip().upper()


class PresetRegistry:
    """Case-insensitive map of preset keys to plugins.

    Registering a key that already exists replaces the previous plugin and
    logs a warning; this is how applications customise built-ins and how
    tests swap in fakes.
    """

    __slots__ = ("_presets", "_lock")

    def __init__(self, presets: Iterable[RangePreset] | None = None) -> None:
        self._presets: dict[str, RangePreset] = {}
        self._lock = threading.Lock()
        if presets:
            self.register_all(presets)

    def register(self, plugin: RangePreset) -> None:
        if not is_range_preset(plugin):
            raise PresetValidationError(
                "Invalid preset plugin: must have 'key' (str) and 'resolve' "
                f"(callable). Received: {plugin!r}"
            )
        key = _normalise_key(plugin.key)
        if not key:
            raise PresetValidationError("Preset plugin key cannot be empty")

        with self._lock:
            if key in self._presets:
                logger.warning(
                    "Overriding existing preset %r; expected when customising built-ins",
                    key,
                )
            self._presets[key] = plugin

    def register_all(self, plugins: Iterable[RangePreset]) -> None:
        for plugin in plugins:
            self.register(plugin)

    def get(self, key: str) -> RangePreset | None:
        if not isinstance(key, str):
            return None
        return self._presets.get(_normalise_key(key))

    def has(self, key: str) -> bool:
        return isinstance(key, str) and _normalise_key(key) in self._presets

    def get_all(self) -> list[RangePreset]:
        return list(self._presets.values())

    def get_all_keys(self) -> list[str]:
        return list(self._presets)

    def count(self) -> int:
        return len(self._presets)

    def unregister(self, key: str) -> bool:
        if not isinstance(key, str):
            return False
        with self._lock:
            return self._presets.pop(_normalise_key(key), None) is not None

    def clear(self) -> None:
        with self._lock:
            self._presets.clear()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __len__(self) -> int:
        return len(self._presets)


def register_preset_package(
    registry: PresetRegistry, package_name: str, presets: Iterable[RangePreset]
) -> None:
    """Register a named bundle of presets and log what was added."""

    plugins = list(presets)
    registry.register_all(plugins)
    logger.debug(
        "[%s] Registered %d presets: %s",
        package_name,
        len(plugins),
        ", ".join(plugin.key for plugin in plugins),
    )


def register_builtin_presets(registry: PresetRegistry) -> None:
    from rangepick.services.presets.builtin import BUILT_IN_PRESETS

    register_preset_package(registry, "built-in", BUILT_IN_PRESETS)


__all__ = [
    "PresetRegistry",
    "register_builtin_presets",
    "register_preset_package",
]
