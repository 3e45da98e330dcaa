from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from dynaconf import Dynaconf

PACKAGE_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = PACKAGE_DIR.parent


def _resolve_config_dir() -> Path | None:
    env_override = os.environ.get("RANGEPICK_CONFIG_DIR")
    candidates: list[Path] = []

    if env_override:
        candidates.append(Path(env_override).expanduser())

    candidates.append(PROJECT_ROOT / "config")
    candidates.append(PROJECT_ROOT.parent / "config")

    for candidate in candidates:
        expanded = candidate.expanduser()
        if expanded.is_dir():
            return expanded.resolve()

    if env_override:
        raise RuntimeError(
            f"Unable to locate configuration directory {env_override!r}. "
            "Set RANGEPICK_CONFIG_DIR to a valid directory."
        )
    # Library use without a config directory runs on DEFAULTS alone.
    return None


CONFIG_DIR = _resolve_config_dir()

DEFAULTS: dict[str, Any] = {
    "APP_NAME": "rangepick",
    "LOG_LEVEL": "INFO",
    "LOCALE": {
        "default": "en-US",
    },
    "GRID": {
        "default_week_start": None,
    },
    "CACHE": {
        "grid_maxsize": 24,
        "highlight_maxsize": 48,
    },
    "PRESETS": {
        "fiscal_year_start_month": None,
    },
}


def _settings_files() -> list[Path]:
    if CONFIG_DIR is None:
        return []
    return [
        CONFIG_DIR / "settings.toml",
        CONFIG_DIR / ".secrets.toml",
        CONFIG_DIR / "settings.local.toml",
    ]


settings = Dynaconf(
    envvar_prefix="RANGEPICK",
    settings_files=_settings_files(),
    environments=True,
    env_switcher="RANGEPICK_ENV",
    load_dotenv=True,
    envvar_parse_values=True,
    merge_enabled=True,
    defaults=DEFAULTS,
)


_MISSING = object()


def _ensure_defaults(prefix: str, defaults: dict[str, Any]) -> None:
    for key, value in defaults.items():
        dotted = f"{prefix}.{key}" if prefix else key
        existing = settings.get(dotted, _MISSING)

        if isinstance(value, dict):
            if existing is _MISSING:
                settings.set(dotted, value.copy())
                existing = settings.get(dotted, _MISSING)
            # Only recurse into mappings so user-provided primitives survive.
            if isinstance(existing, Mapping):
                _ensure_defaults(dotted, value)
            continue

        if existing is _MISSING:
            settings.set(dotted, value)


_ensure_defaults("", DEFAULTS)


def _normalise_log_level() -> None:
    level = str(settings.get("LOG_LEVEL") or "INFO").strip().upper()
    settings.set("LOG_LEVEL", level or "INFO")


_normalise_log_level()

__all__ = ["settings", "DEFAULTS", "CONFIG_DIR"]
