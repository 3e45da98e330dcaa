"""Helpers for validating runtime configuration."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from rangepick.util.number import coerce_int

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}


def _get_value(settings: Any, dotted: str) -> object | None:
    getter = getattr(settings, "get", None)
    if callable(getter):
        return getter(dotted)
    return None


def _validate_cache_sizes(settings: Any) -> Iterable[str]:
    for dotted in ("CACHE.grid_maxsize", "CACHE.highlight_maxsize"):
        raw = _get_value(settings, dotted)
        if raw is None:
            continue
        value = coerce_int(raw)
        if value is None:
            yield f"{dotted} must be an integer."
        elif value < 1 or value > 10_000:
            yield f"{dotted} must be between 1 and 10000 entries."


def _validate_grid_settings(settings: Any) -> Iterable[str]:
    raw = _get_value(settings, "GRID.default_week_start")
    if raw is None:
        return
    if coerce_int(raw, minimum=0, maximum=6) is None:
        yield "GRID.default_week_start must be an integer between 0 (Sunday) and 6."


def _validate_locale(settings: Any) -> Iterable[str]:
    raw = _get_value(settings, "LOCALE.default")
    if raw is None:
        return
    if not str(raw).strip():
        yield "LOCALE.default must be a non-empty locale tag such as 'en-US'."


def _validate_presets(settings: Any) -> Iterable[str]:
    raw = _get_value(settings, "PRESETS.fiscal_year_start_month")
    if raw is None:
        return
    if coerce_int(raw, minimum=1, maximum=12) is None:
        yield "PRESETS.fiscal_year_start_month must be an integer between 1 and 12."


def _validate_logging(settings: Any) -> Iterable[str]:
    level = str(_get_value(settings, "LOG_LEVEL") or "").strip().upper()
    if level and level not in _LOG_LEVELS:
        yield f"LOG_LEVEL must be one of {', '.join(sorted(_LOG_LEVELS))}."


def validate_settings(settings: Any | None = None) -> list[str]:
    """Return a list of configuration validation error messages."""

    if settings is None:
        from rangepick.settings import settings as app_settings

        settings = app_settings

    errors: list[str] = []
    errors.extend(_validate_cache_sizes(settings))
    errors.extend(_validate_grid_settings(settings))
    errors.extend(_validate_locale(settings))
    errors.extend(_validate_presets(settings))
    errors.extend(_validate_logging(settings))
    return errors


__all__ = ["validate_settings"]
