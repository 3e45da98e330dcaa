from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from rangepick.services.grid.cache import DEFAULT_GRID_CACHE_SIZE
from rangepick.services.grid.highlighter_cache import DEFAULT_HIGHLIGHT_CACHE_SIZE
from rangepick.util.number import coerce_int, parse_positive_int

_DEFAULT_LOCALE = "en-US"


def _section_value(section: Any, name: str) -> Any:
    if section is None:
        return None
    getter = getattr(section, "get", None)
    if callable(getter):
        return getter(name)
    return getattr(section, name, None)


@dataclass(slots=True, frozen=True)
class CoreConfig:
    """Typed view of the settings consumed by :class:`RangeCore`."""

    grid_cache_maxsize: int = DEFAULT_GRID_CACHE_SIZE
    highlight_cache_maxsize: int = DEFAULT_HIGHLIGHT_CACHE_SIZE
    default_locale: str = _DEFAULT_LOCALE
    default_week_start: int | None = None
    fiscal_year_start_month: int | None = None

    @classmethod
    def from_settings(cls, settings: Any) -> "CoreConfig":
        """Construct a :class:`CoreConfig`, falling back to defaults for bad values."""

        cache = settings.get("CACHE")
        locale = settings.get("LOCALE")
        grid = settings.get("GRID")
        presets = settings.get("PRESETS")

        default_locale = str(_section_value(locale, "default") or "").strip()
        return cls(
            grid_cache_maxsize=parse_positive_int(_section_value(cache, "grid_maxsize"))
            or DEFAULT_GRID_CACHE_SIZE,
            highlight_cache_maxsize=parse_positive_int(
                _section_value(cache, "highlight_maxsize")
            )
            or DEFAULT_HIGHLIGHT_CACHE_SIZE,
            default_locale=default_locale or _DEFAULT_LOCALE,
            default_week_start=coerce_int(
                _section_value(grid, "default_week_start"), minimum=0, maximum=6
            ),
            fiscal_year_start_month=coerce_int(
                _section_value(presets, "fiscal_year_start_month"), minimum=1, maximum=12
            ),
        )

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


__all__ = ["CoreConfig"]
