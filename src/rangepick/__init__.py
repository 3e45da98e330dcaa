"""rangepick: calendar grids, range decorations and date presets."""

from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:  # pragma: no cover - import only for static analysis
    from .services.container import RangeCore as RangeCore
else:
    def __getattr__(name: str) -> Any:
        if name == "RangeCore":
            from .services.container import RangeCore

            return RangeCore
        raise AttributeError(name)


__all__ = ["RangeCore"]
