"""Small helpers for numeric parsing."""

from __future__ import annotations


def coerce_int(
    value: object | None,
    *,
    default: int | None = None,
    minimum: int | None = None,
    maximum: int | None = None,
) -> int | None:
    """Return an int parsed from ``value`` or ``default`` when invalid."""

    if value is None or isinstance(value, bool):
        return default
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    if minimum is not None and parsed < minimum:
        return default
    if maximum is not None and parsed > maximum:
        return default
    return parsed


def parse_positive_int(value: object | None) -> int | None:
    """Return a positive integer from ``value``, or ``None`` if invalid."""

    return coerce_int(value, minimum=1)


__all__ = [
    "coerce_int",
    "parse_positive_int",
]
