"""Utility helpers shared across services."""

from .number import coerce_int, parse_positive_int

__all__ = [
    "coerce_int",
    "parse_positive_int",
]
