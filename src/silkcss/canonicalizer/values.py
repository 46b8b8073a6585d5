"""Value normalization: units for numbers, whitespace for strings."""

from __future__ import annotations

from typing import Any

from silkcss.canonicalizer.properties import is_spacing_property, is_unitless_property


def format_number(number: float) -> str:
    """Render a number without exponent or trailing zeros (``0.125``, ``4``)."""
    text = f"{number:.6f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def normalize_number(
    prop: str,
    number: float,
    spacing_multiplier: float,
    spacing_unit: str,
    default_unit: str,
) -> str:
    if number == 0:
        return "0"
    if is_unitless_property(prop):
        return format_number(number)
    if is_spacing_property(prop):
        return format_number(number * spacing_multiplier) + spacing_unit
    return format_number(number) + default_unit


def normalize_string(text: str) -> str:
    return " ".join(text.split())


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
