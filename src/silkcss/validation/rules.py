"""Validation rules for style leaves.

Each rule is a function taking a property key, its raw value and the key path,
and returning a list of Diagnostic objects describing any issues found. An
ERROR from any rule means the leaf cannot be canonicalized and is dropped.
"""

from __future__ import annotations

import math
import re
from typing import Any

from silkcss.model.diagnostic import Diagnostic, Severity

_PROPERTY_RE = re.compile(r"^(--[A-Za-z0-9_-]+|-?[A-Za-z][A-Za-z0-9-]*)$")
_FORBIDDEN_RE = re.compile(r"[{};\x00-\x1f\x7f]")

SCALAR_TYPES = (str, int, float)


def _is_scalar(value: Any) -> bool:
    return isinstance(value, SCALAR_TYPES) and not isinstance(value, bool)


def _items(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


# ---------------------------------------------------------------------------
# Key rules
# ---------------------------------------------------------------------------


def check_property_name(key: str, value: Any, path: str) -> list[Diagnostic]:
    """Property keys must look like CSS identifiers (camel, kebab or --custom)."""
    if _PROPERTY_RE.match(key):
        return []
    return [
        Diagnostic(
            rule="check_property_name",
            severity=Severity.ERROR,
            message=f"Unsupported property key {key!r}.",
            key_path=path,
            fix="Use a camelCase, kebab-case or --custom property name.",
        )
    ]


# ---------------------------------------------------------------------------
# Value rules
# ---------------------------------------------------------------------------


def check_value_type(key: str, value: Any, path: str) -> list[Diagnostic]:
    """Values are strings, numbers or flat lists of them."""
    items = _items(value)
    if isinstance(value, (list, tuple)) and not items:
        return [
            Diagnostic(
                rule="check_value_type",
                severity=Severity.ERROR,
                message=f"Property {key!r} has an empty list value.",
                key_path=path,
            )
        ]
    bad = [item for item in items if not _is_scalar(item)]
    if not bad:
        return []
    return [
        Diagnostic(
            rule="check_value_type",
            severity=Severity.ERROR,
            message=(
                f"Property {key!r} has a value of type {type(bad[0]).__name__} "
                "that cannot be normalized."
            ),
            key_path=path,
            fix="Use a string or a number.",
        )
    ]


def check_finite_number(key: str, value: Any, path: str) -> list[Diagnostic]:
    """Numbers must be finite floats once converted; huge ints overflow."""
    for item in _items(value):
        if not _is_scalar(item) or isinstance(item, str):
            continue
        try:
            finite = math.isfinite(float(item))
        except OverflowError:
            finite = False
        if not finite:
            return [
                Diagnostic(
                    rule="check_finite_number",
                    severity=Severity.ERROR,
                    message=f"Property {key!r} has a number that is not finite or is too large.",
                    key_path=path,
                )
            ]
    return []


def check_value_characters(key: str, value: Any, path: str) -> list[Diagnostic]:
    """Braces, semicolons and control characters would break rule text."""
    for item in _items(value):
        if isinstance(item, str) and _FORBIDDEN_RE.search(item):
            return [
                Diagnostic(
                    rule="check_value_characters",
                    severity=Severity.ERROR,
                    message=f"Property {key!r} value {item!r} contains '{{', '}}', ';' "
                    "or a control character.",
                    key_path=path,
                    fix="Remove the character; values must be a single declaration.",
                )
            ]
    return []


def check_empty_value(key: str, value: Any, path: str) -> list[Diagnostic]:
    for item in _items(value):
        if isinstance(item, str) and not item.strip():
            return [
                Diagnostic(
                    rule="check_empty_value",
                    severity=Severity.ERROR,
                    message=f"Property {key!r} has an empty value.",
                    key_path=path,
                    fix="Use None to omit a property.",
                )
            ]
    return []


ALL_RULES = [
    check_property_name,
    check_value_type,
    check_finite_number,
    check_value_characters,
    check_empty_value,
]
