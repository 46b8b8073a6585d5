"""Merging several style objects into one."""

from __future__ import annotations

from typing import Any, Mapping


def merge_styles(*styles: Mapping[str, Any] | None) -> dict[str, Any]:
    """Deep-merge style objects left to right; later values win.

    Falsy arguments (``None``, ``{}``, ``False`` from ``cond and style``) are
    skipped so conditional styles can be passed inline.
    """
    merged: dict[str, Any] = {}
    for style in styles:
        if not style:
            continue
        for key, value in style.items():
            current = merged.get(key)
            if isinstance(value, Mapping) and isinstance(current, Mapping):
                merged[key] = merge_styles(current, value)
            elif isinstance(value, Mapping):
                merged[key] = merge_styles(value)
            else:
                merged[key] = value
    return merged
