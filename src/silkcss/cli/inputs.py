"""Shared input handling for CLI commands."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from silkcss.config import SilkConfig, load_config
from silkcss.errors import ConfigError


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def resolve_config(config_path: str | None) -> SilkConfig:
    return load_config(config_path) if config_path else SilkConfig()


def load_style_items(path: str | Path) -> list[tuple[dict[str, Any], str]]:
    """Read ``(style, origin)`` pairs from a JSON file.

    Accepts either a list of ``{"style": ..., "origin": ...}`` objects or a
    mapping of origin to style object. List entries without an origin get
    ``<file>#<index>``.
    """
    source = Path(path)
    try:
        data = json.loads(source.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Cannot read styles from {source}: {exc}") from exc

    items: list[tuple[dict[str, Any], str]] = []
    if isinstance(data, dict):
        for origin, style in data.items():
            if not isinstance(style, dict):
                raise ConfigError(f"Style for {origin!r} must be an object")
            items.append((style, str(origin)))
        return items
    if not isinstance(data, list):
        raise ConfigError(f"{source} must hold a list or an object of styles")

    for index, entry in enumerate(data):
        if not isinstance(entry, dict) or not isinstance(entry.get("style"), dict):
            raise ConfigError(f"Entry {index} in {source} needs a 'style' object")
        origin = entry.get("origin") or f"{source.name}#{index}"
        items.append((entry["style"], str(origin)))
    return items
