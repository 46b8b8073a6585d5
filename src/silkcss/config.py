"""Configuration for the style pipeline.

All settings that influence identifiers or rule text live here so that every
invocation site (build-time transform, runtime fallback, offline generator)
can share one frozen value and produce byte-identical output.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

from silkcss.errors import ConfigError


class NamingMode(Enum):
    """How identifiers are formatted from the underlying hash."""

    VERBOSE = "verbose"
    COMPACT = "compact"


DEFAULT_PREFIXES: dict[NamingMode, str] = {
    NamingMode.VERBOSE: "silk",
    NamingMode.COMPACT: "s",
}

DEFAULT_BREAKPOINTS: dict[str, str] = {
    "sm": "640px",
    "md": "768px",
    "lg": "1024px",
    "xl": "1280px",
    "2xl": "1536px",
}

DEFAULT_PSEUDO_SELECTORS: dict[str, str] = {
    "_hover": ":hover",
    "_focus": ":focus",
    "_active": ":active",
    "_disabled": ":disabled",
    "_visited": ":visited",
    "_focusVisible": ":focus-visible",
    "_focusWithin": ":focus-within",
    "_checked": ":checked",
    "_before": "::before",
    "_after": "::after",
    "_placeholder": "::placeholder",
    "_selection": "::selection",
    "_first": ":first-child",
    "_last": ":last-child",
    "_odd": ":nth-child(odd)",
    "_even": ":nth-child(even)",
}

DEFAULT_LAYER_ORDER: tuple[str, ...] = ("reset", "tokens", "base", "utilities", "overrides")

# A small default design-token set; opt in with SilkConfig(tokens=DEFAULT_THEME).
DEFAULT_THEME: dict[str, Any] = {
    "colors": {
        "white": "#ffffff",
        "black": "#000000",
        "gray": {"100": "#f3f4f6", "500": "#6b7280", "900": "#111827"},
        "red": {"500": "#ef4444", "600": "#dc2626"},
        "blue": {"500": "#3b82f6", "600": "#2563eb"},
        "green": {"500": "#22c55e"},
    },
    "spacing": {"1": "0.25rem", "2": "0.5rem", "4": "1rem", "8": "2rem"},
    "fontSizes": {
        "xs": "0.75rem",
        "sm": "0.875rem",
        "base": "1rem",
        "lg": "1.125rem",
        "xl": "1.25rem",
    },
    "fontWeights": {"normal": 400, "medium": 500, "semibold": 600, "bold": 700},
    "lineHeights": {"tight": 1.25, "normal": 1.5, "loose": 2},
    "radii": {"sm": "0.125rem", "md": "0.375rem", "lg": "0.5rem", "full": "9999px"},
    "shadows": {
        "sm": "0 1px 2px 0 rgb(0 0 0 / 0.05)",
        "md": "0 4px 6px -1px rgb(0 0 0 / 0.1)",
        "lg": "0 10px 15px -3px rgb(0 0 0 / 0.1)",
    },
}


@dataclass(frozen=True)
class LayerConfig:
    """Cascade layer settings."""

    enabled: bool = True
    order: tuple[str, ...] = DEFAULT_LAYER_ORDER
    catch_all: str = "overrides"


@dataclass(frozen=True)
class CriticalConfig:
    """Critical CSS partitioning settings."""

    enabled: bool = True
    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()
    auto_detect: bool = True
    inline: bool = True
    defer: bool = True


@dataclass(frozen=True)
class SilkConfig:
    """Top-level pipeline configuration."""

    naming: NamingMode = NamingMode.VERBOSE
    prefix: str | None = None
    spacing_multiplier: float = 0.25
    spacing_unit: str = "rem"
    default_unit: str = "px"
    breakpoints: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_BREAKPOINTS))
    pseudo_selectors: dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_PSEUDO_SELECTORS)
    )
    tokens: dict[str, Any] = field(default_factory=dict)
    verify_hashes: bool = True
    cache_size: int = 1024
    pool_size: int = 16
    layers: LayerConfig = field(default_factory=LayerConfig)
    critical: CriticalConfig = field(default_factory=CriticalConfig)

    def __post_init__(self) -> None:
        if self.spacing_multiplier <= 0:
            raise ConfigError("spacing_multiplier must be positive")
        if self.cache_size < 1:
            raise ConfigError("cache_size must be at least 1")
        if self.pool_size < 0:
            raise ConfigError("pool_size must not be negative")
        if self.layers.catch_all not in self.layers.order:
            raise ConfigError(
                f"catch-all layer {self.layers.catch_all!r} is not in the layer order"
            )

    @property
    def effective_prefix(self) -> str:
        """The prefix in use: the explicit one or the mode default."""
        if self.prefix is not None:
            return self.prefix
        return DEFAULT_PREFIXES[self.naming]

    def naming_signature(self) -> dict[str, str]:
        """The settings an exported registry must agree with to be merged."""
        return {"naming": self.naming.value, "prefix": self.effective_prefix}

    def with_overrides(self, **changes: Any) -> SilkConfig:
        return replace(self, **changes)

    # --- (de)serialization ----------------------------------------------------

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SilkConfig:
        """Build a config from plain JSON-style data.

        Unknown keys raise :class:`ConfigError` rather than being ignored.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config key(s): {', '.join(unknown)}")

        kwargs: dict[str, Any] = dict(data)
        if "naming" in kwargs:
            try:
                kwargs["naming"] = NamingMode(kwargs["naming"])
            except ValueError as exc:
                raise ConfigError(f"Invalid naming mode: {kwargs['naming']!r}") from exc
        if "layers" in kwargs:
            kwargs["layers"] = _sub_config(LayerConfig, kwargs["layers"], "layers")
        if "critical" in kwargs:
            kwargs["critical"] = _sub_config(CriticalConfig, kwargs["critical"], "critical")
        for name in ("breakpoints", "pseudo_selectors", "tokens"):
            if name in kwargs and not isinstance(kwargs[name], Mapping):
                raise ConfigError(f"{name} must be a mapping")
            if name in kwargs:
                kwargs[name] = dict(kwargs[name])
        try:
            return cls(**kwargs)
        except TypeError as exc:
            raise ConfigError(str(exc)) from exc

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["naming"] = self.naming.value
        data["layers"]["order"] = list(self.layers.order)
        for key in ("include", "exclude"):
            data["critical"][key] = list(data["critical"][key])
        return data


def _sub_config(cls: type, raw: Any, name: str) -> Any:
    if not isinstance(raw, Mapping):
        raise ConfigError(f"{name} must be a mapping")
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"Unknown {name} key(s): {', '.join(unknown)}")
    values = {
        key: tuple(value) if isinstance(value, list) else value
        for key, value in raw.items()
    }
    return cls(**values)


def load_config(path: str | Path) -> SilkConfig:
    """Load a :class:`SilkConfig` from a JSON file."""
    config_path = Path(path)
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Cannot read config {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must contain a JSON object")
    return SilkConfig.from_dict(data)
