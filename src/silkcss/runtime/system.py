"""StyleSystem: registry + runtime cache + config behind one lock."""

from __future__ import annotations

import logging
import threading
from typing import Any, Mapping

from silkcss.config import SilkConfig
from silkcss.layers import LayerClassifier
from silkcss.pipeline import StyleResult, compile_class_name, compile_style
from silkcss.registry import AtomicRegistry
from silkcss.runtime.cache import RuntimeCache, freeze_style
from silkcss.runtime.merge import merge_styles

logger = logging.getLogger(__name__)


class StyleSystem:
    """Long-lived entry point for turning style objects into class strings.

    Safe to call from many threads and under unbounded repeated calls: the
    memo is bounded and every lookup/registration happens under one lock.
    """

    def __init__(
        self, config: SilkConfig | None = None, registry: AtomicRegistry | None = None
    ) -> None:
        if config is None:
            config = registry.config if registry is not None else SilkConfig()
        self.config = config
        self.registry = registry or AtomicRegistry(config)
        self.cache = RuntimeCache(config.cache_size, config.pool_size)
        self._classifier = LayerClassifier(config.layers)
        self._lock = threading.RLock()

    def css(self, *styles: Mapping[str, Any] | None) -> str:
        """Class string for one style object, or several merged left to right."""
        style = styles[0] if len(styles) == 1 and styles[0] else merge_styles(*styles)
        if not style:
            return ""
        key = freeze_style(style)
        with self._lock:
            cached = self.cache.get(key)
            if cached is not None:
                return cached
            class_name, diagnostics = compile_class_name(
                style, self.registry, self.config, pool=self.cache.pool
            )
            for diag in diagnostics:
                if diag.is_warning:
                    logger.debug("%s", diag)
            self.cache.put(key, class_name)
            return class_name

    def compile(self, style: Mapping[str, Any], origin: str | None = None) -> StyleResult:
        """Full result including diagnostics; always runs the pipeline."""
        with self._lock:
            result = compile_style(style, self.registry, self.config, origin)
            self.cache.put(freeze_style(style), result.class_name)
            return result

    def get_css(self, layers: bool | None = None) -> str:
        use_layers = self.config.layers.enabled if layers is None else layers
        with self._lock:
            if not use_layers:
                return self.registry.generate_css()
            rules = self.registry.rules()
        return self._classifier.render(rules, layered=True)

    def stats(self) -> dict[str, Any]:
        with self._lock:
            return {
                "registry": self.registry.get_stats().to_dict(),
                "cache": self.cache.stats().to_dict(),
                "pool": self.cache.pool.stats(),
            }

    def reset(self) -> None:
        with self._lock:
            self.registry.reset()
            self.cache.reset()


_default_system: StyleSystem | None = None
_default_lock = threading.Lock()


def get_default_system() -> StyleSystem:
    """A process-wide convenience instance. Core code never relies on it."""
    global _default_system
    with _default_lock:
        if _default_system is None:
            _default_system = StyleSystem()
        return _default_system


def reset_default_system() -> None:
    global _default_system
    with _default_lock:
        _default_system = None


def css(*styles: Mapping[str, Any] | None) -> str:
    return get_default_system().css(*styles)
