"""Pipeline: style object -> class string, plus batch and packaging seams.

The three call sites (ahead-of-time transform, runtime fallback, offline
build) share one canonicalize, optimize and register path, which is what
keeps their identifiers and rule text byte-identical.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Union

from silkcss.canonicalizer import CanonicalResult, Canonicalizer
from silkcss.config import SilkConfig
from silkcss.critical import CriticalPartitioner, Partition
from silkcss.errors import ConfigError
from silkcss.layers import LayerClassifier
from silkcss.model.declaration import Declaration
from silkcss.model.diagnostic import Diagnostic
from silkcss.model.rule import CSSRule
from silkcss.optimizer import OptimizationResult, Optimizer
from silkcss.parser import parse_rules
from silkcss.registry import AtomicRegistry, RegistryStats

if TYPE_CHECKING:
    from silkcss.runtime.pool import ObjectPool

logger = logging.getLogger(__name__)


@dataclass
class StyleResult:
    """Outcome of compiling one style object.

    ``resolved`` means every key became a declaration. Otherwise the result
    is ``partial`` and ``unresolved_keys`` names the key paths the caller
    must handle some other way (for example at runtime).
    """

    class_name: str = ""
    identifiers: list[str] = field(default_factory=list)
    declarations: list[Declaration] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    unresolved_keys: list[str] = field(default_factory=list)
    origin: str | None = None
    merged: int = 0

    @property
    def resolved(self) -> bool:
        return not self.unresolved_keys

    @property
    def partial(self) -> bool:
        return bool(self.unresolved_keys)

    def to_dict(self) -> dict[str, Any]:
        return {
            "origin": self.origin,
            "class_name": self.class_name,
            "identifiers": list(self.identifiers),
            "resolved": self.resolved,
            "unresolved_keys": list(self.unresolved_keys),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


@dataclass
class UnitResult:
    """All style objects of one compilation unit."""

    results: list[StyleResult] = field(default_factory=list)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return [d for result in self.results for d in result.diagnostics]

    @property
    def resolved(self) -> bool:
        return all(result.resolved for result in self.results)

    @property
    def partial_results(self) -> list[StyleResult]:
        return [result for result in self.results if result.partial]


def compile_style(
    style: Mapping[str, Any],
    registry: AtomicRegistry,
    config: SilkConfig | None = None,
    origin: str | None = None,
) -> StyleResult:
    """Canonicalize, optimize and register *style*; return its class string."""
    canonical, optimized = _optimize(style, config or registry.config, origin)
    identifiers = registry.register_atoms(optimized.declarations)
    return StyleResult(
        class_name=" ".join(identifiers),
        identifiers=identifiers,
        declarations=optimized.declarations,
        diagnostics=canonical.diagnostics,
        unresolved_keys=canonical.unresolved_keys,
        origin=origin,
        merged=optimized.merged,
    )


def compile_class_name(
    style: Mapping[str, Any],
    registry: AtomicRegistry,
    config: SilkConfig | None = None,
    pool: ObjectPool | None = None,
) -> tuple[str, list[Diagnostic]]:
    """Hot-path variant of :func:`compile_style` that keeps only the class string.

    Identifiers are collected in a scratch list from *pool*, which goes back
    to the pool once joined.
    """
    canonical, optimized = _optimize(style, config or registry.config, None)
    buffer: list[str] = pool.acquire() if pool is not None else []
    try:
        registry.register_atoms(optimized.declarations, out=buffer)
        return " ".join(buffer), canonical.diagnostics
    finally:
        if pool is not None:
            pool.release(buffer)


def _optimize(
    style: Mapping[str, Any], config: SilkConfig, origin: str | None
) -> tuple[CanonicalResult, OptimizationResult]:
    canonical = Canonicalizer(config).canonicalize(style, origin)
    return canonical, Optimizer().optimize(canonical.declarations)


def compile_unit(
    items: Iterable[tuple[Mapping[str, Any], str | None]],
    registry: AtomicRegistry,
    config: SilkConfig | None = None,
) -> UnitResult:
    """Compile ``(style, origin)`` pairs from a source scanner, in order."""
    unit = UnitResult()
    for style, origin in items:
        unit.results.append(compile_style(style, registry, config, origin))
    partial = len(unit.partial_results)
    if partial:
        logger.info("%d of %d style objects only partially resolved", partial, len(unit.results))
    return unit


@dataclass
class BuildOutput:
    """Everything the packaging step needs from one build."""

    stylesheet: str
    pairs: list[tuple[str, str]]
    stats: RegistryStats
    partition: Partition
    critical_css: str = ""
    non_critical_css: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "stylesheet": self.stylesheet,
            "rules": [[identifier, text] for identifier, text in self.pairs],
            "stats": self.stats.to_dict(),
            "critical": self.partition.report.to_dict(),
        }


def build_output(
    registry: AtomicRegistry,
    config: SilkConfig | None = None,
    extra_rules: Union[str, Iterable[CSSRule]] = (),
) -> BuildOutput:
    """Render the registry (plus hand-written *extra_rules*) for packaging.

    Extra rules come first in insertion order; with layering enabled their
    layer is decided by selector shape like any other rule.
    """
    config = config or registry.config
    if isinstance(extra_rules, str):
        extra_rules = parse_rules(extra_rules)
    rules = list(extra_rules) + registry.rules()

    classifier = LayerClassifier(config.layers)
    partition = CriticalPartitioner(config.critical).partition(rules)
    return BuildOutput(
        stylesheet=classifier.render(rules),
        pairs=registry.rule_pairs(),
        stats=registry.get_stats(),
        partition=partition,
        critical_css=classifier.render(partition.critical) if partition.critical else "",
        non_critical_css=classifier.render(partition.non_critical),
    )


# --- persisted registry state -------------------------------------------------


def save_registry(registry: AtomicRegistry, path: str | Path) -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(registry.export(), indent=2), encoding="utf-8")


def load_registry(
    path: str | Path, config: SilkConfig | None = None, registry: AtomicRegistry | None = None
) -> AtomicRegistry:
    """Load an exported registry file into *registry* (a new one if omitted)."""
    source = Path(path)
    try:
        data = json.loads(source.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Cannot read registry {source}: {exc}") from exc
    registry = registry or AtomicRegistry(config)
    registry.import_data(data)
    return registry
