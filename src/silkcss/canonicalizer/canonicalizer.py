"""Canonicalizer: style object -> flat, ordered, normalized declarations."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Mapping

from silkcss.canonicalizer.properties import resolve_property
from silkcss.canonicalizer.tokens import TokenResolver
from silkcss.canonicalizer.values import is_number, normalize_number, normalize_string
from silkcss.config import SilkConfig
from silkcss.model.declaration import (
    BASE_CONTEXT,
    Condition,
    ConditionKind,
    Declaration,
    SelectorContext,
)
from silkcss.model.diagnostic import Diagnostic
from silkcss.model.style_tree import (
    AtRuleBlock,
    Leaf,
    PseudoBlock,
    ResponsiveBlock,
    StyleNode,
    parse_style_tree,
)
from silkcss.validation.validator import validate_leaf

logger = logging.getLogger(__name__)


@dataclass
class CanonicalResult:
    """Declarations for one style object plus everything that went wrong."""

    declarations: list[Declaration] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    unresolved_keys: list[str] = field(default_factory=list)

    @property
    def resolved(self) -> bool:
        return not self.unresolved_keys


@dataclass
class _Candidate:
    declaration: Declaration
    position: int
    rank: tuple[bool, str, str]


class Canonicalizer:
    """Normalizes nested style objects into canonical declarations.

    Runs entirely before hashing: shorthand expansion, unit normalization,
    token resolution and shorthand/full-name conflict resolution all happen
    here, so equal CSS always yields equal declarations.
    """

    def __init__(self, config: SilkConfig | None = None) -> None:
        self.config = config or SilkConfig()
        self._tokens = TokenResolver(self.config.tokens)

    def canonicalize(
        self, style: Mapping[str, Any], origin: str | None = None
    ) -> CanonicalResult:
        result = CanonicalResult()
        if not style:
            return result

        tree = parse_style_tree(style, self.config.breakpoints, self.config.pseudo_selectors)
        result.diagnostics.extend(tree.diagnostics)
        result.unresolved_keys.extend(tree.unresolved_keys)

        candidates: dict[tuple[SelectorContext, str], _Candidate] = {}
        counter = itertools.count(1)
        self._walk(tree.nodes, BASE_CONTEXT, candidates, counter, result)

        ordered = sorted(candidates.values(), key=lambda c: c.position)
        result.declarations = [c.declaration for c in ordered]
        if origin is not None:
            result.diagnostics = [d.with_origin(origin) for d in result.diagnostics]
        for diag in result.diagnostics:
            if diag.is_error:
                logger.warning("Dropped style entry: %s", diag)
        return result

    # --- tree walk ------------------------------------------------------------

    def _walk(
        self,
        nodes: Iterable[StyleNode],
        context: SelectorContext,
        candidates: dict[tuple[SelectorContext, str], _Candidate],
        counter: Iterator[int],
        result: CanonicalResult,
    ) -> None:
        for node in nodes:
            if isinstance(node, Leaf):
                self._add_leaf(node, context, candidates, counter, result)
            elif isinstance(node, PseudoBlock):
                self._walk(node.children, context.with_pseudo(node.selector), candidates, counter, result)
            elif isinstance(node, ResponsiveBlock):
                condition = Condition(
                    kind=ConditionKind.BREAKPOINT,
                    name=node.breakpoint,
                    prelude=self.breakpoint_prelude(node.breakpoint),
                )
                self._walk(node.children, context.with_condition(condition), candidates, counter, result)
            elif isinstance(node, AtRuleBlock):
                condition = Condition(kind=ConditionKind.AT_RULE, name=node.kind, prelude=node.prelude)
                self._walk(node.children, context.with_condition(condition), candidates, counter, result)

    def _add_leaf(
        self,
        leaf: Leaf,
        context: SelectorContext,
        candidates: dict[tuple[SelectorContext, str], _Candidate],
        counter: Iterator[int],
        result: CanonicalResult,
    ) -> None:
        problems = validate_leaf(leaf.key, leaf.value, leaf.path)
        result.diagnostics.extend(problems)
        if any(d.is_error for d in problems):
            result.unresolved_keys.append(leaf.path)
            return

        properties, is_alias = resolve_property(leaf.key)
        for prop in properties:
            value = self.normalize_value(prop, leaf.value, leaf.path, result.diagnostics)
            slot = (context, prop)
            existing = candidates.get(slot)
            # Full names beat aliases; equal ranks fall back to raw key, then path.
            rank = (is_alias, leaf.key, leaf.path)
            if existing is not None and existing.rank <= rank:
                continue
            candidates[slot] = _Candidate(
                declaration=Declaration(property=prop, value=value, context=context),
                position=existing.position if existing is not None else next(counter),
                rank=rank,
            )

    # --- values ---------------------------------------------------------------

    def normalize_value(
        self,
        prop: str,
        value: Any,
        path: str | None = None,
        diagnostics: list[Diagnostic] | None = None,
    ) -> str:
        """Normalize a validated raw value for *prop* into its canonical string."""
        if isinstance(value, (list, tuple)):
            return ", ".join(self._normalize_scalar(prop, item, path, diagnostics) for item in value)
        return self._normalize_scalar(prop, value, path, diagnostics)

    def _normalize_scalar(
        self,
        prop: str,
        value: Any,
        path: str | None,
        diagnostics: list[Diagnostic] | None,
    ) -> str:
        if isinstance(value, str):
            value, diag = self._tokens.resolve(prop, value, path)
            if diag is not None and diagnostics is not None:
                diagnostics.append(diag)
        if is_number(value):
            return normalize_number(
                prop,
                value,
                self.config.spacing_multiplier,
                self.config.spacing_unit,
                self.config.default_unit,
            )
        return normalize_string(str(value))

    def breakpoint_prelude(self, name: str) -> str:
        """The media query wrapping a breakpoint, e.g. ``@media (min-width:768px)``."""
        width = normalize_string(self.config.breakpoints[name])
        if width.startswith("@"):
            return width
        if width.startswith("("):
            return f"@media {width}"
        return f"@media (min-width:{width})"
