"""Cascade layer classification and rendering.

Rules are bucketed by selector shape into a fixed, configured layer order so
the cascade never depends on which rule happened to be registered first.
"""

from __future__ import annotations

import re
from typing import Iterable, Mapping

from silkcss.config import LayerConfig
from silkcss.errors import ConfigError
from silkcss.model.rule import CSSRule

_PSEUDO = r"(?::{1,2}[a-zA-Z-]+(?:\([^)]*\))?)*"
_UNIVERSAL_RE = re.compile(rf"^\*{_PSEUDO}$")
_ELEMENT_RE = re.compile(rf"^[a-zA-Z][a-zA-Z0-9-]*{_PSEUDO}$")
_CLASS_RE = re.compile(rf"^\.-?[a-zA-Z_][a-zA-Z0-9_-]*{_PSEUDO}$")


def _is_custom_property_body(body: str) -> bool:
    declarations = [d.strip() for d in body.split(";") if d.strip()]
    return bool(declarations) and all(d.startswith("--") for d in declarations)


class LayerClassifier:
    """Assigns rules to named cascade layers.

    Explicit per-selector assignments win. Otherwise:

    * ``:root`` rules -> ``tokens``
    * a single class selector, optionally with pseudo suffixes -> ``utilities``
    * other bodies holding only custom properties -> ``tokens``
    * universal and bare-element selectors -> ``base``
    * anything else -> the configured catch-all layer
    """

    def __init__(
        self,
        config: LayerConfig | None = None,
        assignments: Mapping[str, str] | None = None,
    ) -> None:
        self.config = config or LayerConfig()
        self.assignments = dict(assignments or {})
        for selector, layer in self.assignments.items():
            if layer not in self.config.order:
                raise ConfigError(f"Selector {selector!r} assigned to unknown layer {layer!r}")

    @property
    def order(self) -> tuple[str, ...]:
        return self.config.order

    def _pick(self, preferred: str) -> str:
        return preferred if preferred in self.config.order else self.config.catch_all

    def classify(self, rule: CSSRule) -> str:
        if rule.selector in self.assignments:
            return self.assignments[rule.selector]
        if rule.is_statement or rule.is_at_rule:
            return self.config.catch_all

        parts = rule.selector_parts
        if parts == [":root"]:
            return self._pick("tokens")
        if len(parts) == 1 and _CLASS_RE.match(parts[0]):
            return self._pick("utilities")
        if _is_custom_property_body(rule.body or ""):
            return self._pick("tokens")
        if parts and all(_UNIVERSAL_RE.match(p) or _ELEMENT_RE.match(p) for p in parts):
            return self._pick("base")
        return self.config.catch_all

    def organize(self, rules: Iterable[CSSRule]) -> dict[str, list[CSSRule]]:
        """Bucket *rules* by layer, in layer order then insertion order.

        Statements (``@import``, ``@layer a,b;``) cannot live inside a layer
        block and are left out; :meth:`render` emits them first.
        """
        layers: dict[str, list[CSSRule]] = {name: [] for name in self.config.order}
        for rule in rules:
            if rule.is_statement:
                continue
            layers[self.classify(rule)].append(rule)
        return layers

    def declaration(self) -> str:
        return f"@layer {', '.join(self.config.order)};"

    def render(self, rules: Iterable[CSSRule], layered: bool | None = None) -> str:
        rules = list(rules)
        if not (self.config.enabled if layered is None else layered):
            return "\n".join(rule.text for rule in rules)

        chunks = [rule.text for rule in rules if rule.is_statement]
        chunks.append(self.declaration())
        for name, members in self.organize(rules).items():
            if not members:
                continue
            body = "\n".join(rule.text for rule in members)
            chunks.append(f"@layer {name} {{\n{body}\n}}")
        return "\n".join(chunks)
