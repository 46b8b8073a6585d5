"""Style validator: runs all leaf rules and reports diagnostics."""

from __future__ import annotations

from typing import Any, Callable, Mapping

from silkcss.config import SilkConfig
from silkcss.errors import ValidationError
from silkcss.model.diagnostic import Diagnostic
from silkcss.model.style_tree import Leaf, StyleNode, parse_style_tree
from silkcss.validation.rules import ALL_RULES

RuleFunc = Callable[[str, Any, str], list[Diagnostic]]


def validate_leaf(
    key: str, value: Any, path: str, extra_rules: list[RuleFunc] | None = None
) -> list[Diagnostic]:
    """Run every leaf rule against one property/value pair."""
    rules: list[RuleFunc] = list(ALL_RULES)
    if extra_rules:
        rules.extend(extra_rules)
    diagnostics: list[Diagnostic] = []
    for rule in rules:
        diagnostics.extend(rule(key, value, path))
    return diagnostics


def validate_style(
    style: Mapping[str, Any],
    config: SilkConfig | None = None,
    extra_rules: list[RuleFunc] | None = None,
) -> list[Diagnostic]:
    """Validate a whole style object without canonicalizing it.

    Returns structural diagnostics from parsing plus leaf-rule diagnostics.
    """
    config = config or SilkConfig()
    tree = parse_style_tree(style, config.breakpoints, config.pseudo_selectors)
    diagnostics = list(tree.diagnostics)
    for leaf in _leaves(tree.nodes):
        diagnostics.extend(validate_leaf(leaf.key, leaf.value, leaf.path, extra_rules))
    return diagnostics


def validate_or_raise(
    style: Mapping[str, Any],
    config: SilkConfig | None = None,
    extra_rules: list[RuleFunc] | None = None,
) -> list[Diagnostic]:
    """Run validation; raises :class:`ValidationError` if any ERROR diagnostics exist.

    Returns the non-error diagnostics when no errors are found.
    """
    diagnostics = validate_style(style, config, extra_rules=extra_rules)
    errors = [d for d in diagnostics if d.is_error]
    if errors:
        raise ValidationError(errors)
    return diagnostics


def _leaves(nodes: list[StyleNode] | tuple[StyleNode, ...]) -> list[Leaf]:
    found: list[Leaf] = []
    for node in nodes:
        if isinstance(node, Leaf):
            found.append(node)
        else:
            found.extend(_leaves(node.children))
    return found
