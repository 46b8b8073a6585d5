"""silkcss model layer -- public type re-exports."""

from silkcss.model.declaration import (
    ATOM_KEY_SEPARATOR,
    BASE_CONTEXT,
    Condition,
    ConditionKind,
    Declaration,
    SelectorContext,
)
from silkcss.model.diagnostic import Diagnostic, Severity
from silkcss.model.rule import CSSRule
from silkcss.model.style_tree import (
    AtRuleBlock,
    Leaf,
    PseudoBlock,
    ResponsiveBlock,
    StyleNode,
    StyleTree,
    parse_style_tree,
)

__all__ = [
    # declaration
    "ATOM_KEY_SEPARATOR",
    "BASE_CONTEXT",
    "Condition",
    "ConditionKind",
    "Declaration",
    "SelectorContext",
    # diagnostic
    "Severity",
    "Diagnostic",
    # rule
    "CSSRule",
    # style tree
    "Leaf",
    "PseudoBlock",
    "ResponsiveBlock",
    "AtRuleBlock",
    "StyleNode",
    "StyleTree",
    "parse_style_tree",
]
