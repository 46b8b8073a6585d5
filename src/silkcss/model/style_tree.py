"""Style tree: a style object parsed once into explicit tagged variants.

A raw style object is a mapping whose keys are properties or modifiers and
whose values are scalars or nested mappings. :func:`parse_style_tree` decides
what every key means up front so later stages never sniff key prefixes::

    {"color": "red", "_hover": {"color": "blue"}, "md": {"p": 4}}

becomes::

    [Leaf("color", "red"),
     PseudoBlock(":hover", [Leaf("color", "blue")]),
     ResponsiveBlock("md", [Leaf("p", 4)])]
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from silkcss.model.diagnostic import Diagnostic, Severity

_CAMEL_RE = re.compile(r"[A-Z]")
_AT_RULE_RE = re.compile(r"^@(?P<kind>[a-zA-Z][a-zA-Z0-9-]*)\s*(?P<params>.*)$", re.DOTALL)
_PSEUDO_LITERAL_RE = re.compile(r"^:{1,2}[a-zA-Z][a-zA-Z0-9()+\-\s.\"'=\[\]]*$")


@dataclass(frozen=True)
class Leaf:
    """A property key with a scalar (or list of scalars) value."""

    key: str
    value: Any
    path: str


@dataclass(frozen=True)
class PseudoBlock:
    selector: str
    children: tuple[StyleNode, ...]
    path: str


@dataclass(frozen=True)
class ResponsiveBlock:
    """Children scoped to a named breakpoint. ``base`` never wraps."""

    breakpoint: str
    children: tuple[StyleNode, ...]
    path: str


@dataclass(frozen=True)
class AtRuleBlock:
    kind: str
    params: str
    children: tuple[StyleNode, ...]
    path: str

    @property
    def prelude(self) -> str:
        return f"@{self.kind} {self.params}" if self.params else f"@{self.kind}"


StyleNode = Union[Leaf, PseudoBlock, ResponsiveBlock, AtRuleBlock]


@dataclass
class StyleTree:
    """Result of parsing one style object."""

    nodes: list[StyleNode] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    unresolved_keys: list[str] = field(default_factory=list)


def camel_to_kebab(name: str) -> str:
    """``backgroundColor`` -> ``background-color``, ``WebkitX`` -> ``-webkit-x``."""
    if name.startswith("--") or "-" in name and name == name.lower():
        return name
    if name.startswith("ms") and len(name) > 2 and name[2].isupper():
        name = "-" + name
    return _CAMEL_RE.sub(lambda m: "-" + m.group(0).lower(), name)


def _join(parent: str, key: str) -> str:
    return f"{parent}.{key}" if parent else key


def parse_style_tree(
    style: Mapping[str, Any],
    breakpoints: Mapping[str, str],
    pseudo_selectors: Mapping[str, str],
) -> StyleTree:
    """Parse *style* into a :class:`StyleTree`.

    Unsupported shapes are reported as ERROR diagnostics and their key paths
    recorded as unresolved; the rest of the object is still parsed.
    """
    tree = StyleTree()
    tree.nodes = _parse_mapping(style, "", tree, breakpoints, pseudo_selectors)
    return tree


def _parse_mapping(
    style: Mapping[str, Any],
    parent: str,
    tree: StyleTree,
    breakpoints: Mapping[str, str],
    pseudo_selectors: Mapping[str, str],
) -> list[StyleNode]:
    nodes: list[StyleNode] = []
    for raw_key, value in style.items():
        if value is None:
            continue
        key = str(raw_key)
        path = _join(parent, key)

        if not key.strip():
            _reject(tree, path, "empty-key", "Style keys must be non-empty strings.")
            continue

        if not isinstance(value, Mapping):
            nodes.append(Leaf(key=key, value=value, path=path))
            continue

        def children() -> tuple[StyleNode, ...]:
            return tuple(_parse_mapping(value, path, tree, breakpoints, pseudo_selectors))

        if key.startswith("_"):
            selector = pseudo_selectors.get(key) or ":" + camel_to_kebab(key[1:])
            nodes.append(PseudoBlock(selector=selector, children=children(), path=path))
        elif key.startswith("&") or key.startswith(":"):
            selector = key.lstrip("&").strip()
            if not _PSEUDO_LITERAL_RE.match(selector):
                _reject(
                    tree,
                    path,
                    "unsupported-key",
                    f"Nested selector {key!r} is not a pseudo selector.",
                    fix="Only pseudo-class and pseudo-element suffixes can be nested.",
                )
                continue
            nodes.append(PseudoBlock(selector=selector, children=children(), path=path))
        elif key == "base":
            nodes.extend(children())
        elif key in breakpoints:
            nodes.append(ResponsiveBlock(breakpoint=key, children=children(), path=path))
        elif key.startswith("@"):
            match = _AT_RULE_RE.match(key.strip())
            if match is None:
                _reject(tree, path, "unsupported-key", f"Malformed at-rule key {key!r}.")
                continue
            params = " ".join(match.group("params").split())
            nodes.append(
                AtRuleBlock(
                    kind=match.group("kind").lower(),
                    params=params,
                    children=children(),
                    path=path,
                )
            )
        elif value and all(str(k) == "base" or str(k) in breakpoints for k in value):
            nodes.extend(_responsive_value(key, value, path, breakpoints))
        else:
            _reject(
                tree,
                path,
                "unsupported-key",
                f"Key {key!r} holds a nested mapping but is not a pseudo state, "
                "breakpoint, at-rule or responsive value.",
                fix="Prefix pseudo states with '_' and at-rules with '@'.",
            )
    return nodes


def _responsive_value(
    key: str, value: Mapping[str, Any], path: str, breakpoints: Mapping[str, str]
) -> list[StyleNode]:
    """Expand ``{width: {base: "100%", md: "50%"}}`` into leaves."""
    nodes: list[StyleNode] = []
    for bp, bp_value in value.items():
        if bp_value is None:
            continue
        bp = str(bp)
        leaf = Leaf(key=key, value=bp_value, path=f"{path}.{bp}")
        if bp == "base":
            nodes.append(leaf)
        else:
            nodes.append(ResponsiveBlock(breakpoint=bp, children=(leaf,), path=leaf.path))
    return nodes


def _reject(
    tree: StyleTree, path: str, rule: str, message: str, fix: str | None = None
) -> None:
    tree.diagnostics.append(
        Diagnostic(rule=rule, severity=Severity.ERROR, message=message, key_path=path, fix=fix)
    )
    tree.unresolved_keys.append(path)
