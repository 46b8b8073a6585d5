"""Lark Transformer that reads compact rule text back into CSSRule objects."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedInput

from silkcss.errors import ParseError
from silkcss.model.rule import CSSRule

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"


class _Sentinel:
    """Intermediate objects produced by the transformer before flattening."""


class _Decl(_Sentinel):
    def __init__(self, text: str):
        self.text = text


class _Statement(_Sentinel):
    def __init__(self, text: str):
        self.text = text


class _Block(_Sentinel):
    def __init__(self, prelude: str, members: list[_Sentinel]):
        self.prelude = prelude
        self.members = members


class RuleTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into intermediate sentinel objects."""

    def decl(self, items: list[Token]) -> _Decl:
        return _Decl(str(items[0]).strip())

    def statement(self, items: list[Token]) -> _Statement:
        return _Statement(str(items[0]).strip())

    def block(self, items: list[object]) -> _Block:
        prelude = str(items[0]).strip()
        members = [item for item in items[1:] if isinstance(item, _Sentinel)]
        return _Block(prelude, members)

    def start(self, items: list[_Sentinel]) -> list[_Sentinel]:
        return list(items)


def _flatten(node: _Sentinel, wrappers: tuple[str, ...], out: list[CSSRule]) -> None:
    """Walk sentinel objects depth-first, accumulating wrapper preludes."""
    if isinstance(node, _Statement):
        out.append(CSSRule(selector=node.text, body=None, wrappers=wrappers))
        return
    assert isinstance(node, _Block)
    decls = [m for m in node.members if isinstance(m, _Decl)]
    blocks = [m for m in node.members if isinstance(m, _Block)]
    if decls and blocks:
        raise ParseError(f"Block {node.prelude!r} mixes declarations and nested rules")
    if blocks:
        for child in blocks:
            _flatten(child, wrappers + (node.prelude,), out)
        return
    out.append(
        CSSRule(
            selector=node.prelude,
            body=";".join(d.text for d in decls),
            wrappers=wrappers,
        )
    )


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(GRAMMAR_PATH.read_text(encoding="utf-8"), parser="lalr", start="start")


def parse_rules(source: str) -> list[CSSRule]:
    """Parse compact rule text into :class:`CSSRule` objects, in source order."""
    try:
        tree = _parser().parse(source)
    except UnexpectedInput as e:
        raise ParseError(str(e), line=e.line, column=e.column) from e
    nodes = RuleTransformer().transform(tree)
    rules: list[CSSRule] = []
    for node in nodes:
        _flatten(node, (), rules)
    return rules


def parse_rule(text: str) -> CSSRule:
    """Parse text holding exactly one rule."""
    rules = parse_rules(text)
    if len(rules) != 1:
        raise ParseError(f"Expected exactly one rule, found {len(rules)}")
    return rules[0]
