"""CSS rule model shared by the registry, layer classifier and partitioner."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CSSRule:
    """One rule in compact form.

    ``wrappers`` are enclosing at-rule preludes, outermost first. A statement
    such as ``@layer a,b;`` has ``body=None`` and its prelude as ``selector``.
    """

    selector: str
    body: str | None
    wrappers: tuple[str, ...] = ()

    @property
    def is_statement(self) -> bool:
        return self.body is None

    @property
    def is_at_rule(self) -> bool:
        return self.selector.startswith("@")

    @property
    def selector_parts(self) -> list[str]:
        if self.is_at_rule:
            return [self.selector]
        return [part.strip() for part in self.selector.split(",") if part.strip()]

    @property
    def text(self) -> str:
        inner = f"{self.selector};" if self.body is None else f"{self.selector}{{{self.body}}}"
        for wrapper in reversed(self.wrappers):
            inner = f"{wrapper}{{{inner}}}"
        return inner

    def __str__(self) -> str:
        return self.text
