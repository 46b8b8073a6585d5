"""Declaration model: one canonical property/value pair in a selector context."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Separates the parts of an atom key. Values containing control characters are
# rejected during validation, so this can never appear inside a part.
ATOM_KEY_SEPARATOR = "\x1f"


class ConditionKind(Enum):
    BREAKPOINT = "breakpoint"
    AT_RULE = "at-rule"


@dataclass(frozen=True)
class Condition:
    """A wrapping condition such as a breakpoint media query or an at-rule.

    ``prelude`` is the complete wrapper text (``@media (min-width:768px)``)
    so rule text can be regenerated without looking anything up again.
    """

    kind: ConditionKind
    name: str
    prelude: str

    @property
    def key(self) -> str:
        # A breakpoint and a hand-written at-rule with the same prelude render
        # identical CSS, so they share a key.
        return self.prelude


@dataclass(frozen=True)
class SelectorContext:
    """Where a declaration applies: pseudo suffixes plus wrapping conditions.

    Both tuples are ordered outermost first. The base context has neither.
    """

    pseudos: tuple[str, ...] = ()
    conditions: tuple[Condition, ...] = ()

    @property
    def is_base(self) -> bool:
        return not self.pseudos and not self.conditions

    @property
    def selector_suffix(self) -> str:
        return "".join(self.pseudos)

    @property
    def key(self) -> str:
        """Canonical string form, used inside atom keys.

        Pseudo suffixes concatenate exactly as they render. Each condition is
        set off by the separator, so nesting never merges two preludes.
        """
        return self.selector_suffix + "".join(ATOM_KEY_SEPARATOR + c.key for c in self.conditions)

    def with_pseudo(self, suffix: str) -> SelectorContext:
        return SelectorContext(self.pseudos + (suffix,), self.conditions)

    def with_condition(self, condition: Condition) -> SelectorContext:
        return SelectorContext(self.pseudos, self.conditions + (condition,))

    def describe(self) -> str:
        if self.is_base:
            return "base"
        parts = [c.name if c.kind is ConditionKind.BREAKPOINT else c.prelude for c in self.conditions]
        parts.extend(self.pseudos)
        return " ".join(parts)


BASE_CONTEXT = SelectorContext()


@dataclass(frozen=True)
class Declaration:
    """A canonical declaration ready for hashing.

    ``property`` is kebab-case and ``value`` is fully normalized; two
    declarations that would render the same CSS compare equal.
    """

    property: str
    value: str
    context: SelectorContext = BASE_CONTEXT

    @property
    def atom_key(self) -> str:
        return ATOM_KEY_SEPARATOR.join((self.property, self.value, self.context.key))

    @property
    def body(self) -> str:
        return f"{self.property}:{self.value}"

    def replace_property(self, prop: str) -> Declaration:
        return Declaration(property=prop, value=self.value, context=self.context)
