"""Sided property families recognised by the optimizer."""

from __future__ import annotations

from dataclasses import dataclass, field

from silkcss.model.declaration import Declaration


@dataclass(frozen=True)
class Family:
    """A shorthand property and the longhands it stands for.

    ``sides`` are the most specific members in shorthand value order.
    ``axes`` maps an axis shorthand to the two sides it sets.
    """

    umbrella: str
    sides: tuple[str, ...]
    axes: dict[str, tuple[str, str]] = field(default_factory=dict)

    def members(self) -> tuple[str, ...]:
        return (self.umbrella, *self.axes, *self.sides)

    def covered_sides(self, prop: str) -> tuple[str, ...]:
        if prop == self.umbrella:
            return self.sides
        if prop in self.axes:
            return self.axes[prop]
        if prop in self.sides:
            return (prop,)
        return ()


def _boxed(umbrella: str, pattern: str, logical: str | None = None) -> Family:
    """A four-sided family whose longhands follow *pattern* (``{side}``)."""
    top, right, bottom, left = (pattern.format(side=s) for s in ("top", "right", "bottom", "left"))
    logical = logical or umbrella + "-{axis}"
    block = logical.format(axis="block")
    inline = logical.format(axis="inline")
    return Family(
        umbrella=umbrella,
        sides=(top, right, bottom, left),
        axes={block: (top, bottom), inline: (left, right)},
    )


FAMILIES: tuple[Family, ...] = (
    _boxed("margin", "margin-{side}"),
    _boxed("padding", "padding-{side}"),
    _boxed("inset", "{side}"),
    _boxed("scroll-margin", "scroll-margin-{side}"),
    _boxed("scroll-padding", "scroll-padding-{side}"),
    _boxed("border-width", "border-{side}-width", "border-{axis}-width"),
    _boxed("border-style", "border-{side}-style", "border-{axis}-style"),
    _boxed("border-color", "border-{side}-color", "border-{axis}-color"),
    Family(
        umbrella="border-radius",
        sides=(
            "border-top-left-radius",
            "border-top-right-radius",
            "border-bottom-right-radius",
            "border-bottom-left-radius",
        ),
    ),
    Family(umbrella="gap", sides=("row-gap", "column-gap")),
    Family(umbrella="overflow", sides=("overflow-x", "overflow-y")),
)

FAMILY_BY_PROPERTY: dict[str, Family] = {
    prop: family for family in FAMILIES for prop in family.members()
}


def expand_declaration(decl: Declaration) -> list[Declaration]:
    """Rewrite an umbrella or axis declaration as the sides it sets.

    Declarations outside any family are returned unchanged.
    """
    family = FAMILY_BY_PROPERTY.get(decl.property)
    if family is None:
        return [decl]
    return [decl.replace_property(side) for side in family.covered_sides(decl.property)]


def effective_values(declarations: list[Declaration]) -> dict[tuple[str, str], str]:
    """Per ``(context key, longhand)`` value after applying *declarations* in order."""
    values: dict[tuple[str, str], str] = {}
    for decl in declarations:
        for side in expand_declaration(decl):
            values[(side.context.key, side.property)] = side.value
    return values
