"""Property tables: shorthand aliases, unit families and token scales."""

from __future__ import annotations

from silkcss.model.style_tree import camel_to_kebab

# Shorthand key -> the full properties it targets (1-4 of them).
PROPERTY_ALIASES: dict[str, tuple[str, ...]] = {
    "m": ("margin",),
    "mt": ("margin-top",),
    "mr": ("margin-right",),
    "mb": ("margin-bottom",),
    "ml": ("margin-left",),
    "mx": ("margin-left", "margin-right"),
    "my": ("margin-top", "margin-bottom"),
    "marginX": ("margin-left", "margin-right"),
    "marginY": ("margin-top", "margin-bottom"),
    "p": ("padding",),
    "pt": ("padding-top",),
    "pr": ("padding-right",),
    "pb": ("padding-bottom",),
    "pl": ("padding-left",),
    "px": ("padding-left", "padding-right"),
    "py": ("padding-top", "padding-bottom"),
    "paddingX": ("padding-left", "padding-right"),
    "paddingY": ("padding-top", "padding-bottom"),
    "w": ("width",),
    "h": ("height",),
    "minW": ("min-width",),
    "minH": ("min-height",),
    "maxW": ("max-width",),
    "maxH": ("max-height",),
    "size": ("width", "height"),
    "bg": ("background-color",),
    "bgColor": ("background-color",),
    "rounded": ("border-radius",),
    "roundedTop": ("border-top-left-radius", "border-top-right-radius"),
    "roundedBottom": ("border-bottom-left-radius", "border-bottom-right-radius"),
    "roundedLeft": ("border-top-left-radius", "border-bottom-left-radius"),
    "roundedRight": ("border-top-right-radius", "border-bottom-right-radius"),
    "shadow": ("box-shadow",),
}

SPACING_PREFIXES: tuple[str, ...] = (
    "margin",
    "padding",
    "scroll-margin",
    "scroll-padding",
)

SPACING_PROPERTIES = frozenset({"gap", "row-gap", "column-gap"})

UNITLESS_PROPERTIES = frozenset({
    "opacity",
    "font-weight",
    "line-height",
    "flex",
    "flex-grow",
    "flex-shrink",
    "z-index",
    "order",
})

# Token scale consulted for bare references, by property.
_SCALE_BY_PROPERTY: dict[str, str] = {
    "font-size": "fontSizes",
    "font-weight": "fontWeights",
    "font-family": "fonts",
    "line-height": "lineHeights",
    "letter-spacing": "letterSpacings",
    "box-shadow": "shadows",
    "text-shadow": "shadows",
    "z-index": "zIndices",
    "border-radius": "radii",
    "border-top-left-radius": "radii",
    "border-top-right-radius": "radii",
    "border-bottom-left-radius": "radii",
    "border-bottom-right-radius": "radii",
}

_COLOR_PROPERTIES = frozenset({
    "color",
    "background-color",
    "background",
    "border-color",
    "border-top-color",
    "border-right-color",
    "border-bottom-color",
    "border-left-color",
    "outline-color",
    "fill",
    "stroke",
    "caret-color",
    "accent-color",
    "text-decoration-color",
})

_SIZE_PROPERTIES = frozenset({
    "width",
    "height",
    "min-width",
    "min-height",
    "max-width",
    "max-height",
    "flex-basis",
})


def resolve_property(key: str) -> tuple[tuple[str, ...], bool]:
    """Map a style key to its canonical properties.

    Returns ``(properties, is_alias)``. Aliases rank below full names when
    both target the same property.
    """
    if key in PROPERTY_ALIASES:
        return PROPERTY_ALIASES[key], True
    return (camel_to_kebab(key),), False


def is_spacing_property(prop: str) -> bool:
    return prop in SPACING_PROPERTIES or any(
        prop == prefix or prop.startswith(prefix + "-") for prefix in SPACING_PREFIXES
    )


def is_unitless_property(prop: str) -> bool:
    return prop in UNITLESS_PROPERTIES or prop.startswith("--")


def scale_for(prop: str) -> str | None:
    """Name of the token scale a property draws bare references from."""
    if prop in _COLOR_PROPERTIES:
        return "colors"
    if is_spacing_property(prop):
        return "spacing"
    if prop in _SIZE_PROPERTIES:
        return "sizes"
    return _SCALE_BY_PROPERTY.get(prop)
