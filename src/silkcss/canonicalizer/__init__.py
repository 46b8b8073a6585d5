from silkcss.canonicalizer.canonicalizer import CanonicalResult, Canonicalizer
from silkcss.canonicalizer.properties import PROPERTY_ALIASES, resolve_property
from silkcss.canonicalizer.tokens import TokenResolver
from silkcss.canonicalizer.values import format_number

__all__ = [
    "Canonicalizer",
    "CanonicalResult",
    "PROPERTY_ALIASES",
    "TokenResolver",
    "format_number",
    "resolve_property",
]
