from silkcss.errors import ValidationError
from silkcss.validation.rules import ALL_RULES
from silkcss.validation.validator import validate_leaf, validate_or_raise, validate_style

__all__ = [
    "ALL_RULES",
    "ValidationError",
    "validate_leaf",
    "validate_style",
    "validate_or_raise",
]
