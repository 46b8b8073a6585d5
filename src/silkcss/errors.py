"""Error hierarchy for silkcss."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from silkcss.model.diagnostic import Diagnostic


class SilkError(Exception):
    """Base error for all silkcss errors."""


class ConfigError(SilkError):
    """Raised when a configuration mapping or file is invalid."""


class RegistryInvariantError(SilkError):
    """Two different rule texts were about to share one identifier.

    This always indicates a canonicalization or naming bug, never bad input.
    """

    def __init__(
        self,
        message: str,
        *,
        identifier: str = "",
        existing: str = "",
        incoming: str = "",
    ) -> None:
        super().__init__(message)
        self.identifier = identifier
        self.existing = existing
        self.incoming = incoming


class HashCollisionError(RegistryInvariantError):
    """Two distinct atom keys hashed to the same identifier."""


class ParseError(SilkError):
    """Raised when generated rule text cannot be read back."""

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ):
        self.line = line
        self.column = column
        super().__init__(message)


class ValidationError(SilkError):
    """Raised when validation produces ERROR-severity diagnostics."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        messages = [str(d) for d in diagnostics if d.is_error]
        super().__init__(
            f"Validation failed with {len(messages)} error(s): " + "; ".join(messages)
        )
