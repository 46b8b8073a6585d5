"""Diagnostic model: structured, non-fatal findings about style objects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    """Severity level for a diagnostic message."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass(frozen=True)
class Diagnostic:
    """A single finding produced while canonicalizing a style object.

    Attributes:
        rule: Identifier for the check that produced this diagnostic.
        severity: How serious the issue is. ERROR means the entry was dropped.
        message: Human-readable description of the problem.
        origin: Where the style object came from (file:line), if known.
        key_path: Dotted path of the offending key inside the style object.
        fix: Suggested remediation, if available.
    """

    rule: str
    severity: Severity
    message: str
    origin: str | None = None
    key_path: str | None = None
    fix: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def with_origin(self, origin: str | None) -> Diagnostic:
        if origin is None or self.origin == origin:
            return self
        return Diagnostic(
            rule=self.rule,
            severity=self.severity,
            message=self.message,
            origin=origin,
            key_path=self.key_path,
            fix=self.fix,
        )

    def to_dict(self) -> dict[str, str | None]:
        return {
            "rule": self.rule,
            "severity": self.severity.value,
            "message": self.message,
            "origin": self.origin,
            "key_path": self.key_path,
            "fix": self.fix,
        }

    def __str__(self) -> str:
        location = ""
        if self.origin and self.key_path:
            location = f" [{self.origin} key={self.key_path}]"
        elif self.origin:
            location = f" [{self.origin}]"
        elif self.key_path:
            location = f" [key={self.key_path}]"
        return f"{self.severity.value}{location}: {self.message}"
