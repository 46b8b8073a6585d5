"""Design-token resolution for string values.

Three reference forms are recognised:

* ``$colors.red.500`` -- explicit path from the token root;
* ``red.500`` -- dotted path, looked up in the property's scale first and then
  from the root;
* ``lg`` -- bare word, looked up in the property's scale only.

A miss passes the original text through as a literal value. Explicit and
dotted misses that plausibly meant a token also produce a WARNING diagnostic;
bare words never do, since most of them are plain CSS keywords.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

from silkcss.canonicalizer.properties import scale_for
from silkcss.model.diagnostic import Diagnostic, Severity

_DOTTED_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*(\.[A-Za-z0-9_-]+)+$")
_WORD_RE = re.compile(r"^[A-Za-z0-9_-]+$")

_MISSING = object()


class TokenResolver:
    """Resolves token references against one token table."""

    def __init__(self, tokens: Mapping[str, Any]) -> None:
        self._tokens = tokens

    def resolve(self, prop: str, raw: str, path: str | None = None) -> tuple[Any, Diagnostic | None]:
        """Return ``(value, diagnostic)`` for the string *raw*.

        ``value`` is the token's literal value on a hit and *raw* on a miss.
        """
        text = raw.strip()
        if text.startswith("$"):
            found = self._lookup(self._tokens, text[1:])
            if found is _MISSING:
                return raw, self._miss(text, prop, path)
            return found, None

        scale_name = scale_for(prop)
        scale = self._tokens.get(scale_name) if scale_name else None

        if _DOTTED_RE.match(text):
            found = _MISSING
            if isinstance(scale, Mapping):
                found = self._lookup(scale, text)
            if found is _MISSING:
                found = self._lookup(self._tokens, text)
            if found is not _MISSING:
                return found, None
            first = text.split(".", 1)[0]
            if isinstance(scale, Mapping) or first in self._tokens:
                return raw, self._miss(text, prop, path)
            return raw, None

        if isinstance(scale, Mapping) and _WORD_RE.match(text):
            found = self._lookup(scale, text)
            if found is not _MISSING:
                return found, None
        return raw, None

    @staticmethod
    def _lookup(table: Mapping[str, Any], dotted: str) -> Any:
        node: Any = table
        for segment in dotted.split("."):
            if not isinstance(node, Mapping):
                return _MISSING
            if segment in node:
                node = node[segment]
            elif segment.isdigit() and int(segment) in node:
                node = node[int(segment)]
            else:
                return _MISSING
        if isinstance(node, Mapping) or node is None:
            return _MISSING
        return node

    @staticmethod
    def _miss(reference: str, prop: str, path: str | None) -> Diagnostic:
        return Diagnostic(
            rule="token-miss",
            severity=Severity.WARNING,
            message=f"Token reference {reference!r} for {prop!r} did not resolve; "
            "using it as a literal value.",
            key_path=path,
            fix="Add the token to the config or use a literal CSS value.",
        )
