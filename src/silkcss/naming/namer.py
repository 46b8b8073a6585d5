"""Identifier naming: canonical declaration -> short stable class name.

Both naming modes format the same underlying hash of the atom key:

* verbose -- ``silk_padding_1rem_1k2j9qz`` (prefix, property, value fragment,
  hash), easy to trace back in devtools;
* compact -- ``s1k2j9qz`` (prefix and hash only).

Naming never consults counters, insertion order or any shared state, so the
build-time transform, the runtime fallback and the offline generator agree
without coordinating.
"""

from __future__ import annotations

import re

from silkcss.config import DEFAULT_PREFIXES, NamingMode, SilkConfig
from silkcss.model.declaration import Declaration
from silkcss.naming.hash import from_base36, hash32, to_base36

GUARD = "_"
VALUE_FRAGMENT_LENGTH = 10

_PROPERTY_JUNK_RE = re.compile(r"[^a-z0-9-]")
_VALUE_JUNK_RE = re.compile(r"[^a-z0-9]")


class Namer:
    """Formats identifiers for one ``(mode, prefix)`` pair."""

    def __init__(self, mode: NamingMode = NamingMode.VERBOSE, prefix: str = "silk") -> None:
        self.mode = mode
        self.prefix = prefix

    @classmethod
    def from_config(cls, config: SilkConfig) -> Namer:
        return cls(mode=config.naming, prefix=config.effective_prefix)

    def hash(self, declaration: Declaration) -> int:
        return hash32(declaration.atom_key)

    def name(self, declaration: Declaration) -> str:
        encoded = to_base36(self.hash(declaration))
        if self.mode is NamingMode.COMPACT:
            name = f"{self.prefix}{encoded}"
            if name[0].isdigit():
                name = GUARD + name
            return name
        prop = _PROPERTY_JUNK_RE.sub("", declaration.property.lower()).strip("-")
        value = _VALUE_JUNK_RE.sub("", declaration.value.lower())[:VALUE_FRAGMENT_LENGTH]
        return f"{self.prefix}_{prop}_{value}_{encoded}"

    def decode(self, identifier: str) -> int:
        """Recover the numeric hash from an identifier made by this namer."""
        if self.mode is NamingMode.COMPACT:
            encoded = identifier
            # The guard is only ever added in front of a digit.
            if encoded.startswith(GUARD) and encoded[len(GUARD):][:1].isdigit():
                if not self.prefix or self.prefix[0].isdigit():
                    encoded = encoded[len(GUARD):]
            if not encoded.startswith(self.prefix):
                raise ValueError(f"{identifier!r} does not start with prefix {self.prefix!r}")
            return from_base36(encoded[len(self.prefix):])
        if "_" not in identifier:
            raise ValueError(f"{identifier!r} is not a verbose identifier")
        return from_base36(identifier.rsplit("_", 1)[1])


def class_name(declaration: Declaration, config: SilkConfig | None = None) -> str:
    """Identifier for *declaration* under *config* (defaults when omitted)."""
    return Namer.from_config(config or SilkConfig()).name(declaration)


def atom_key(declaration: Declaration) -> str:
    return declaration.atom_key


def decode_hash(identifier: str, mode: NamingMode, prefix: str | None = None) -> int:
    if prefix is None:
        prefix = DEFAULT_PREFIXES[mode]
    return Namer(mode=mode, prefix=prefix).decode(identifier)
