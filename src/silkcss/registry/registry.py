"""Atomic registry: the single owner of atom key <-> identifier bindings."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from silkcss.config import SilkConfig
from silkcss.errors import ConfigError, HashCollisionError, RegistryInvariantError
from silkcss.model.declaration import ATOM_KEY_SEPARATOR, Declaration
from silkcss.model.rule import CSSRule
from silkcss.naming.namer import Namer
from silkcss.parser import parse_rule

logger = logging.getLogger(__name__)

EXPORT_VERSION = 1


def build_rule(identifier: str, declaration: Declaration) -> CSSRule:
    """The single rule that applies *declaration* through *identifier*."""
    context = declaration.context
    return CSSRule(
        selector=f".{identifier}{context.selector_suffix}",
        body=declaration.body,
        wrappers=tuple(c.prelude for c in context.conditions),
    )


@dataclass(frozen=True)
class RegistryStats:
    unique_atoms: int
    total_usage: int
    average_reuse: float
    deduplication_rate: float
    savings_percentage: float

    def to_dict(self) -> dict[str, float]:
        return {
            "unique_atoms": self.unique_atoms,
            "total_usage": self.total_usage,
            "average_reuse": self.average_reuse,
            "deduplication_rate": self.deduplication_rate,
            "savings_percentage": self.savings_percentage,
        }


@dataclass(frozen=True)
class TopAtom:
    identifier: str
    atom_key: str
    usage: int
    rule: str

    @property
    def readable_key(self) -> str:
        return " ".join(part for part in self.atom_key.split(ATOM_KEY_SEPARATOR) if part)


class AtomicRegistry:
    """Maps canonical declarations to identifiers and rule text.

    Each distinct atom key is stored exactly once; registering it again only
    bumps its usage count. Rules are kept in first-registration order so the
    generated stylesheet is stable for a given input order.

    All public methods take one coarse re-entrant lock, so a registry can be
    shared by concurrent callers.
    """

    def __init__(self, config: SilkConfig | None = None) -> None:
        self.config = config or SilkConfig()
        self._namer = Namer.from_config(self.config)
        self._lock = threading.RLock()
        self._key_to_id: dict[str, str] = {}
        self._id_to_key: dict[str, str] = {}
        self._usage: dict[str, int] = {}
        self._rules: dict[str, CSSRule] = {}

    # --- registration ---------------------------------------------------------

    def register_atom(self, declaration: Declaration) -> str:
        """Return the identifier for *declaration*, registering it on first use."""
        key = declaration.atom_key
        with self._lock:
            identifier = self._key_to_id.get(key)
            if identifier is not None:
                self._usage[identifier] += 1
                return identifier

            identifier = self._namer.name(declaration)
            bound = self._id_to_key.get(identifier)
            if bound is not None and bound != key and self.config.verify_hashes:
                logger.error("Hash collision on %s: %r vs %r", identifier, bound, key)
                raise HashCollisionError(
                    f"Identifier {identifier!r} is already bound to a different atom",
                    identifier=identifier,
                    existing=bound,
                    incoming=key,
                )
            self._store(identifier, key, build_rule(identifier, declaration), usage=1)
            logger.debug("New atom %s -> %s", identifier, declaration.body)
            return identifier

    def register_atoms(
        self, declarations: Iterable[Declaration], out: list[str] | None = None
    ) -> list[str]:
        """Register in order; identifiers are appended to *out* when given."""
        identifiers = out if out is not None else []
        with self._lock:
            identifiers.extend(self.register_atom(d) for d in declarations)
        return identifiers

    def _store(self, identifier: str, key: str, rule: CSSRule, usage: int) -> None:
        existing = self._rules.get(identifier)
        if existing is not None and existing.text != rule.text:
            logger.error("Conflicting rule text for %s", identifier)
            raise RegistryInvariantError(
                f"Identifier {identifier!r} would map to two different rules",
                identifier=identifier,
                existing=existing.text,
                incoming=rule.text,
            )
        self._key_to_id[key] = identifier
        self._id_to_key.setdefault(identifier, key)
        self._usage[identifier] = self._usage.get(identifier, 0) + usage
        self._rules.setdefault(identifier, rule)

    # --- lookup ---------------------------------------------------------------

    def lookup(self, declaration: Declaration) -> str | None:
        with self._lock:
            return self._key_to_id.get(declaration.atom_key)

    def atom_key_for(self, identifier: str) -> str | None:
        with self._lock:
            return self._id_to_key.get(identifier)

    def usage(self, identifier: str) -> int:
        with self._lock:
            return self._usage.get(identifier, 0)

    def __contains__(self, identifier: str) -> bool:
        with self._lock:
            return identifier in self._rules

    def __len__(self) -> int:
        with self._lock:
            return len(self._rules)

    # --- output ---------------------------------------------------------------

    def rules(self) -> list[CSSRule]:
        with self._lock:
            return list(self._rules.values())

    def rule_pairs(self) -> list[tuple[str, str]]:
        with self._lock:
            return [(identifier, rule.text) for identifier, rule in self._rules.items()]

    def generate_css(self) -> str:
        """One rule per atom, in first-registration order, newline separated."""
        with self._lock:
            return "\n".join(rule.text for rule in self._rules.values())

    # --- statistics -----------------------------------------------------------

    def get_stats(self) -> RegistryStats:
        with self._lock:
            unique = len(self._rules)
            total = sum(self._usage.values())
        rate = total / (unique or 1)
        savings = (1 - 1 / rate) * 100 if unique else 0.0
        return RegistryStats(
            unique_atoms=unique,
            total_usage=total,
            average_reuse=round(rate, 2),
            deduplication_rate=round(rate, 2),
            savings_percentage=round(savings, 2),
        )

    def get_top_atoms(self, limit: int = 10) -> list[TopAtom]:
        """Most reused atoms first; ties keep registration order."""
        with self._lock:
            atoms = [
                TopAtom(
                    identifier=identifier,
                    atom_key=self._id_to_key.get(identifier, ""),
                    usage=self._usage.get(identifier, 0),
                    rule=rule.text,
                )
                for identifier, rule in self._rules.items()
            ]
        atoms.sort(key=lambda atom: atom.usage, reverse=True)
        return atoms[:limit]

    def generate_report(self, top: int = 5) -> str:
        stats = self.get_stats()
        lines = [
            "Atomic CSS Deduplication Report",
            "-" * 50,
            f"Unique atoms: {stats.unique_atoms}",
            f"Total usage: {stats.total_usage}",
            f"Deduplication rate: {stats.deduplication_rate}x",
            f"Savings: {stats.savings_percentage}%",
            "",
            f"Top {top} Most Reused Atoms:",
        ]
        for i, atom in enumerate(self.get_top_atoms(top), start=1):
            lines.append(f"  {i}. {atom.identifier} ({atom.readable_key}) - used {atom.usage}x")
        return "\n".join(lines)

    # --- persistence ----------------------------------------------------------

    def export(self) -> dict[str, Any]:
        """Plain-data snapshot suitable for JSON; see :meth:`import_data`."""
        with self._lock:
            return {
                "version": EXPORT_VERSION,
                "signature": self.config.naming_signature(),
                "atoms": [[key, identifier] for key, identifier in self._key_to_id.items()],
                "usage": [[identifier, count] for identifier, count in self._usage.items()],
                "rules": [[identifier, rule.text] for identifier, rule in self._rules.items()],
            }

    def import_data(self, data: Mapping[str, Any]) -> None:
        """Replace all state with an export, trusting its bindings.

        The export is fully validated first; on any error the registry is
        left untouched.
        """
        with self._lock:
            self._check_signature(data)
            staged = self._stage(data, merging=False)
            self._clear()
            self._commit(staged)

    def merge(self, data: Mapping[str, Any]) -> None:
        """Add an export into this registry, summing usage counts.

        Raises :class:`RegistryInvariantError` when the export binds an
        identifier to rule text that differs from this registry's. Nothing is
        merged unless the whole export is accepted.
        """
        with self._lock:
            self._check_signature(data)
            self._commit(self._stage(data, merging=True))

    def _check_signature(self, data: Mapping[str, Any]) -> None:
        if not isinstance(data, Mapping):
            raise ConfigError("Registry export must be a JSON object")
        signature = data.get("signature")
        if signature is not None and signature != self.config.naming_signature():
            raise ConfigError(
                f"Registry export was named with {signature}, "
                f"this registry uses {self.config.naming_signature()}"
            )

    def _stage(
        self, data: Mapping[str, Any], merging: bool
    ) -> dict[str, tuple[str, CSSRule, int]]:
        """Parse and check every binding in *data* without touching state."""
        try:
            keys = {identifier: key for key, identifier in data["atoms"]}
            usage = {identifier: int(count) for identifier, count in data["usage"]}
            rules = [(identifier, text) for identifier, text in data["rules"]]
        except (KeyError, TypeError, ValueError) as exc:
            raise ConfigError(f"Malformed registry export: {exc}") from exc

        staged: dict[str, tuple[str, CSSRule, int]] = {}
        for identifier, text in rules:
            key = keys.get(identifier)
            if key is None:
                raise ConfigError(f"Registry export has a rule for unknown atom {identifier!r}")
            rule = parse_rule(text)

            bound = self._id_to_key.get(identifier) if merging else None
            if bound is not None and bound != key:
                logger.error("Hash collision on %s while merging", identifier)
                raise HashCollisionError(
                    f"Identifier {identifier!r} is bound to different atoms",
                    identifier=identifier,
                    existing=bound,
                    incoming=key,
                )

            existing = self._rules.get(identifier) if merging else None
            if identifier in staged:
                existing = staged[identifier][1]
            if existing is not None and existing.text != rule.text:
                logger.error("Conflicting rule text for %s", identifier)
                raise RegistryInvariantError(
                    f"Identifier {identifier!r} would map to two different rules",
                    identifier=identifier,
                    existing=existing.text,
                    incoming=rule.text,
                )
            staged.setdefault(identifier, (key, rule, usage.get(identifier, 0)))
        return staged

    def _commit(self, staged: Mapping[str, tuple[str, CSSRule, int]]) -> None:
        for identifier, (key, rule, usage) in staged.items():
            self._key_to_id[key] = identifier
            self._id_to_key.setdefault(identifier, key)
            self._usage[identifier] = self._usage.get(identifier, 0) + usage
            self._rules.setdefault(identifier, rule)

    # --- reset ----------------------------------------------------------------

    def reset(self) -> None:
        with self._lock:
            self._clear()

    def _clear(self) -> None:
        self._key_to_id.clear()
        self._id_to_key.clear()
        self._usage.clear()
        self._rules.clear()

    def __repr__(self) -> str:
        with self._lock:
            return f"AtomicRegistry(atoms={len(self._rules)}, naming={self.config.naming.value})"
