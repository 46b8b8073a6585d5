"""Optimizer: losslessly merge sided longhands into shorthands.

Works per selector context. For each family the stale broader declarations
are dropped first, then:

* all sides equal -> one family shorthand (``margin``);
* otherwise each axis with two equal sides -> axis shorthand
  (``margin-block``);
* anything else is left as-is. Three equal sides out of four is not merged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from silkcss.model.declaration import Declaration, SelectorContext
from silkcss.optimizer.families import FAMILIES, Family

logger = logging.getLogger(__name__)


@dataclass
class OptimizationResult:
    declarations: list[Declaration] = field(default_factory=list)
    merged: int = 0
    dropped: int = 0

    @property
    def saved(self) -> int:
        return self.merged + self.dropped


class Optimizer:
    """Shortens declaration sequences without changing their effect."""

    def __init__(self, families: tuple[Family, ...] = FAMILIES) -> None:
        self.families = families

    def optimize(self, declarations: list[Declaration]) -> OptimizationResult:
        result = OptimizationResult()
        # position -> declaration, kept sparse so merged entries can take the
        # slot of their earliest member.
        slots: dict[int, Declaration] = dict(enumerate(declarations))
        by_context: dict[SelectorContext, dict[str, int]] = {}
        for position, decl in slots.items():
            by_context.setdefault(decl.context, {})[decl.property] = position

        for positions in by_context.values():
            for family in self.families:
                self._optimize_family(family, positions, slots, result)

        result.declarations = [slots[p] for p in sorted(slots)]
        if result.saved:
            logger.debug(
                "Optimized %d declarations to %d (%d merged, %d stale dropped)",
                len(declarations),
                len(result.declarations),
                result.merged,
                result.dropped,
            )
        return result

    def _optimize_family(
        self,
        family: Family,
        positions: dict[str, int],
        slots: dict[int, Declaration],
        result: OptimizationResult,
    ) -> None:
        present = [prop for prop in family.members() if prop in positions]
        if len(present) < 2:
            return

        # Specific sides win over a broader declaration they overlap.
        for prop in present:
            covered = set(family.covered_sides(prop))
            narrower = [
                other
                for other in present
                if other != prop
                and other in positions
                and set(family.covered_sides(other)) < covered
            ]
            if narrower:
                del slots[positions.pop(prop)]
                result.dropped += 1

        side_values: dict[str, str] = {}
        side_origin: dict[str, str] = {}
        for prop in family.members():
            if prop not in positions or prop == family.umbrella:
                continue
            value = slots[positions[prop]].value
            for side in family.covered_sides(prop):
                side_values[side] = value
                side_origin[side] = prop

        if len(side_values) == len(family.sides) and len(set(side_values.values())) == 1:
            self._replace(family.umbrella, sorted(set(side_origin.values())), positions, slots)
            result.merged += 1
            return

        for axis, (first, second) in family.axes.items():
            if first not in side_values or second not in side_values:
                continue
            if side_values[first] != side_values[second]:
                continue
            sources = {side_origin[first], side_origin[second]}
            if sources == {axis}:
                continue
            self._replace(axis, sorted(sources), positions, slots)
            result.merged += 1

    @staticmethod
    def _replace(
        target: str,
        sources: list[str],
        positions: dict[str, int],
        slots: dict[int, Declaration],
    ) -> None:
        first = min(positions[s] for s in sources)
        template = slots[first]
        for source in sources:
            del slots[positions.pop(source)]
        slots[first] = template.replace_property(target)
        positions[target] = first


def optimize_declarations(declarations: list[Declaration]) -> list[Declaration]:
    """Convenience wrapper returning only the optimized declarations."""
    return Optimizer().optimize(declarations).declarations
