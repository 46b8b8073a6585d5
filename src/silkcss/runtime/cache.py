"""Bounded LRU memo from style objects to class strings."""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Hashable, Mapping

from silkcss.runtime.pool import ObjectPool

logger = logging.getLogger(__name__)


def freeze_style(value: Any) -> Hashable:
    """Order-independent, hashable form of a style object.

    Mapping key order is ignored and ``None`` entries are dropped, matching
    what the canonicalizer does with them. Booleans are tagged so ``True``
    never collides with ``1``; list order is kept.
    """
    if isinstance(value, Mapping):
        return frozenset(
            (str(key), freeze_style(item)) for key, item in value.items() if item is not None
        )
    if isinstance(value, (list, tuple)):
        return ("list", tuple(freeze_style(item) for item in value))
    if isinstance(value, bool):
        return ("bool", value)
    if isinstance(value, (str, int, float)):
        return value
    return ("repr", type(value).__name__, repr(value))


@dataclass(frozen=True)
class CacheStats:
    size: int
    max_size: int
    hits: int
    misses: int
    evictions: int

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0

    def to_dict(self) -> dict[str, float]:
        return {
            "size": self.size,
            "max_size": self.max_size,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "hit_rate": round(self.hit_rate, 4),
        }


class RuntimeCache:
    """LRU memo plus the scratch-list pool used while compiling.

    Not locked on its own; :class:`~silkcss.runtime.system.StyleSystem`
    serializes access.
    """

    def __init__(self, max_size: int = 1024, pool_size: int = 16) -> None:
        self.max_size = max_size
        self.pool = ObjectPool(pool_size)
        self._memo: OrderedDict[Hashable, str] = OrderedDict()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def get(self, key: Hashable) -> str | None:
        value = self._memo.get(key)
        if value is None:
            self.misses += 1
            return None
        self._memo.move_to_end(key)
        self.hits += 1
        return value

    def put(self, key: Hashable, value: str) -> None:
        self._memo[key] = value
        self._memo.move_to_end(key)
        while len(self._memo) > self.max_size:
            self._memo.popitem(last=False)
            self.evictions += 1
            logger.debug("Evicted least recently used style (size=%d)", self.max_size)

    def __len__(self) -> int:
        return len(self._memo)

    def reset(self) -> None:
        """Clear the memo, the counters and the pool together."""
        self._memo.clear()
        self.hits = 0
        self.misses = 0
        self.evictions = 0
        self.pool.clear()

    def stats(self) -> CacheStats:
        return CacheStats(
            size=len(self._memo),
            max_size=self.max_size,
            hits=self.hits,
            misses=self.misses,
            evictions=self.evictions,
        )
