"""A small pool of reusable scratch lists."""

from __future__ import annotations

from typing import Any


class ObjectPool:
    """Hands out cleared lists and takes them back, keeping at most ``max_size``."""

    def __init__(self, max_size: int = 16) -> None:
        self.max_size = max_size
        self._free: list[list[Any]] = []
        self.created = 0
        self.reused = 0

    def acquire(self) -> list[Any]:
        if self._free:
            self.reused += 1
            return self._free.pop()
        self.created += 1
        return []

    def release(self, item: list[Any]) -> None:
        item.clear()
        if len(self._free) < self.max_size:
            self._free.append(item)

    def clear(self) -> None:
        self._free.clear()
        self.created = 0
        self.reused = 0

    @property
    def available(self) -> int:
        return len(self._free)

    def stats(self) -> dict[str, int]:
        return {
            "available": self.available,
            "max_size": self.max_size,
            "created": self.created,
            "reused": self.reused,
        }
