"""Geometry cache owned by a morpher instance.

Entries are immutable once computed, so concurrent transitions can share them.
Writers check, compute and insert without locking; when two callers race the
last write wins, which is harmless because both computed the same value.
Entries are only dropped by ``clear()`` or, when bounded, by least-recent-use
eviction.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Callable, Hashable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

V = TypeVar("V")

_MISSING = object()


class GeometryCache(Generic[V]):
    def __init__(self, name: str, max_entries: int = 0) -> None:
        self.name = name
        self.max_entries = max_entries
        self._entries: OrderedDict[Hashable, V] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def get_or_compute(self, key: Hashable, compute: Callable[[], V]) -> V:
        value = self._entries.get(key, _MISSING)
        if value is not _MISSING:
            self.hits += 1
            if self.max_entries and key in self._entries:
                self._entries.move_to_end(key)
            return value

        self.misses += 1
        value = compute()
        self._entries[key] = value
        if self.max_entries and len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
        logger.debug("%s cache miss (%d entries)", self.name, len(self._entries))
        return value

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
