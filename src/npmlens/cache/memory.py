"""In-memory LRU cache with per-entry TTL for tool payloads."""

from __future__ import annotations

import copy
import json
import math
import time
from collections import OrderedDict
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field


def cache_key(parts: Sequence[object]) -> str:
    """Build a stable key from ordered parts.

    Strings pass through; everything else becomes canonical JSON. Order
    matters. Callers lead with a namespace literal (``"search"``, ...).
    """
    return "|".join(
        part if isinstance(part, str) else json.dumps(part, sort_keys=True, separators=(",", ":"))
        for part in parts
    )


@dataclass
class ResponseCache:
    """Bounded cache: least-recently-used eviction, lazy per-entry expiry.

    Values are deep-copied in and out. A TTL of zero or less means the
    entry never expires and only leaves through eviction. Operations never
    await, so tasks on one event loop see each call as atomic.
    """

    default_ttl_ms: int = 60_000
    max_entries: int = 500
    clock: Callable[[], float] = time.monotonic
    _entries: OrderedDict[str, tuple[float, object]] = field(
        default_factory=OrderedDict,
        init=False,
        repr=False,
    )

    def get(self, key: str) -> object | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self.clock() >= expires_at:
            del self._entries[key]
            return None
        self._entries.move_to_end(key)
        return copy.deepcopy(value)

    def set(self, key: str, value: object, ttl_ms: int | None = None) -> None:
        ttl = self.default_ttl_ms if ttl_ms is None else ttl_ms
        expires_at = self.clock() + ttl / 1000 if ttl > 0 else math.inf
        self._entries[key] = (expires_at, copy.deepcopy(value))
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
