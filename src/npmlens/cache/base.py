"""Port: response cache shared by all tool invocations."""

from __future__ import annotations

from typing import Protocol


class ResponseCachePort(Protocol):
    """Port for a TTL key/value cache of tool payloads."""

    def get(self, key: str) -> object | None:
        """Return the cached value, or None when missing or expired."""
        ...

    def set(self, key: str, value: object, ttl_ms: int | None = None) -> None:
        """Store ``value`` under ``key`` for ``ttl_ms`` (default TTL when None)."""
        ...
