"""Environment-level settings consumed at the composition root."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_DEFAULT_CACHE_TTL_MS = 60_000
_DEFAULT_CACHE_MAX = 500


@dataclass(frozen=True, slots=True)
class Settings:
    """Cache sizing and optional GitHub credentials.

    A missing GitHub token is fine; it only lowers the GitHub rate limit.
    """

    cache_ttl_ms: int = _DEFAULT_CACHE_TTL_MS
    cache_max_entries: int = _DEFAULT_CACHE_MAX
    github_token: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        token = env.get("GITHUB_TOKEN", "").strip()
        return cls(
            cache_ttl_ms=_positive_int(env, "CACHE_TTL_MS", _DEFAULT_CACHE_TTL_MS),
            cache_max_entries=_positive_int(env, "CACHE_MAX", _DEFAULT_CACHE_MAX),
            github_token=token or None,
        )


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %d", name, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring %s=%r: must be positive, using %d", name, raw, default)
        return default
    return value
