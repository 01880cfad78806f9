"""Helpers shared by the tool handlers."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING

from mcp.server.fastmcp import Context

from npmlens.cache.base import ResponseCachePort
from npmlens.cache.memory import cache_key

if TYPE_CHECKING:
    from npmlens.server import AppContext

logger = logging.getLogger(__name__)

FIVE_MINUTES_MS = 5 * 60_000
TEN_MINUTES_MS = 10 * 60_000


def get_context(ctx: Context) -> AppContext:
    """Extract AppContext from FastMCP's lifespan context.

    Raises TypeError if the lifespan context is not an AppContext instance.
    This catches misconfiguration early with a clear error message.
    """
    from npmlens.server import AppContext

    app = ctx.request_context.lifespan_context
    if not isinstance(app, AppContext):
        msg = (
            f"Expected AppContext in lifespan_context, got {type(app).__name__}. "
            "Is the server configured with app_lifespan?"
        )
        raise TypeError(msg)
    return app


async def cached_payload(
    cache: ResponseCachePort,
    parts: Sequence[object],
    produce: Callable[[], Awaitable[object]],
    ttl_ms: int | None = None,
) -> object:
    """Return the cached payload for ``parts`` or compute and store it."""
    key = cache_key(parts)
    hit = cache.get(key)
    if hit is not None:
        logger.debug("Cache hit: %s", key)
        return hit
    payload = await produce()
    cache.set(key, payload, ttl_ms)
    return payload


def tool_error(tool: str, exc: Exception) -> dict[str, object]:
    return {"success": False, "error": f"{tool} error: {exc}"}


async def internal_error(ctx: Context, tool: str, exc: Exception) -> dict[str, object]:
    await ctx.error(f"Unexpected error in {tool}: {exc}")
    return {"success": False, "error": f"Internal error: {type(exc).__name__}"}
