"""get_package_versions tool -- published versions with dist-tags."""

from __future__ import annotations

from mcp.server.fastmcp import Context

from npmlens.errors import NpmLensError
from npmlens.tools._helpers import (
    FIVE_MINUTES_MS,
    cached_payload,
    get_context,
    internal_error,
    tool_error,
)


async def get_package_versions(
    name: str,
    ctx: Context,
    limit: int | None = None,
    since: str | None = None,
) -> dict[str, object]:
    """List the published versions of a package with publish dates and dist-tags.

    Args:
        name: Package name.
        limit: Maximum number of versions to return (>= 1).
        since: Only versions published after this point: an ISO date
            ("2024-01-01") or a relative span ("6 months", "30 days",
            "1 year"). Unrecognised values return every version.

    Returns:
        Dict with name and versions (newest first), each with version,
        date and, when any dist-tag points at it, tags.
    """
    try:
        app = get_context(ctx)

        async def produce() -> dict[str, object]:
            versions = await app.registry.get_package_versions(name, limit, since)
            return versions.to_dict()

        parts = ["versions", name, limit or 0, since or ""]
        return await cached_payload(app.cache, parts, produce, FIVE_MINUTES_MS)

    except NpmLensError as exc:
        return tool_error("get_package_versions", exc)
    except Exception as exc:
        return await internal_error(ctx, "get_package_versions", exc)
