"""compare_packages tool -- side-by-side package comparison."""

from __future__ import annotations

from dataclasses import asdict

from mcp.server.fastmcp import Context

from npmlens.errors import NpmLensError
from npmlens.tools._helpers import (
    FIVE_MINUTES_MS,
    cached_payload,
    get_context,
    internal_error,
    tool_error,
)


async def compare_packages(
    packages: list[str],
    ctx: Context,
) -> dict[str, object]:
    """Compare npm packages side-by-side (downloads, stars, license, etc.).

    A package that cannot be looked up gets an "error" entry without
    hiding the data collected for the others.

    Args:
        packages: 1-10 package names.

    Returns:
        Dict with packages: one row per input name, in input order, with
        name, version, description, downloads (last week), stars, forks,
        license, repository, homepage and error.
    """
    try:
        app = get_context(ctx)

        async def produce() -> dict[str, object]:
            rows = await app.comparer.compare(packages)
            return {"packages": [asdict(row) for row in rows]}

        return await cached_payload(app.cache, ["compare", *packages], produce, FIVE_MINUTES_MS)

    except NpmLensError as exc:
        return tool_error("compare_packages", exc)
    except Exception as exc:
        return await internal_error(ctx, "compare_packages", exc)
