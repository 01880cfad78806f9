"""get_package_dependencies tool -- declared dependencies of a version."""

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


async def get_package_dependencies(
    name: str,
    ctx: Context,
    version: str | None = None,
    depth: int = 1,
    include_dev_dependencies: bool = False,
) -> dict[str, object]:
    """Get the dependencies declared by a package version.

    Only direct dependencies are listed; depth is accepted (1-3) for
    forward compatibility but deeper levels are not resolved.

    Args:
        name: Package name.
        version: Package version (defaults to latest).
        depth: Requested tree depth, 1-3.
        include_dev_dependencies: Also list devDependencies.

    Returns:
        Dict with name, version and dependencies (name + semver range).
        dev_dependencies is present only when include_dev_dependencies is
        True.
    """
    try:
        app = get_context(ctx)

        async def produce() -> dict[str, object]:
            report = await app.registry.get_package_dependencies(
                name, version, depth, include_dev_dependencies
            )
            return report.to_dict()

        parts = ["deps", name, version or "latest", depth, include_dev_dependencies]
        return await cached_payload(app.cache, parts, produce, FIVE_MINUTES_MS)

    except NpmLensError as exc:
        return tool_error("get_package_dependencies", exc)
    except Exception as exc:
        return await internal_error(ctx, "get_package_dependencies", exc)
