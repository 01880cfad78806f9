"""get_package_info tool -- registry metadata enriched with downloads and GitHub stats."""

from __future__ import annotations

import asyncio
from dataclasses import asdict

from mcp.server.fastmcp import Context

from npmlens.errors import NpmLensError
from npmlens.models import Period
from npmlens.tools._helpers import (
    FIVE_MINUTES_MS,
    cached_payload,
    get_context,
    internal_error,
    tool_error,
)


async def get_package_info(
    name: str,
    ctx: Context,
    version: str | None = None,
    include_readme: bool = False,
) -> dict[str, object]:
    """Get enriched package info: registry metadata, last-week downloads,
    and GitHub repository details when available.

    Args:
        name: Package name.
        version: Optional version (defaults to the latest manifest).
        include_readme: Also return the README body.

    Returns:
        Dict with name, version, repository, homepage, github (full_name,
        url, description, stars, forks, license, or None when the package
        has no GitHub repository) and downloads_last_week. Includes readme
        only when include_readme is True.
    """
    try:
        app = get_context(ctx)

        async def produce() -> dict[str, object]:
            meta = await app.registry.get_readme(name, version)
            downloads, repo = await asyncio.gather(
                app.downloads.last(Period.WEEK, name),
                app.github.fetch_repo_info(meta.repository),
            )
            payload: dict[str, object] = {
                "name": meta.name,
                "version": meta.version,
                "repository": repo.url if repo is not None else meta.repository,
                "homepage": meta.homepage,
                "github": asdict(repo) if repo is not None else None,
                "downloads_last_week": downloads.downloads,
            }
            if include_readme:
                payload["readme"] = meta.readme
            return payload

        parts = ["info", name, version or "latest", include_readme]
        return await cached_payload(app.cache, parts, produce, FIVE_MINUTES_MS)

    except NpmLensError as exc:
        return tool_error("get_package_info", exc)
    except Exception as exc:
        return await internal_error(ctx, "get_package_info", exc)
