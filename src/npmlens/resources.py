"""MCP resources exposing npm registry endpoints and package data."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING
from urllib.parse import unquote

from mcp.server.fastmcp import FastMCP

from npmlens.cache.memory import cache_key
from npmlens.models import Period
from npmlens.tools._helpers import FIVE_MINUTES_MS, get_context

if TYPE_CHECKING:
    from npmlens.server import AppContext

logger = logging.getLogger(__name__)

_REGISTRY_DOCS = "https://github.com/npm/registry/blob/master/docs/REGISTRY-API.md"
_README_MISSING = "README not available"

_PERIOD_SEGMENTS = {
    "last-day": Period.DAY,
    "last-week": Period.WEEK,
    "last-month": Period.MONTH,
}


def registry_search_endpoint() -> str:
    return json.dumps(
        {"endpoint": "https://registry.npmjs.org/-/v1/search", "docs": _REGISTRY_DOCS},
        indent=2,
    )


def registry_package_endpoint() -> str:
    return json.dumps(
        {"endpoint": "https://registry.npmjs.org/<package>[/<version>]", "docs": _REGISTRY_DOCS},
        indent=2,
    )


async def package_info(app: AppContext, name: str) -> str:
    """Package summary JSON; downloads and GitHub failures degrade to 0 / null."""
    pkg = unquote(name)
    key = cache_key(["package_resource", pkg])
    cached = app.cache.get(key)
    if cached is not None:
        return cached

    try:
        meta = await app.registry.get_readme(pkg)
    except Exception as exc:
        logger.warning("Registry lookup for resource '%s' failed: %s", pkg, exc)
        meta = None

    downloads, repo = await asyncio.gather(
        app.downloads.last(Period.WEEK, pkg),
        app.github.fetch_repo_info(meta.repository if meta is not None else None),
        return_exceptions=True,
    )
    info = {
        "name": meta.name if meta is not None else pkg,
        "version": meta.version if meta is not None else None,
        "repository": meta.repository if meta is not None else None,
        "homepage": meta.homepage if meta is not None else None,
        "weekly_downloads": 0 if isinstance(downloads, BaseException) else downloads.downloads,
        "github": (
            None
            if repo is None or isinstance(repo, BaseException)
            else {"stars": repo.stars, "forks": repo.forks, "license": repo.license}
        ),
    }
    text = json.dumps(info, indent=2)
    app.cache.set(key, text, FIVE_MINUTES_MS)
    return text


async def package_readme(app: AppContext, name: str) -> str:
    meta = await app.registry.get_readme(unquote(name))
    return meta.readme or _README_MISSING


async def package_version(app: AppContext, name: str, version: str) -> str:
    requested = unquote(version)
    meta = await app.registry.get_readme(unquote(name), requested)
    return json.dumps(
        {
            "name": meta.name,
            "version": meta.version or requested,
            "repository": meta.repository,
            "homepage": meta.homepage,
        },
        indent=2,
    )


async def package_downloads(app: AppContext, name: str, period: str) -> str:
    """Downloads JSON; unknown period segments fall back to last-week."""
    window = _PERIOD_SEGMENTS.get(period, Period.WEEK)
    point = await app.downloads.last(window, unquote(name))
    return json.dumps(
        {
            "downloads": point.downloads,
            "start": point.start,
            "end": point.end,
            "package": point.package,
        },
        indent=2,
    )


def register_resources(mcp: FastMCP) -> None:
    """Attach the npm resources and resource templates to ``mcp``."""

    @mcp.resource(
        "npm://registry/search",
        name="npm Search API",
        description="Queries https://registry.npmjs.org/-/v1/search",
        mime_type="application/json",
    )
    def _search_endpoint() -> str:
        return registry_search_endpoint()

    @mcp.resource(
        "npm://registry/package",
        name="npm Package API",
        description="Reads https://registry.npmjs.org/<package>[/<version>]",
        mime_type="application/json",
    )
    def _package_endpoint() -> str:
        return registry_package_endpoint()

    @mcp.resource(
        "npm://package/{name}",
        name="Package Information",
        description="Get detailed information about any npm package by name",
        mime_type="application/json",
    )
    async def _package_info(name: str) -> str:
        return await package_info(get_context(mcp.get_context()), name)

    @mcp.resource(
        "npm://package/{name}/readme",
        name="Package README",
        description="Get the README for any npm package",
        mime_type="text/markdown",
    )
    async def _package_readme(name: str) -> str:
        return await package_readme(get_context(mcp.get_context()), name)

    @mcp.resource(
        "npm://package/{name}/version/{version}",
        name="Specific Package Version",
        description="Get information about a specific version of a package",
        mime_type="application/json",
    )
    async def _package_version(name: str, version: str) -> str:
        return await package_version(get_context(mcp.get_context()), name, version)

    @mcp.resource(
        "npm://package/{name}/downloads/{period}",
        name="Package Downloads",
        description="Get download statistics (period: last-day, last-week, last-month)",
        mime_type="application/json",
    )
    async def _package_downloads(name: str, period: str) -> str:
        return await package_downloads(get_context(mcp.get_context()), name, period)
