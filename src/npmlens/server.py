"""MCP server exposing npm registry, downloads and GitHub lookups as tools."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from npmlens.cache.base import ResponseCachePort
from npmlens.cache.memory import ResponseCache
from npmlens.comparison.engine import PackageComparer
from npmlens.github.base import GitHubClientPort
from npmlens.github.client import GitHubClient
from npmlens.http.client import HttpClient
from npmlens.prompts import register_prompts
from npmlens.registry.base import DownloadsClientPort, RegistryClientPort
from npmlens.registry.client import NpmRegistryClient
from npmlens.registry.downloads import DownloadsClient
from npmlens.resources import register_resources
from npmlens.settings import Settings
from npmlens.tools.compare import compare_packages
from npmlens.tools.dependencies import get_package_dependencies
from npmlens.tools.downloads import get_downloads
from npmlens.tools.info import get_package_info
from npmlens.tools.readme import get_readme, get_usage_snippet
from npmlens.tools.search import search_by_keywords, search_npm
from npmlens.tools.versions import get_package_versions


@dataclass(frozen=True, slots=True)
class AppContext:
    """Shared state across all tool invocations.

    The response cache is the only mutable piece; adapters are stateless
    apart from the shared httpx client.
    """

    http_client: httpx.AsyncClient
    cache: ResponseCachePort
    registry: RegistryClientPort
    downloads: DownloadsClientPort
    github: GitHubClientPort
    comparer: PackageComparer


def build_app_context(http_client: httpx.AsyncClient, settings: Settings) -> AppContext:
    """Wire adapters around one httpx client -- the composition root."""
    http = HttpClient(http_client)
    registry = NpmRegistryClient(http)
    downloads = DownloadsClient(http)
    github = GitHubClient(http, token=settings.github_token)
    return AppContext(
        http_client=http_client,
        cache=ResponseCache(
            default_ttl_ms=settings.cache_ttl_ms,
            max_entries=settings.cache_max_entries,
        ),
        registry=registry,
        downloads=downloads,
        github=github,
        comparer=PackageComparer(registry=registry, downloads=downloads, github=github),
    )


@asynccontextmanager
async def open_app_context(settings: Settings | None = None) -> AsyncIterator[AppContext]:
    """Own the httpx client for the lifetime of the returned AppContext."""
    async with httpx.AsyncClient(
        # HttpClient bounds each attempt; httpx only guards the connect phase.
        timeout=httpx.Timeout(None, connect=10.0),
        follow_redirects=True,
        limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
    ) as http_client:
        yield build_app_context(http_client, settings or Settings.from_env())


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[AppContext]:
    async with open_app_context() as app:
        yield app


mcp = FastMCP(
    "npmlens-mcp",
    instructions=(
        "npmlens answers questions about npm packages using the public npm registry, "
        "the npm downloads API and GitHub.\n\n"
        "- **search_npm** / **search_by_keywords** -- find packages.\n"
        "- **get_package_info** -- metadata, weekly downloads and GitHub stats in one call.\n"
        "- **get_readme** / **get_usage_snippet** -- documentation and a usage example.\n"
        "- **get_downloads** -- download counts for the last day, week or month.\n"
        "- **get_package_versions** -- release history with dist-tags; filter with "
        "'since' (e.g. '6 months').\n"
        "- **get_package_dependencies** -- direct dependencies with their ranges.\n"
        "- **compare_packages** -- up to 10 packages side by side. Rows that fail carry "
        "an 'error' field; the other rows are still valid.\n\n"
        "Results are cached for a few minutes, so very recent publishes may lag."
    ),
    lifespan=app_lifespan,
)

# ─── Read-only tools ──────────────────────────────────────────
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(search_npm)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(search_by_keywords)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(get_readme)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(get_package_info)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(get_downloads)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(get_usage_snippet)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(get_package_versions)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(get_package_dependencies)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(compare_packages)

register_resources(mcp)
register_prompts(mcp)
