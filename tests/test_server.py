"""Tests for server.py -- composition root, lifespan and registrations."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import httpx
import pytest

from npmlens.cache.memory import ResponseCache
from npmlens.comparison.engine import PackageComparer
from npmlens.github.client import GitHubClient
from npmlens.http.client import HttpClient
from npmlens.registry.client import NpmRegistryClient
from npmlens.registry.downloads import DownloadsClient
from npmlens.server import app_lifespan, build_app_context, mcp
from npmlens.settings import Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("GITHUB_TOKEN", "CACHE_TTL_MS", "CACHE_MAX"):
        monkeypatch.delenv(var, raising=False)


class TestAppLifespan:
    """Tests for the app_lifespan context manager."""

    async def test_wires_adapters(self):
        async with app_lifespan(MagicMock()) as ctx:
            assert isinstance(ctx.http_client, httpx.AsyncClient)
            assert isinstance(ctx.cache, ResponseCache)
            assert isinstance(ctx.registry, NpmRegistryClient)
            assert isinstance(ctx.downloads, DownloadsClient)
            assert isinstance(ctx.github, GitHubClient)
            assert isinstance(ctx.comparer, PackageComparer)
            assert ctx.comparer.registry is ctx.registry

    async def test_adapters_share_one_http_client(self):
        async with app_lifespan(MagicMock()) as ctx:
            assert isinstance(ctx.registry.http, HttpClient)
            assert ctx.registry.http.http is ctx.http_client
            assert ctx.github.http.http is ctx.http_client

    async def test_follow_redirects_and_connect_timeout(self):
        async with app_lifespan(MagicMock()) as ctx:
            assert ctx.http_client.follow_redirects is True
            assert ctx.http_client.timeout.connect == 10.0

    async def test_client_closed_after_lifespan(self):
        async with app_lifespan(MagicMock()) as ctx:
            client = ctx.http_client
            assert not client.is_closed

        assert client.is_closed

    async def test_reads_settings_from_env(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_x")
        monkeypatch.setenv("CACHE_MAX", "7")
        async with app_lifespan(MagicMock()) as ctx:
            assert ctx.github.token == "ghp_x"
            assert ctx.cache.max_entries == 7

    async def test_creates_http_client_with_pool_limits(self):
        original_init = httpx.AsyncClient.__init__
        captured_kwargs: dict[str, object] = {}

        def capture_init(self, **kwargs):
            captured_kwargs.update(kwargs)
            return original_init(self, **kwargs)

        with patch.object(httpx.AsyncClient, "__init__", capture_init):
            async with app_lifespan(MagicMock()) as ctx:
                assert ctx.http_client is not None

        limits = captured_kwargs["limits"]
        assert isinstance(limits, httpx.Limits)
        assert limits.max_connections == 10
        assert limits.max_keepalive_connections == 5


class TestBuildAppContext:
    def test_applies_settings(self):
        client = MagicMock(spec=httpx.AsyncClient)
        app = build_app_context(
            client, Settings(cache_ttl_ms=1000, cache_max_entries=3, github_token="t")
        )
        assert app.cache.default_ttl_ms == 1000
        assert app.cache.max_entries == 3
        assert app.github.token == "t"
        assert app.http_client is client


class TestRegistrations:
    async def test_tools_registered_read_only(self):
        tools = await mcp.list_tools()
        assert {t.name for t in tools} == {
            "search_npm",
            "search_by_keywords",
            "get_readme",
            "get_package_info",
            "get_downloads",
            "get_usage_snippet",
            "get_package_versions",
            "get_package_dependencies",
            "compare_packages",
        }
        assert all(t.annotations.readOnlyHint for t in tools)

    async def test_ctx_not_exposed_as_tool_argument(self):
        tools = {t.name: t for t in await mcp.list_tools()}
        props = tools["get_readme"].inputSchema["properties"]
        assert "ctx" not in props
        assert {"name", "version", "truncate_at"} <= set(props)

    async def test_static_resources(self):
        uris = {str(r.uri) for r in await mcp.list_resources()}
        assert {"npm://registry/search", "npm://registry/package"} <= uris

    async def test_resource_templates(self):
        templates = {t.uriTemplate for t in await mcp.list_resource_templates()}
        assert templates == {
            "npm://package/{name}",
            "npm://package/{name}/readme",
            "npm://package/{name}/version/{version}",
            "npm://package/{name}/downloads/{period}",
        }

    async def test_prompts(self):
        names = {p.name for p in await mcp.list_prompts()}
        assert names == {
            "search-packages",
            "analyze-package",
            "compare-alternatives",
            "check-dependencies",
        }
