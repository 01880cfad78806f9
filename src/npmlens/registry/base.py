"""Ports: npm registry and downloads API clients."""

from __future__ import annotations

from typing import Protocol

from npmlens.models import (
    DependencyReport,
    DownloadsPoint,
    PackageMeta,
    Period,
    SearchPage,
    SearchWeights,
    VersionList,
)


class RegistryClientPort(Protocol):
    """Port for querying registry.npmjs.org."""

    async def search(
        self,
        query: str,
        size: int = 10,
        offset: int = 0,
        weights: SearchWeights | None = None,
    ) -> SearchPage:
        """Search the registry for packages matching a query."""
        ...

    async def get_readme(self, name: str, version: str | None = None) -> PackageMeta:
        """Fetch package metadata including the README body when present."""
        ...

    async def get_package_versions(
        self,
        name: str,
        limit: int | None = None,
        since: str | None = None,
    ) -> VersionList:
        """List published versions, newest first."""
        ...

    async def get_package_dependencies(
        self,
        name: str,
        version: str | None = None,
        depth: int = 1,
        include_dev: bool = False,
    ) -> DependencyReport:
        """List the direct dependencies of a package version."""
        ...


class DownloadsClientPort(Protocol):
    """Port for querying api.npmjs.org download counts."""

    async def last(self, period: Period, name: str) -> DownloadsPoint:
        """Downloads over the last day, week, or month."""
        ...
