"""PackageComparer -- side-by-side enrichment of several npm packages."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from npmlens.errors import InvalidInputError, NpmLensError
from npmlens.github.base import GitHubClientPort
from npmlens.models import PackageComparison, Period
from npmlens.registry.base import DownloadsClientPort, RegistryClientPort

logger = logging.getLogger(__name__)

MIN_PACKAGES = 1
MAX_PACKAGES = 10
_DESCRIPTION_MAX_CHARS = 200


@dataclass
class PackageComparer:
    """Merges registry metadata, weekly downloads and GitHub stats per package.

    Every package is enriched concurrently. A failure stays inside its own
    row: a registry failure turns the row into ``{name, error}``, a
    downloads or GitHub failure only blanks that field.

    Args:
        registry: npm registry adapter.
        downloads: npm downloads adapter.
        github: GitHub repository adapter.
    """

    registry: RegistryClientPort
    downloads: DownloadsClientPort
    github: GitHubClientPort

    async def compare(self, names: list[str]) -> list[PackageComparison]:
        """Compare 1-10 packages; rows come back in input order."""
        if not MIN_PACKAGES <= len(names) <= MAX_PACKAGES:
            raise InvalidInputError(
                f"Provide between {MIN_PACKAGES} and {MAX_PACKAGES} package names"
            )
        return list(await asyncio.gather(*(self._compare_one(name) for name in names)))

    async def _compare_one(self, name: str) -> PackageComparison:
        pkg = name.strip()
        if not pkg:
            return PackageComparison(name=name, error="Package name is required")

        try:
            meta = await self.registry.get_readme(pkg)
        except Exception as exc:
            logger.debug("Registry lookup for '%s' failed: %s", pkg, exc)
            return PackageComparison(name=pkg, error=_error_value(exc))

        downloads, repo = await asyncio.gather(
            self.downloads.last(Period.WEEK, pkg),
            self.github.fetch_repo_info(meta.repository),
            return_exceptions=True,
        )
        if isinstance(downloads, BaseException):
            logger.debug("Downloads lookup for '%s' failed: %s", pkg, downloads)
            downloads = None
        if isinstance(repo, BaseException):
            logger.debug("GitHub lookup for '%s' failed: %s", pkg, repo)
            repo = None

        return PackageComparison(
            name=meta.name,
            version=meta.version,
            description=readme_summary(meta.readme),
            downloads=downloads.downloads if downloads is not None else None,
            stars=repo.stars if repo is not None else None,
            forks=repo.forks if repo is not None else None,
            license=repo.license if repo is not None else None,
            repository=repo.url if repo is not None else meta.repository,
            homepage=meta.homepage,
        )


def readme_summary(readme: str | None) -> str | None:
    """First README line without heading markers, capped at 200 chars."""
    lines = (readme or "").splitlines()
    if not lines:
        return None
    summary = lines[0].lstrip("#").strip()[:_DESCRIPTION_MAX_CHARS]
    return summary or None


def _error_value(exc: Exception) -> object:
    """Diagnostic value for a failed row.

    Our own errors give their message. An exception raised with a single
    JSON-native payload (str, number, bool, None, or lists and string-keyed
    dicts of those) keeps that payload unchanged; any other payload is
    reduced to its repr so the row stays serialisable.
    """
    if not isinstance(exc, NpmLensError) and len(exc.args) == 1:
        payload = exc.args[0]
        return payload if _is_json_native(payload) else repr(payload)
    return str(exc) or type(exc).__name__


def _is_json_native(value: object) -> bool:
    if value is None or isinstance(value, str | int | float | bool):
        return True
    if isinstance(value, list):
        return all(_is_json_native(item) for item in value)
    if isinstance(value, dict):
        return all(
            isinstance(key, str) and _is_json_native(item) for key, item in value.items()
        )
    return False
