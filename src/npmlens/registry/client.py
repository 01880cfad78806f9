"""HTTP client for the public npm registry.

API docs: https://github.com/npm/registry/blob/master/docs/REGISTRY-API.md
Base URL: https://registry.npmjs.org
"""

from __future__ import annotations

import calendar
import logging
import re
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from urllib.parse import quote as urlquote

import httpx

from npmlens.errors import InvalidInputError, UpstreamStatusError
from npmlens.http.base import HttpClientPort
from npmlens.http.client import read_json_object
from npmlens.models import (
    DependencyInfo,
    DependencyReport,
    PackageLinks,
    PackageMeta,
    PackageVersion,
    SearchPage,
    SearchResult,
    SearchWeights,
    VersionList,
)

logger = logging.getLogger(__name__)

_BASE_URL = "https://registry.npmjs.org"
_SEARCH_URL = f"{_BASE_URL}/-/v1/search"

MIN_SEARCH_SIZE = 1
MAX_SEARCH_SIZE = 250
MIN_DEPTH = 1
MAX_DEPTH = 3

_RELATIVE_SINCE_RE = re.compile(r"^\s*(\d+)\s*(day|month|year)s?\s*$", re.IGNORECASE)
_SCP_STYLE_RE = re.compile(r"^git@([^:/]+):(.+)$")


@dataclass
class NpmRegistryClient:
    """Async client for registry.npmjs.org."""

    http: HttpClientPort

    async def search(
        self,
        query: str,
        size: int = 10,
        offset: int = 0,
        weights: SearchWeights | None = None,
    ) -> SearchPage:
        """Search the npm registry.

        Args:
            query: Search text, e.g. "react debounce hook".
            size: Page size (1-250).
            offset: Pagination offset; left out of the request when 0.
            weights: Optional ranking weights; unset weights are not sent.

        Returns:
            Total hit count and the mapped results.
        """
        text = query.strip()
        if not text:
            raise InvalidInputError("Query must be a non-empty string")
        if not MIN_SEARCH_SIZE <= size <= MAX_SEARCH_SIZE:
            raise InvalidInputError(f"size must be between {MIN_SEARCH_SIZE} and {MAX_SEARCH_SIZE}")
        if offset < 0:
            raise InvalidInputError("offset must not be negative")

        params = {"text": text, "size": str(size)}
        if offset > 0:
            params["from"] = str(offset)
        if weights is not None:
            params.update(weights.as_params())

        response = await self.http.get(_SEARCH_URL, params=params)
        _ensure_success(response, "npm search failed")

        data = read_json_object(response, "npm search failed")
        results = [self._parse_search_object(obj) for obj in data.get("objects") or []]
        return SearchPage(total=int(data.get("total") or 0), results=results)

    async def get_readme(self, name: str, version: str | None = None) -> PackageMeta:
        """Read package metadata and the README body when the registry has one.

        When the registry omits ``version`` the requested one is reported
        instead, so the caller's intent survives a partial response.
        """
        data = await self._fetch_manifest(name, version, "npm package fetch failed")

        readme = data.get("readme")
        homepage = data.get("homepage")
        return PackageMeta(
            name=data.get("name") or name.strip(),
            version=data.get("version") or version,
            readme=readme if isinstance(readme, str) and readme else None,
            repository=_normalize_repository(data.get("repository")),
            homepage=homepage if isinstance(homepage, str) else None,
        )

    async def get_package_versions(
        self,
        name: str,
        limit: int | None = None,
        since: str | None = None,
    ) -> VersionList:
        """List published versions with their dist-tags, newest first.

        Args:
            name: Package name.
            limit: Keep at most this many versions (applied after filtering).
            since: ISO date or relative span such as "6 months". A value
                that parses as neither disables filtering.

        Returns:
            Versions sorted by publish time descending, ties broken by
            version string descending. Versions without a timestamp are
            dropped because they cannot be ordered.
        """
        if limit is not None and limit < 1:
            raise InvalidInputError("limit must be at least 1")
        data = await self._fetch_manifest(name, None, "npm package fetch failed")

        cutoff: datetime | None = None
        if since:
            cutoff = _parse_since(since, datetime.now(UTC))
            if cutoff is None:
                logger.warning("Unrecognised 'since' value %r; returning all versions", since)

        tags_by_version: dict[str, list[str]] = {}
        for tag, tagged in (data.get("dist-tags") or {}).items():
            tags_by_version.setdefault(tagged, []).append(tag)

        times = data.get("time") or {}
        dated: list[tuple[datetime, str, str]] = []
        for version in data.get("versions") or {}:
            stamp = times.get(version)
            published = _parse_timestamp(stamp)
            if published is None:
                continue
            if cutoff is not None and published < cutoff:
                continue
            dated.append((published, version, stamp))

        dated.sort(key=lambda item: (item[0], item[1]), reverse=True)
        if limit is not None:
            dated = dated[:limit]

        return VersionList(
            name=data.get("name") or name.strip(),
            versions=[
                PackageVersion(version=version, date=stamp, tags=tags_by_version.get(version, []))
                for _, version, stamp in dated
            ],
        )

    async def get_package_dependencies(
        self,
        name: str,
        version: str | None = None,
        depth: int = 1,
        include_dev: bool = False,
    ) -> DependencyReport:
        """List the direct dependencies declared by a package version.

        ``depth`` is validated (1-3) but only direct dependencies are
        resolved; deeper levels are not fetched.
        """
        if not MIN_DEPTH <= depth <= MAX_DEPTH:
            raise InvalidInputError(f"depth must be between {MIN_DEPTH} and {MAX_DEPTH}")
        data = await self._fetch_manifest(
            name, version or "latest", "npm package fetch failed"
        )

        dev: list[DependencyInfo] | None = None
        if include_dev:
            dev = _flatten_dependencies(data.get("devDependencies"))
        return DependencyReport(
            name=data.get("name") or name.strip(),
            version=data.get("version") or version or "latest",
            dependencies=_flatten_dependencies(data.get("dependencies")),
            dev_dependencies=dev,
        )

    # ── Request helpers ──────────────────────────────────────────

    async def _fetch_manifest(self, name: str, version: str | None, failure: str) -> dict:
        """GET ``/<name>`` or ``/<name>/<version>`` and decode the JSON body."""
        pkg = name.strip()
        if not pkg:
            raise InvalidInputError("Package name is required")

        url = f"{_BASE_URL}/{urlquote(pkg, safe='@')}"
        if version:
            url = f"{url}/{urlquote(version, safe='')}"

        response = await self.http.get(url)
        _ensure_success(response, failure)
        return read_json_object(response, failure)

    # ── Parsing helpers ──────────────────────────────────────────

    @staticmethod
    def _parse_search_object(obj: dict) -> SearchResult:
        """Map one ``objects[]`` entry of a search response.

        Tolerant of missing fields -- uses defaults rather than crashing.
        """
        pkg = obj.get("package") or {}
        links = pkg.get("links") or {}
        publisher = pkg.get("publisher") or {}
        score = (obj.get("score") or {}).get("final")
        return SearchResult(
            name=pkg.get("name", ""),
            version=pkg.get("version", ""),
            description=pkg.get("description"),
            publish_date=pkg.get("date"),
            links=PackageLinks(
                npm=links.get("npm"),
                homepage=links.get("homepage"),
                repository=links.get("repository"),
            ),
            maintainers=[
                m["username"] for m in pkg.get("maintainers") or [] if m.get("username")
            ],
            publisher=publisher.get("username"),
            keywords=list(pkg.get("keywords") or []),
            score=float(score) if score is not None else 0.0,
        )


def _ensure_success(response: httpx.Response, failure: str) -> None:
    if not response.is_success:
        raise UpstreamStatusError(
            f"{failure}: {response.status_code} {response.reason_phrase}",
            status_code=response.status_code,
            reason=response.reason_phrase,
        )


def _flatten_dependencies(raw: object) -> list[DependencyInfo]:
    if not isinstance(raw, dict):
        return []
    return [DependencyInfo(name=dep, version=str(spec)) for dep, spec in raw.items()]


def _normalize_repository(raw: object) -> str | None:
    """Collapse the string / ``{url}`` repository shapes into one https URL.

    ``git+https://github.com/z/w.git`` -> ``https://github.com/z/w``.
    Anything that is not a recognisable URL is returned as-is.
    """
    if isinstance(raw, dict):
        raw = raw.get("url")
    if not isinstance(raw, str) or not raw.strip():
        return None

    url = raw.strip().removeprefix("git+")
    scp = _SCP_STYLE_RE.match(url)
    if scp:
        url = f"https://{scp.group(1)}/{scp.group(2)}"
    elif url.startswith(("git://", "ssh://")):
        url = "https://" + url.split("://", 1)[1].split("@", 1)[-1]
    return url.removesuffix(".git")


def _parse_timestamp(value: object) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        moment = datetime.fromisoformat(value)
    except ValueError:
        return None
    return moment if moment.tzinfo else moment.replace(tzinfo=UTC)


def _parse_since(since: str, now: datetime) -> datetime | None:
    """Turn an ISO date or "<n> day|month|year(s)" into a cutoff, else None."""
    m = _RELATIVE_SINCE_RE.match(since)
    if m is None:
        return _parse_timestamp(since.strip())

    amount = int(m.group(1))
    unit = m.group(2).lower()
    try:
        if unit == "day":
            return now - timedelta(days=amount)
        months = amount if unit == "month" else amount * 12
        return _shift_months(now, months)
    except (OverflowError, ValueError):
        return datetime.min.replace(tzinfo=UTC)


def _shift_months(moment: datetime, months: int) -> datetime:
    """Move ``moment`` back by calendar months, clamping to the month's end."""
    year, month_index = divmod(moment.year * 12 + moment.month - 1 - months, 12)
    month = month_index + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)
