"""Fetch repository metadata from the GitHub public API."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from urllib.parse import quote as urlquote

import httpx

from npmlens.http.base import HttpClientPort
from npmlens.http.client import read_json_object
from npmlens.models import RepoInfo, RepoRef

logger = logging.getLogger(__name__)

_API_URL = "https://api.github.com/repos"

_GITHUB_REPO_RE = re.compile(
    r"(?:^|[/@.])github\.com[/:]([^/\s?#]+)/([^/\s?#]+)",
    re.IGNORECASE,
)
_SHORTHAND_RE = re.compile(r"^github:([^/\s]+)/([^/\s?#]+)$", re.IGNORECASE)


# ─── URL parsing ───────────────────────────────────────────


def parse_repo_ref(raw: str | None) -> RepoRef | None:
    """Extract owner/repo from a GitHub repository reference.

    Accepts ``git+https://github.com/x/y.git``, ``https://github.com/x/y``,
    ``git://github.com/x/y.git``, ``git@github.com:x/y.git`` and the
    ``github:x/y`` shorthand. Returns None for anything else; never raises.
    """
    if not isinstance(raw, str):
        return None
    cleaned = raw.strip().removeprefix("git+")
    m = _SHORTHAND_RE.match(cleaned) or _GITHUB_REPO_RE.search(cleaned)
    if m is None:
        return None
    owner, repo = m.group(1), m.group(2).removesuffix(".git")
    if not owner or not repo:
        return None
    return RepoRef(owner=owner, repo=repo)


# ─── Client ────────────────────────────────────────────────


@dataclass
class GitHubClient:
    """Adapter for GitHubClientPort.

    Sends a bearer token when one is configured; without one the
    unauthenticated rate limit applies.
    """

    http: HttpClientPort
    token: str | None = None
    _logged_rate_limit_hint: bool = field(default=False, init=False, repr=False)

    async def fetch_repo_info(self, raw: str | None) -> RepoInfo | None:
        """Fetch stars, forks and license for a repository reference.

        Returns None if the reference is not a GitHub repo. A non-2xx
        answer (404, rate limit) degrades to a minimal RepoInfo instead of
        raising, so enrichment callers need no special handling for it.
        """
        ref = parse_repo_ref(raw)
        if ref is None:
            return None

        url = f"{_API_URL}/{urlquote(ref.owner, safe='')}/{urlquote(ref.repo, safe='')}"
        response = await self.http.get(url, headers=self._headers())
        self._check_rate_limit(response)

        if not response.is_success:
            logger.warning(
                "GitHub lookup for %s returned %d; using minimal repo info",
                ref.full_name,
                response.status_code,
            )
            return RepoInfo(full_name=ref.full_name, url=ref.html_url)

        data = read_json_object(response, f"GitHub lookup for {ref.full_name} failed")
        license_data = data.get("license") or {}
        return RepoInfo(
            full_name=data.get("full_name") or ref.full_name,
            url=data.get("html_url") or ref.html_url,
            description=data.get("description"),
            stars=data.get("stargazers_count"),
            forks=data.get("forks_count"),
            license=license_data.get("spdx_id") or license_data.get("key"),
        )

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _check_rate_limit(self, resp: httpx.Response) -> None:
        """Emit a single warning once the GitHub quota is exhausted."""
        if self._logged_rate_limit_hint or resp.headers.get("X-RateLimit-Remaining") != "0":
            return
        logger.warning(
            "GitHub API rate limit exhausted (%s). Repository stats degraded until reset.",
            "authenticated" if self.token else "no GITHUB_TOKEN set",
        )
        self._logged_rate_limit_hint = True
