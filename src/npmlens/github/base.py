"""Port: GitHub repository metadata."""

from __future__ import annotations

from typing import Protocol

from npmlens.models import RepoInfo


class GitHubClientPort(Protocol):
    """Port for fetching repository stats from the GitHub REST API."""

    async def fetch_repo_info(self, raw: str | None) -> RepoInfo | None:
        """Fetch stats for a repository URL; None when it is not a GitHub repo."""
        ...
