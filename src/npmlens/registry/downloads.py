"""HTTP client for the npm downloads API.

Base URL: https://api.npmjs.org/downloads/point
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote as urlquote

from npmlens.errors import InvalidInputError, UpstreamStatusError
from npmlens.http.base import HttpClientPort
from npmlens.http.client import read_json_object
from npmlens.models import DownloadsPoint, Period

_BASE_URL = "https://api.npmjs.org/downloads/point"


@dataclass
class DownloadsClient:
    """Async client for npm download counts."""

    http: HttpClientPort

    async def last(self, period: Period, name: str) -> DownloadsPoint:
        """Fetch downloads for the last day, week, or month.

        A non-2xx answer is an error: there is no sensible default count.
        """
        pkg = name.strip()
        if not pkg:
            raise InvalidInputError("Package name is required")
        period = Period(period)

        response = await self.http.get(f"{_BASE_URL}/{period.path_segment}/{urlquote(pkg, safe='@')}")
        if not response.is_success:
            raise UpstreamStatusError(
                f"downloads fetch failed: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                reason=response.reason_phrase,
            )

        data = read_json_object(response, "downloads fetch failed")
        return DownloadsPoint(
            downloads=int(data.get("downloads") or 0),
            start=data.get("start", ""),
            end=data.get("end", ""),
            package=data.get("package", pkg),
        )
