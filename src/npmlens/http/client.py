"""GET helper with a per-attempt timeout and linear retry backoff.

Only transport failures (connection errors, timeouts) are retried.
Non-2xx responses come back untouched so callers decide what a 404 means.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass

import httpx

from npmlens import __version__
from npmlens.errors import InvalidResponseError, NetworkError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 12_000
DEFAULT_RETRIES = 1
USER_AGENT = f"npmlens-mcp/{__version__} (+https://www.npmjs.com/)"

_BACKOFF_STEP_SECONDS = 0.3
_RETRYABLE = (httpx.RequestError, TimeoutError)


@dataclass
class HttpClient:
    """Adapter for HttpClientPort -- holds the shared httpx client."""

    http: httpx.AsyncClient
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    retries: int = DEFAULT_RETRIES

    async def get(
        self,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout_ms: int | None = None,
        retries: int | None = None,
    ) -> httpx.Response:
        """Perform a GET with timeout and retry.

        Args:
            url: Absolute URL to fetch.
            params: Query parameters.
            headers: Extra headers, merged over the identifying User-Agent.
            timeout_ms: Per-attempt timeout (default 12s).
            retries: Extra attempts after the first on transport failure
                (default 1).

        Returns:
            The response, whatever its status code.

        Raises:
            NetworkError: Every attempt failed at the transport level.
        """
        timeout_s = (timeout_ms if timeout_ms is not None else self.timeout_ms) / 1000
        max_retries = max(0, retries if retries is not None else self.retries)
        merged = {"User-Agent": USER_AGENT, **(headers or {})}

        last_exc: BaseException | None = None
        for attempt in range(max_retries + 1):
            try:
                async with asyncio.timeout(timeout_s):
                    return await self.http.get(url, params=params, headers=merged)
            except _RETRYABLE as exc:
                last_exc = exc
                if attempt == max_retries:
                    break
                delay = _BACKOFF_STEP_SECONDS * (attempt + 1)
                logger.warning(
                    "GET %s failed (%s), retrying in %.1fs (attempt %d/%d)",
                    url,
                    _describe(exc),
                    delay,
                    attempt + 1,
                    max_retries + 1,
                )
                await asyncio.sleep(delay)

        raise NetworkError(f"GET {url} failed: {_describe(last_exc)}") from last_exc


def read_json_object(response: httpx.Response, failure: str) -> dict:
    """Decode a successful response body that must be a JSON object."""
    try:
        data = response.json()
    except ValueError as exc:
        raise InvalidResponseError(f"{failure}: response body is not valid JSON") from exc
    if not isinstance(data, dict):
        raise InvalidResponseError(
            f"{failure}: expected a JSON object, got {type(data).__name__}"
        )
    return data


def _describe(exc: BaseException | None) -> str:
    if exc is None:
        return "unknown error"
    if isinstance(exc, TimeoutError):
        return "timed out"
    return str(exc) or type(exc).__name__
