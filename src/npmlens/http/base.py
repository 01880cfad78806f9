"""Port: outbound HTTP GET with timeout and retry."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

import httpx


class HttpClientPort(Protocol):
    """Port for issuing GET requests against upstream APIs."""

    async def get(
        self,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout_ms: int | None = None,
        retries: int | None = None,
    ) -> httpx.Response:
        """GET ``url``; non-2xx responses are returned, transport failures raise."""
        ...
