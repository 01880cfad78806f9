"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import httpx
import pytest

from npmlens.http.client import HttpClient


@pytest.fixture
def raw_http() -> AsyncMock:
    """Mocked httpx.AsyncClient; tests set ``raw_http.get`` return values."""
    client = AsyncMock(spec=httpx.AsyncClient)
    client.get = AsyncMock(return_value=httpx.Response(200, json={}))
    return client


@pytest.fixture
def http(raw_http: AsyncMock) -> HttpClient:
    """HttpClient wrapping the mocked httpx client."""
    return HttpClient(raw_http)
