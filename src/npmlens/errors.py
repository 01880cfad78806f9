"""Exception hierarchy for npmlens.

All exceptions inherit from NpmLensError (single catch point).
Messages are written for LLM consumption -- clear, actionable, no stack traces.
"""

from __future__ import annotations


class NpmLensError(Exception):
    """Base exception for all npmlens errors."""


class InvalidInputError(NpmLensError):
    """Caller input was rejected before any network call."""


class NetworkError(NpmLensError):
    """Request failed at the transport level after all retries."""


class UpstreamStatusError(NpmLensError):
    """Upstream API answered with a non-2xx status."""

    def __init__(self, message: str, *, status_code: int, reason: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class InvalidResponseError(NpmLensError):
    """Upstream answered 2xx with a body that is not a JSON object."""
