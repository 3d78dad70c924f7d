"""Custom exception hierarchy for the relay.

Every exception here knows how to render itself as a JSON body. The app
installs a single handler for ``ProxyError`` that turns any of them into a
response, so services only ever raise.
"""

from datetime import UTC, datetime
from typing import Any


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, ``Z`` suffixed."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ProxyError(Exception):
    """Base exception for all relay errors.

    Attributes:
        status_code: HTTP status returned to the caller
    """

    status_code = 500

    def payload(self) -> dict[str, Any]:
        return {"error": describe(self)}


class UpstreamError(ProxyError):
    """Raised when a relayed request cannot reach the upstream.

    Attributes:
        message: Error message
        target_url: Upstream URL the relay was trying to reach (optional)
    """

    def __init__(self, message: str, target_url: str | None = None) -> None:
        super().__init__(message)
        self.target_url = target_url


class UpstreamTimeoutError(UpstreamError):
    """Raised when the upstream request times out."""


class UpstreamConnectionError(UpstreamError):
    """Raised when unable to connect to the upstream."""


class InvalidTargetError(UpstreamError):
    """Raised when the rewritten upstream URL cannot be parsed."""


class ProbeError(ProxyError):
    """Raised when the status probe endpoint cannot be reached."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.timestamp = utc_timestamp()

    def payload(self) -> dict[str, Any]:
        return {
            "status": "degraded",
            "error": describe(self),
            "timestamp": self.timestamp,
        }


def describe(exc: BaseException) -> str:
    """Human readable message for an exception, never empty."""
    return str(exc) or type(exc).__name__
