"""Shared protocol definitions."""

from typing import Protocol


class RequestLogger(Protocol):
    """Protocol for request logging (Dashboard)."""

    def log_relay(
        self,
        method: str,
        path: str,
        target_url: str,
        status: int,
        elapsed_ms: int,
        *,
        headers: list[tuple[str, str]] | None = None,
    ) -> None: ...
    def log_probe(self, latency: int, upstream_status: int | None) -> None: ...
    def log_error(self, route: str, status: int, message: str) -> None: ...
