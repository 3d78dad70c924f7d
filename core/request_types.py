"""Shared request data types."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PreparedRequest:
    """Prepared data for an upstream request."""

    method: str
    path: str
    target_url: str
    headers: list[tuple[str, str]]
    has_body: bool = False
