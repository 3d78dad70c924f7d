"""Header construction for relayed requests and responses."""

from collections.abc import Iterable

import httpx

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "*",
}

# Framing is redone by the server on our side of the relay
HOP_BY_HOP = frozenset({"connection", "keep-alive", "transfer-encoding"})


class HeaderBuilder:
    """Build outbound and relayed header lists."""

    def build_upstream_headers(
        self, headers: Iterable[tuple[str, str]]
    ) -> list[tuple[str, str]]:
        """Pass every inbound header through except Host.

        The HTTP client derives Host from the target URL.
        """
        return [(key, value) for key, value in headers if key.lower() != "host"]

    def drop_client_defaults(
        self, outbound: httpx.Headers, inbound: Iterable[tuple[str, str]]
    ) -> None:
        """Remove headers the HTTP client added on its own.

        Only Host may differ from the inbound set.
        """
        allowed = {key.lower() for key, _ in inbound} | {"host"}
        for name in list(outbound.keys()):
            if name not in allowed:
                del outbound[name]

    def build_relay_headers(
        self, headers: Iterable[tuple[str, str]]
    ) -> list[tuple[str, str]]:
        """Copy upstream headers and append the CORS set."""
        relayed = [(key, value) for key, value in headers if key.lower() not in HOP_BY_HOP]
        relayed.extend(CORS_HEADERS.items())
        return relayed

    def cors_headers(self) -> dict[str, str]:
        return dict(CORS_HEADERS)
