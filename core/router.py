"""Request routing logic - picks the responder for an inbound request."""

from dataclasses import dataclass

STATIC = "static"
STATUS = "status"
PROXY = "proxy"
PREFLIGHT = "preflight"
NOT_FOUND = "not_found"

STATUS_PATH = "/api/status"


@dataclass(frozen=True)
class RouteDecision:
    """Routing decision for a request."""

    route: str
    remainder: str | None = None


class RouteDecider:
    """Decide which responder handles a request.

    Checks run in priority order and the first match wins: root page,
    status probe, proxy prefix, CORS preflight, then not found.
    """

    def __init__(self, prefix: str = "/proxy/"):
        self.prefix = prefix

    def decide(self, path: str, method: str) -> RouteDecision:
        """Return the route for a raw request path and method."""
        if path in ("", "/"):
            return RouteDecision(route=STATIC)
        if path == STATUS_PATH:
            return RouteDecision(route=STATUS)
        if path.startswith(self.prefix):
            return RouteDecision(route=PROXY, remainder=path[len(self.prefix):])
        if method.upper() == "OPTIONS":
            return RouteDecision(route=PREFLIGHT)
        return RouteDecision(route=NOT_FOUND)
