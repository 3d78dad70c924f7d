"""Target URL rewriting for relayed requests."""

import httpx

from core.config import UpstreamSettings
from core.exceptions import InvalidTargetError


class RequestTransformer:
    """Rewrite inbound paths into upstream URLs."""

    def __init__(self, upstream: UpstreamSettings) -> None:
        self._upstream = upstream

    def target_url(self, remainder: str, query: str = "") -> str:
        """Build ``<scheme>://<host>/<remainder>`` plus the untouched query."""
        url = f"{self._upstream.scheme}://{self._upstream.host}/{remainder}"
        if query:
            url += "?" + query
        try:
            httpx.URL(url)
        except httpx.InvalidURL as e:
            raise InvalidTargetError(f"Invalid upstream URL: {e}", target_url=url) from e
        return url
