"""Upstream health probe for /api/status."""

import time
from typing import Any

import httpx

from core.config import ProbeSettings
from core.exceptions import ProbeError, describe, utc_timestamp
from core.protocols import RequestLogger

# Display placeholder shown by the status page, not a measured SLA
UPTIME_PLACEHOLDER = "99.9%"


class StatusProbe:
    """Measure latency to a fixed, well-known upstream endpoint."""

    def __init__(self, client: httpx.AsyncClient, settings: ProbeSettings) -> None:
        self._client = client
        self._settings = settings

    async def check(self, logger: RequestLogger) -> dict[str, Any]:
        """Run one probe and return the status payload.

        Raises:
            ProbeError: The probe endpoint could not be reached.
        """
        start = time.perf_counter()
        try:
            response = await self._client.get(
                self._settings.url,
                headers={"User-Agent": self._settings.user_agent},
                timeout=self._settings.timeout,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.log_probe(int((time.perf_counter() - start) * 1000), None)
            raise ProbeError(describe(e)) from e

        latency = max(0, int((time.perf_counter() - start) * 1000))
        logger.log_probe(latency, response.status_code)
        return {
            "status": "operational",
            "uptime": UPTIME_PLACEHOLDER,
            "latency": latency,
            "github_status": "accessible" if 200 <= response.status_code < 400 else "limited",
            "timestamp": utc_timestamp(),
        }
