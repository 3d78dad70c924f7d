"""HTTP relaying to the upstream host with streaming support."""

import time
from collections.abc import AsyncIterator

import httpx
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from core.exceptions import (
    UpstreamConnectionError,
    UpstreamError,
    UpstreamTimeoutError,
    describe,
)
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.request_types import PreparedRequest


class UpstreamClient:
    """Relay prepared requests upstream and stream the response back."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        header_builder: HeaderBuilder,
        timeout: float = 300.0,
    ) -> None:
        self._client = client
        self._headers = header_builder
        self._timeout = timeout

    async def forward(
        self,
        prepared: PreparedRequest,
        body: AsyncIterator[bytes] | None,
        logger: RequestLogger,
    ) -> StreamingResponse:
        """Issue the request once, never following redirects."""
        start = time.perf_counter()
        try:
            req = self._client.build_request(
                prepared.method,
                prepared.target_url,
                headers=prepared.headers,
                content=body if prepared.has_body else None,
                timeout=self._timeout,
            )
            self._headers.drop_client_defaults(req.headers, prepared.headers)
            response = await self._client.send(req, stream=True, follow_redirects=False)
        except httpx.TimeoutException as e:
            raise UpstreamTimeoutError(describe(e), prepared.target_url) from e
        except httpx.TransportError as e:
            raise UpstreamConnectionError(describe(e), prepared.target_url) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise UpstreamError(describe(e), prepared.target_url) from e

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.log_relay(
            prepared.method,
            prepared.path,
            prepared.target_url,
            response.status_code,
            elapsed_ms,
            headers=prepared.headers,
        )

        relayed = StreamingResponse(
            self._relay_body(response),
            status_code=response.status_code,
            background=BackgroundTask(self._cleanup_streaming, response),
        )
        for key, value in self._headers.build_relay_headers(response.headers.multi_items()):
            relayed.headers.append(key, value)
        return relayed

    async def _relay_body(self, response: httpx.Response) -> AsyncIterator[bytes]:
        """Stream the raw upstream body, closing the response even on error."""
        try:
            async for chunk in response.aiter_raw():
                yield chunk
        finally:
            await response.aclose()

    async def _cleanup_streaming(self, response: httpx.Response) -> None:
        """Clean up streaming resources."""
        await response.aclose()
