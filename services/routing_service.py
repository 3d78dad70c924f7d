"""Prepare inbound requests for relaying upstream."""

from core.headers import HeaderBuilder
from core.request_types import PreparedRequest
from core.transform import RequestTransformer


class RoutingService:
    """Turn an inbound request into a PreparedRequest for the upstream."""

    def __init__(
        self,
        transformer: RequestTransformer,
        header_builder: HeaderBuilder,
    ) -> None:
        self._transformer = transformer
        self._headers = header_builder

    def prepare_forward(
        self,
        method: str,
        path: str,
        remainder: str,
        query: str,
        headers: list[tuple[str, str]],
    ) -> PreparedRequest:
        """Prepare a relayed request.

        A body is attached whenever the inbound request framed one,
        regardless of method.
        """
        names = {key.lower() for key, _ in headers}
        has_body = "content-length" in names or "transfer-encoding" in names
        return PreparedRequest(
            method=method,
            path=path,
            target_url=self._transformer.target_url(remainder, query),
            headers=self._headers.build_upstream_headers(headers),
            has_body=has_body,
        )
