import httpx
import pytest

from core.config import UpstreamSettings
from core.exceptions import InvalidTargetError
from core.headers import CORS_HEADERS, HeaderBuilder
from core.transform import RequestTransformer
from services.routing_service import RoutingService


@pytest.fixture
def transformer():
    return RequestTransformer(UpstreamSettings())


def test_target_url_appends_query_unchanged(transformer):
    url = transformer.target_url("octo/repo.git/info/refs", "service=git-upload-pack&x=%20y")
    assert url == "https://github.com/octo/repo.git/info/refs?service=git-upload-pack&x=%20y"


def test_target_url_without_query(transformer):
    assert transformer.target_url("octo/repo") == "https://github.com/octo/repo"


def test_empty_remainder_targets_upstream_root(transformer):
    assert transformer.target_url("") == "https://github.com/"


def test_configured_upstream():
    transformer = RequestTransformer(UpstreamSettings(scheme="http", host="upstream.test:8000"))
    assert transformer.target_url("a", "b=1") == "http://upstream.test:8000/a?b=1"


def test_unparseable_target_raises():
    transformer = RequestTransformer(UpstreamSettings(host="github.com:notaport"))
    with pytest.raises(InvalidTargetError):
        transformer.target_url("a")


def test_prefix_is_normalized():
    assert UpstreamSettings(prefix="proxy").prefix == "/proxy/"
    assert UpstreamSettings(prefix="/gh").prefix == "/gh/"


def test_upstream_headers_pass_through_everything_but_host():
    headers = HeaderBuilder().build_upstream_headers(
        [("Host", "localhost:8080"), ("X-Test", "abc"), ("Accept", "a"), ("Accept", "b")]
    )
    assert headers == [("X-Test", "abc"), ("Accept", "a"), ("Accept", "b")]


def test_relay_headers_append_cors_and_drop_framing():
    headers = HeaderBuilder().build_relay_headers(
        [
            ("content-type", "text/plain"),
            ("transfer-encoding", "chunked"),
            ("access-control-allow-origin", "https://github.com"),
        ]
    )
    assert ("transfer-encoding", "chunked") not in headers
    assert ("access-control-allow-origin", "https://github.com") in headers
    for item in CORS_HEADERS.items():
        assert item in headers


def test_prepare_forward_detects_body_from_framing_headers():
    service = RoutingService(RequestTransformer(UpstreamSettings()), HeaderBuilder())

    with_body = service.prepare_forward(
        "GET", "/proxy/a", "a", "", [("content-length", "3")]
    )
    without_body = service.prepare_forward("POST", "/proxy/a", "a", "", [("x-test", "abc")])

    assert with_body.has_body is True
    assert without_body.has_body is False
    assert without_body.target_url == "https://github.com/a"


def test_client_defaults_are_dropped_from_outbound_headers():
    outbound = httpx.Headers(
        {
            "host": "github.com",
            "accept-encoding": "gzip, deflate",
            "user-agent": "python-httpx",
            "x-test": "abc",
        }
    )

    HeaderBuilder().drop_client_defaults(outbound, [("X-Test", "abc")])

    assert dict(outbound) == {"host": "github.com", "x-test": "abc"}
