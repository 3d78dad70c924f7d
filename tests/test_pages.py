import pytest

from core.headers import CORS_HEADERS


def test_root_serves_landing_page(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.headers["content-type"] == "text/html;charset=UTF-8"
    assert "<title>Where? - GitHub Relay</title>" in response.text
    assert "/api/status" in response.text


@pytest.mark.parametrize("path", ["/anything", "/api/other", "/proxy"])
def test_preflight_on_unmatched_path(client, path):
    response = client.options(path)

    assert response.status_code == 200
    assert response.content == b""
    for name, value in CORS_HEADERS.items():
        assert response.headers[name] == value


@pytest.mark.parametrize(
    "method,path",
    [
        ("GET", "/nope"),
        ("POST", "/api"),
        ("DELETE", "/proxy"),
        ("GET", "/docs"),
        ("PATCH", "/x/y"),
        ("PROPFIND", "/nope"),
        ("MKCOL", "/api"),
    ],
)
def test_unmatched_requests_are_not_found(client, method, path):
    response = client.request(method, path)

    assert response.status_code == 404
    assert response.text == "Not Found"
