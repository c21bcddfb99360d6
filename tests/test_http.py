"""Tests for garden.http: Headers, Request and Response."""

import pytest

from garden.http.headers import Headers
from garden.http.request import Request
from garden.http.response import Response, json_response


def _request(body: bytes, headers: tuple[tuple[bytes, bytes], ...] = ()) -> Request:
    """Helper: a Request whose receive yields *body* once."""
    sent = False

    async def receive() -> dict:
        nonlocal sent
        if sent:
            return {"type": "http.disconnect"}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    scope = {
        "type": "http",
        "method": "POST",
        "path": "/api/auth/login",
        "query_string": b"x=1",
        "headers": list(headers),
    }
    return Request.from_asgi(scope, receive)


class TestHeaders:
    def test_case_insensitive(self) -> None:
        headers = Headers(((b"Content-Type", b"application/json"),))
        assert headers["content-type"] == "application/json"
        assert "CONTENT-TYPE" in headers
        assert headers.get("x-missing") is None


class TestRequest:
    async def test_json_and_body_cache(self) -> None:
        request = _request(b'{"a": 1}', ((b"content-type", b"application/json"),))
        assert await request.json() == {"a": 1}
        assert await request.body() == b'{"a": 1}'
        assert request.headers.get("content-type") == "application/json"
        assert request.url == "/api/auth/login?x=1"

    def test_url_keeps_raw_path(self) -> None:
        scope = {
            "type": "http",
            "method": "GET",
            "path": "/api/posts",
            "raw_path": b"/api/%70osts",
            "query_string": b"",
            "headers": [],
        }
        request = Request.from_asgi(scope, None)
        assert request.path == "/api/posts"
        assert request.url == "/api/%70osts"

    async def test_invalid_json_raises_value_error(self) -> None:
        with pytest.raises(ValueError):
            await _request(b"{").json()


class TestResponse:
    def test_with_header_is_immutable(self) -> None:
        original = Response("hi")
        changed = original.with_header("X-A", "1")
        assert original.headers == ()
        assert changed.header("x-a") == "1"

    def test_json_response(self) -> None:
        response = json_response({"success": False}, status=400)
        assert response.status == 400
        assert response.content_type == "application/json"
        assert response.json == {"success": False}
        assert response.text == '{"success": false}'
