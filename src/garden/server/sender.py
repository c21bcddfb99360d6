"""Writes a garden ``Response`` out as ASGI messages."""

from garden._internal.asgi import Send
from garden.http.response import Response

# Statuses that never carry a body
_NO_BODY = frozenset({204, 304})


def _encode_headers(response: Response, body: bytes) -> list[tuple[bytes, bytes]]:
    pairs = [
        ("content-type", response.content_type),
        *((name.lower(), value) for name, value in response.headers),
        ("content-length", str(len(body))),
    ]
    return [(name.encode("latin-1"), value.encode("latin-1")) for name, value in pairs]


async def send_response(response: Response, send: Send) -> None:
    """Send the start and body messages for *response*."""
    has_body = response.status >= 200 and response.status not in _NO_BODY
    body = response.body_bytes if has_body else b""
    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": _encode_headers(response, body),
        }
    )
    await send({"type": "http.response.body", "body": body})
