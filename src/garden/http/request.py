"""The incoming HTTP request.

Metadata is fixed when the request is built from the ASGI scope; the
body is pulled from ``receive`` on first use and kept for later calls.
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass, field
from typing import Any

from garden._internal.asgi import Receive, Scope
from garden.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An HTTP request as the API endpoints see it."""

    method: str
    path: str
    headers: Headers
    query_string: bytes = b""
    raw_path: bytes = b""

    _receive: Receive | None = field(default=None, repr=False, compare=False)
    # Holds the body once read; the dict itself stays mutable
    _cache: dict[str, bytes] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(scope.get("headers", ())),
            query_string=scope.get("query_string", b""),
            raw_path=scope.get("raw_path") or scope["path"].encode("utf-8"),
            _receive=receive,
        )

    @property
    def url(self) -> str:
        """The request target as sent: undecoded path plus any query string."""
        target = self.raw_path.decode("latin-1")
        if not self.query_string:
            return target
        return f"{target}?{self.query_string.decode('latin-1')}"

    async def body(self) -> bytes:
        """Read the whole body. Later calls return the same bytes."""
        if "body" not in self._cache:
            self._cache["body"] = await self._read_body()
        return self._cache["body"]

    async def _read_body(self) -> bytes:
        if self._receive is None:
            return b""
        chunks: list[bytes] = []
        more_body = True
        while more_body:
            message = await self._receive()
            if message["type"] == "http.disconnect":
                break
            chunks.append(message.get("body", b""))
            more_body = message.get("more_body", False)
        return b"".join(chunks)

    async def json(self) -> Any:
        """Decode the body as JSON.

        Raises:
            ValueError: If the body is empty, not UTF-8, or not JSON.
        """
        return json_module.loads(await self.body())
