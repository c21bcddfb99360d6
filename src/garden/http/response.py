"""Outgoing HTTP responses.

Every endpoint answers JSON, so that is the default content type. A
``Response`` is never mutated: ``with_header()`` hands back a modified
copy, which is how middleware decorates responses.
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass, replace
from typing import Any

JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True, slots=True)
class Response:
    """Status, headers and body of one reply.

    ``headers`` excludes ``content-type`` and ``content-length``; the
    sender writes those from ``content_type`` and the body.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = JSON_CONTENT_TYPE
    headers: tuple[tuple[str, str], ...] = ()

    def with_header(self, name: str, value: str) -> Response:
        """Copy with one more header appended."""
        return replace(self, headers=(*self.headers, (name, value)))

    def header(self, name: str) -> str | None:
        """First value of header *name*, ignoring case; None if absent."""
        wanted = name.lower()
        return next((value for key, value in self.headers if key.lower() == wanted), None)

    @property
    def body_bytes(self) -> bytes:
        return self.body.encode("utf-8") if isinstance(self.body, str) else self.body

    @property
    def text(self) -> str:
        return self.body if isinstance(self.body, str) else self.body.decode("utf-8")

    @property
    def json(self) -> Any:
        """The body decoded as JSON."""
        return json_module.loads(self.body_bytes)


def json_response(data: Any, status: int = 200) -> Response:
    """Encode *data* as the body of a JSON response."""
    return Response(body=json_module.dumps(data), status=status)
