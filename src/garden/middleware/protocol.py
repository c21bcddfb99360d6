"""The middleware calling convention.

A middleware receives the request and ``next``, the rest of the chain,
and returns a response. It may answer on its own without calling
``next`` (the CORS preflight does), or decorate what ``next`` returns.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from garden.http.request import Request
from garden.http.response import Response

type Next = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    """Any async callable ``(request, next) -> Response``.

    Plain functions qualify::

        async def powered_by(request: Request, next: Next) -> Response:
            response = await next(request)
            return response.with_header("X-Powered-By", "garden")
    """

    async def __call__(self, request: Request, next: Next) -> Response: ...
