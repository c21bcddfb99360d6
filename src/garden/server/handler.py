"""Per-request pipeline: ASGI in, middleware, endpoint, ASGI out.

Errors never escape to the ASGI server. An ``HTTPError`` becomes its
JSON error response; anything else is logged and becomes a 500. Both
happen inside the chain, so outer middleware (CORS) decorates them.
"""

import logging
from collections.abc import Awaitable, Callable, Sequence

from garden._internal.asgi import Receive, Scope, Send
from garden.errors import HTTPError
from garden.http.request import Request
from garden.http.response import Response
from garden.middleware.protocol import Middleware, Next
from garden.server.errors import handle_http_error, handle_internal_error
from garden.server.sender import send_response

logger = logging.getLogger("garden.server")

type Endpoint = Callable[[Request], Awaitable[Response]]


def build_chain(
    endpoint: Endpoint,
    middleware: Sequence[Middleware],
    *,
    debug: bool = False,
) -> Next:
    """Wrap *endpoint* in *middleware*, first entry outermost.

    Every layer answers its own failures, so the returned handler never
    raises and each middleware sees the error response of the layer it
    called.
    """
    chain: Next = _guard(endpoint, debug)
    for mw in reversed(middleware):
        chain = _guard(_link(mw, chain), debug)
    return chain


def _link(mw: Middleware, next_handler: Next) -> Next:
    async def call(request: Request) -> Response:
        return await mw(request, next_handler)

    return call


def _guard(handler: Endpoint, debug: bool) -> Next:
    async def call(request: Request) -> Response:
        try:
            return await handler(request)
        except HTTPError as exc:
            return handle_http_error(exc, request)
        except Exception as exc:
            return handle_internal_error(exc, request, debug=debug)

    return call


async def handle_request(scope: Scope, receive: Receive, send: Send, *, chain: Next) -> None:
    """Answer one HTTP request through *chain*."""
    request = Request.from_asgi(scope, receive)
    logger.info("%s %s", request.method, request.url)
    response = await chain(request)
    await send_response(response, send)
