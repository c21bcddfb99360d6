"""Error handling for the request pipeline.

Maps HTTPError exceptions and unexpected failures to JSON responses in
the same ``{"success": false, "message": ...}`` shape the API uses.
"""

import logging

from garden.errors import HTTPError
from garden.http.request import Request
from garden.http.response import Response, json_response

logger = logging.getLogger("garden.server")


def handle_http_error(exc: HTTPError, request: Request) -> Response:
    """Map an HTTPError to a JSON Response."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
    response = json_response(
        {"success": False, "message": exc.detail or f"Error {exc.status}"},
        status=exc.status,
    )
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def handle_internal_error(exc: Exception, request: Request, *, debug: bool) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)
    message = f"{type(exc).__name__}: {exc}" if debug else "Internal Server Error"
    return json_response({"success": False, "message": message}, status=500)
