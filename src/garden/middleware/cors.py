"""CORS middleware.

The blog front end is served from a different origin than the API
(a static host or a local file server), so every response carries the
CORS headers and preflight ``OPTIONS`` requests are answered directly.
"""

from dataclasses import dataclass

from garden.http.request import Request
from garden.http.response import Response
from garden.middleware.protocol import Next


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """CORS middleware configuration.

    Defaults open the API to any origin for the methods and headers
    the front end uses::

        CORSConfig(allow_origins=("https://example.com",))
    """

    allow_origins: tuple[str, ...] = ("*",)
    allow_methods: tuple[str, ...] = ("GET", "POST", "OPTIONS")
    allow_headers: tuple[str, ...] = ("Content-Type", "Authorization")


class CORSMiddleware:
    """Adds CORS headers to every response.

    Handles:
    - Preflight ``OPTIONS`` requests on any path (empty 200, never dispatched)
    - Wildcard origins (``"*"``) or an explicit allow list

    Unlike a strict CORS implementation, headers are attached even when
    the request has no ``Origin`` header; browsers ignore them there.

    Usage::

        app.add_middleware(CORSMiddleware(CORSConfig(
            allow_origins=("https://example.com",),
        )))
    """

    __slots__ = ("config",)

    def __init__(self, config: CORSConfig | None = None) -> None:
        self.config = config or CORSConfig()

    def _allow_origin_value(self, origin: str | None) -> str | None:
        """Return the ``Access-Control-Allow-Origin`` value, or None to omit it."""
        if "*" in self.config.allow_origins:
            return "*"
        if origin is not None and origin in self.config.allow_origins:
            return origin
        return None

    def _add_cors_headers(self, response: Response, origin: str | None) -> Response:
        cfg = self.config
        allow_origin = self._allow_origin_value(origin)
        if allow_origin is None:
            return response

        response = response.with_header("Access-Control-Allow-Origin", allow_origin)
        if allow_origin != "*":
            response = response.with_header("Vary", "Origin")
        response = response.with_header(
            "Access-Control-Allow-Methods",
            ", ".join(cfg.allow_methods),
        )
        if cfg.allow_headers:
            response = response.with_header(
                "Access-Control-Allow-Headers",
                ", ".join(cfg.allow_headers),
            )
        return response

    async def __call__(self, request: Request, next: Next) -> Response:
        """Process the request with CORS handling."""
        origin = request.headers.get("origin")

        if request.method == "OPTIONS":
            return self._add_cors_headers(Response(body="", status=200), origin)

        response = await next(request)
        return self._add_cors_headers(response, origin)
