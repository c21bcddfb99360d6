"""The blog's API server application.

Mutable during setup (middleware, startup/shutdown hooks). Frozen the
first time it handles a request or the ASGI lifespan starts.
"""

import inspect
import logging
import threading
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any

from garden._internal.asgi import Receive, Scope, Send
from garden.config import AppConfig
from garden.errors import ConfigurationError
from garden.middleware.cors import CORSConfig, CORSMiddleware
from garden.middleware.protocol import Middleware, Next
from garden.posts import Post, static_posts
from garden.server.handler import build_chain, handle_request
from garden.server.routes import LOGIN_PATH, POSTS_PATH, Routes

logger = logging.getLogger("garden.server")


class App:
    """The Digital Garden API server as an ASGI 3 application.

    The post list is fixed when the app is built, so every
    ``GET /api/posts`` answers with byte-identical records::

        app = App(AppConfig(port=9090))
        app.run()

    CORS is installed by default from the config's ``cors_*`` fields.
    Pass ``cors=False`` to leave it out and add your own middleware.
    """

    __slots__ = (
        "_chain",
        "_freeze_lock",
        "_middleware",
        "_routes",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        posts: Sequence[Post] | None = None,
        now: datetime | None = None,
        cors: bool = True,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self._routes = Routes(self.config, posts if posts is not None else static_posts(now))
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._middleware: list[Middleware] = []
        self._chain: Next | None = None
        self._freeze_lock: threading.Lock = threading.Lock()

        if cors:
            self.add_middleware(
                CORSMiddleware(
                    CORSConfig(
                        allow_origins=self.config.cors_allow_origins,
                        allow_methods=self.config.cors_allow_methods,
                        allow_headers=self.config.cors_allow_headers,
                    )
                )
            )

    # -- Setup --

    def add_middleware(self, middleware: Middleware) -> None:
        """Append a middleware; the first added is the outermost."""
        self._check_not_frozen()
        self._middleware.append(middleware)

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a hook run during ASGI lifespan startup (sync or async)."""
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a hook run during ASGI lifespan shutdown (sync or async)."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    @property
    def routes(self) -> Routes:
        return self._routes

    # -- Running --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the app with pounce (blocking)."""
        from garden.server.dev import run_server

        host = host or self.config.host
        port = port or self.config.port
        self._ensure_frozen()
        logger.info("Digital Garden blog server running at http://%s:%d", host, port)
        logger.info("Auth endpoint: POST http://%s:%d%s", host, port, LOGIN_PATH)
        logger.info("Posts endpoint: GET http://%s:%d%s", host, port, POSTS_PATH)
        run_server(self, host, port, reload=self.config.debug)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            return

        chain = self._ensure_frozen()
        await handle_request(scope, receive, send, chain=chain)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol."""
        self._ensure_frozen()

        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    logger.exception("Startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def startup(self) -> None:
        """Run startup hooks in registration order."""
        for hook in self._startup_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    async def shutdown(self) -> None:
        """Run shutdown hooks in registration order."""
        for hook in self._shutdown_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    # -- Freezing --

    def _ensure_frozen(self) -> Next:
        """Build the middleware chain on first use and return it."""
        chain = self._chain
        if chain is None:
            with self._freeze_lock:
                if self._chain is None:
                    self._chain = build_chain(
                        self._routes.dispatch,
                        tuple(self._middleware),
                        debug=self.config.debug,
                    )
                chain = self._chain
        return chain

    def _check_not_frozen(self) -> None:
        if self._chain is not None:
            msg = "Cannot modify the app after it has started handling requests."
            raise ConfigurationError(msg)
