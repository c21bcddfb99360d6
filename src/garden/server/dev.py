"""Run the API server under pounce.

Pounce's ``run()`` takes an import string, but the blog builds a live
``App`` object, so ``pounce.Server`` is used directly with the ASGI
callable. Requires the ``server`` extra (``pip install digital-garden[server]``).
"""

from garden.errors import ConfigurationError


def run_server(app: object, host: str, port: int, *, reload: bool = False) -> None:
    """Start a single-worker pounce server with the given App.

    Args:
        app: ASGI callable (garden App instance).
        host: Bind host address.
        port: Bind port number.
        reload: Enable auto-reload on file changes.
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = (
            "Serving requires the pounce ASGI server. "
            "Install it with: pip install digital-garden[server]"
        )
        raise ConfigurationError(msg) from exc

    config = ServerConfig(host=host, port=port, workers=1, reload=reload)
    server = Server(config, app)
    server.run()
