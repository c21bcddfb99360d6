"""Garden CLI: API server and one-shot page rendering.

Entry point registered as ``garden`` in ``pyproject.toml``::

    [project.scripts]
    garden = "garden.cli:main"
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from garden.config import AppConfig

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``garden`` command."""
    defaults = AppConfig()
    parser = argparse.ArgumentParser(
        prog="garden",
        description="Digital Garden: a minimal personal blog.",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=defaults.log_level,
        help="Logging level (default: %(default)s)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- garden serve -----------------------------------------------------
    serve_parser = subparsers.add_parser(
        "serve", parents=[common], help="Run the blog API server"
    )
    serve_parser.add_argument("--host", default=defaults.host, help="Bind host address")
    serve_parser.add_argument("--port", type=int, default=defaults.port, help="Bind port number")
    serve_parser.add_argument("--debug", action="store_true", help="Enable debug mode")

    # -- garden render ----------------------------------------------------
    render_parser = subparsers.add_parser(
        "render", parents=[common], help="Render the blog page to HTML"
    )
    render_parser.add_argument(
        "--hostname",
        default="localhost",
        help="Hostname the page is served from; picks the backend (default: %(default)s)",
    )
    render_parser.add_argument(
        "--storage",
        type=Path,
        default=Path(".garden-storage.json"),
        help="JSON file standing in for browser local storage",
    )
    render_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write HTML here instead of stdout",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        serve(args)
    elif args.command == "render":
        render(args)


def serve(args: argparse.Namespace) -> None:
    """``garden serve``: build the app and hand it to pounce."""
    from garden.app import App
    from garden.errors import ConfigurationError

    try:
        config = AppConfig(
            host=args.host,
            port=args.port,
            debug=args.debug,
            log_level=args.log_level,
        )
        App(config).run()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def render(args: argparse.Namespace) -> None:
    """``garden render``: initialize a controller once and emit the page."""
    html = asyncio.run(render_page(args.hostname, args.storage))
    if args.output is None:
        sys.stdout.write(html)
    else:
        args.output.write_text(html, encoding="utf-8")
        print(f"Wrote {args.output}", file=sys.stderr)


async def render_page(hostname: str, storage_path: Path, *, latency: float = 0.0) -> str:
    from garden.controller import BlogController
    from garden.storage import FileStorage

    controller = BlogController.for_hostname(
        hostname, FileStorage(storage_path), latency=latency
    )
    await controller.initialize()
    return controller.render_page()
