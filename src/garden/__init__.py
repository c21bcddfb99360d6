"""Digital Garden: a minimal personal blog.

A tiny JSON API server (login + post list), an API client, a demo-mode
backend for static hosting, and an application controller that renders
the blog front end.

Basic usage::

    from garden import App

    app = App()
    app.run()

Front end without a server::

    from garden import BlogController, MemoryStorage

    controller = BlogController.for_hostname("my-blog.netlify.app", MemoryStorage())
    await controller.initialize()
    html = controller.render_page()
"""

__version__ = "1.0.0"
__all__ = [
    "APIClient",
    "App",
    "AppConfig",
    "BlogController",
    "DemoAPI",
    "FileStorage",
    "GardenError",
    "HTTPError",
    "MemoryStorage",
    "Post",
    "Request",
    "Response",
    "Result",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import garden`` fast while providing a clean top-level API.
    """
    if name == "App":
        from garden.app import App

        return App

    if name == "AppConfig":
        from garden.config import AppConfig

        return AppConfig

    if name == "Request":
        from garden.http.request import Request

        return Request

    if name == "Response":
        from garden.http.response import Response

        return Response

    if name in ("GardenError", "HTTPError"):
        from garden import errors

        return getattr(errors, name)

    if name == "Post":
        from garden.posts import Post

        return Post

    if name == "Result":
        from garden.api import Result

        return Result

    if name == "APIClient":
        from garden.client import APIClient

        return APIClient

    if name == "DemoAPI":
        from garden.demo import DemoAPI

        return DemoAPI

    if name == "BlogController":
        from garden.controller import BlogController

        return BlogController

    if name in ("FileStorage", "MemoryStorage"):
        from garden import storage

        return getattr(storage, name)

    msg = f"module 'garden' has no attribute {name!r}"
    raise AttributeError(msg)
