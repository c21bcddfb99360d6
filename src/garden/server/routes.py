"""The API's endpoints.

Two routes matched by method and the literal request target, plus a
catch-all that describes the service. The target is compared as sent, so
a query string or a percent-encoded path falls through to the catch-all.
"""

import logging
from collections.abc import Sequence
from typing import Any

from garden.config import AppConfig
from garden.errors import BadRequest
from garden.http.request import Request
from garden.http.response import Response, json_response
from garden.posts import Post
from garden.users import SERVER_TOKEN, SERVER_USER, check_credentials

logger = logging.getLogger("garden.server")

LOGIN_PATH = "/api/auth/login"
POSTS_PATH = "/api/posts"


class Routes:
    """Request dispatcher bound to the app's static data."""

    __slots__ = ("_config", "_posts")

    def __init__(self, config: AppConfig, posts: Sequence[Post]) -> None:
        self._config = config
        self._posts = tuple(posts)

    async def dispatch(self, request: Request) -> Response:
        """Match method + request target and produce the response."""
        if request.method == "POST" and request.url == LOGIN_PATH:
            return await self.login(request)
        if request.method == "GET" and request.url == POSTS_PATH:
            return self.list_posts()
        return self.describe()

    async def login(self, request: Request) -> Response:
        """``POST /api/auth/login``: literal credential check."""
        logger.info("Login endpoint hit")
        try:
            data = await request.json()
        except ValueError as exc:
            logger.info("Login rejected: malformed JSON (%s)", exc)
            raise BadRequest("Invalid JSON") from exc

        if data is None:
            logger.info("Login rejected: null body")
            raise BadRequest("Invalid JSON")
        if not isinstance(data, dict):
            data = {}
        username = data.get("username")
        logger.info("Login attempt: %s", username)

        if check_credentials(username, data.get("password")):
            logger.info("Login succeeded: %s", username)
            return json_response(
                {
                    "success": True,
                    "message": "Login successful!",
                    "token": SERVER_TOKEN,
                    "user": SERVER_USER.to_dict(),
                }
            )

        logger.info("Login failed: invalid credentials")
        return json_response({"success": False, "message": "Invalid credentials"}, status=400)

    def list_posts(self) -> Response:
        """``GET /api/posts``: the static post list."""
        return json_response({"success": True, "posts": [post.to_dict() for post in self._posts]})

    def describe(self) -> Response:
        """Catch-all: what this server is and what it serves."""
        return json_response(self.descriptor())

    def descriptor(self) -> dict[str, Any]:
        return {
            "message": self._config.name,
            "version": self._config.version,
            "endpoints": {
                f"POST {LOGIN_PATH}": "User authentication",
                f"GET {POSTS_PATH}": "Fetch blog posts",
            },
            "status": "running",
        }
