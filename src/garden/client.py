"""HTTP client for the blog API.

Thin httpx wrapper that manages the authentication token and reduces
every response to a ``Result``. Network failures and undecodable bodies
are logged and become failure results; nothing is raised to the caller.

The token is kept in storage under ``authToken`` so it survives a
reload, the same key the front end has always used.
"""

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from garden.api import Result
from garden.storage import MemoryStorage, Storage

logger = logging.getLogger("garden.client")

TOKEN_KEY = "authToken"
DEFAULT_BASE_URL = "http://127.0.0.1:9090/api"


class APIClient:
    """Client for the blog's JSON API.

    Usage::

        client = APIClient("http://127.0.0.1:9090/api", storage)
        result = await client.login("admin", "admin123")
        if result.success:
            client.set_token(result.token)

    Pass ``transport`` to route requests somewhere other than the network,
    e.g. ``httpx.ASGITransport(app=app)`` to talk to an in-process server.
    """

    __slots__ = ("_timeout", "_transport", "base_url", "storage", "token")

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        storage: Storage | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.storage: Storage = storage if storage is not None else MemoryStorage()
        self.token: str | None = self.storage.get_item(TOKEN_KEY)
        self._transport = transport
        self._timeout = timeout

    # -- Token management --

    def set_token(self, token: str | None) -> None:
        """Set the token and persist it; a falsy token removes it."""
        self.token = token
        if token:
            self.storage.set_item(TOKEN_KEY, token)
        else:
            self.storage.remove_item(TOKEN_KEY)

    def get_token(self) -> str | None:
        return self.token

    def clear_token(self) -> None:
        self.token = None
        self.storage.remove_item(TOKEN_KEY)

    # -- Operations --

    async def login(self, username: str, password: str) -> Result:
        """``POST /auth/login``."""
        return await self._request(
            "POST",
            "/auth/login",
            json={"username": username, "password": password},
            failure="Login error. Please try again.",
        )

    async def logout(self) -> Result:
        """Forget the token. The server has no logout endpoint."""
        self.clear_token()
        return Result(success=True)

    async def verify(self, token: str) -> Result:
        """``GET /auth/verify`` with the given bearer token."""
        return await self._request(
            "GET",
            "/auth/verify",
            headers={"Authorization": f"Bearer {token}"},
            failure="Token verification failed",
        )

    async def list_posts(self) -> Result:
        """``GET /posts``."""
        return await self._request("GET", "/posts", failure="Error loading posts")

    async def create_post(
        self,
        title: str,
        content: str,
        tags: Sequence[str] = (),
        category: str | None = None,
    ) -> Result:
        """``POST /posts``."""
        return await self._request(
            "POST",
            "/posts",
            json=_post_body(title, content, tags, category),
            headers=self._auth_headers(),
            failure="Error creating post",
        )

    async def update_post(
        self,
        post_id: Any,
        title: str,
        content: str,
        tags: Sequence[str] = (),
        category: str | None = None,
    ) -> Result:
        """``PUT /posts/{id}``."""
        return await self._request(
            "PUT",
            f"/posts/{post_id}",
            json=_post_body(title, content, tags, category),
            headers=self._auth_headers(),
            failure="Error updating post",
        )

    async def delete_post(self, post_id: Any) -> Result:
        """``DELETE /posts/{id}``."""
        return await self._request(
            "DELETE",
            f"/posts/{post_id}",
            headers=self._auth_headers(),
            failure="Error deleting post",
        )

    # -- Internals --

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            transport=self._transport,
            timeout=self._timeout,
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        failure: str,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Result:
        logger.debug("%s %s%s", method, self.base_url, path)
        try:
            async with self._client() as client:
                response = await client.request(method, path, json=json, headers=headers)
            payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            return Result.failure(failure)
        except ValueError as exc:
            logger.error("%s %s returned an undecodable body: %s", method, path, exc)
            return Result.failure(failure)

        result = Result.from_payload(payload)
        logger.debug("%s %s -> %d success=%s", method, path, response.status_code, result.success)
        return result


def _post_body(
    title: str,
    content: str,
    tags: Sequence[str],
    category: str | None,
) -> dict[str, Any]:
    return {"title": title, "content": content, "category": category, "tags": list(tags)}
