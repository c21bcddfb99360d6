"""The contract shared by the API client and the demo backend.

Every operation resolves to a ``Result``: a success flag plus whatever
the operation produced. Failures are never raised to the caller.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True, slots=True)
class Result:
    """Outcome of a backend operation."""

    success: bool
    message: str | None = None
    token: str | None = None
    user: dict[str, Any] | None = None
    posts: tuple[dict[str, Any], ...] = ()
    post: dict[str, Any] | None = field(default=None)

    @classmethod
    def from_payload(cls, payload: Any) -> Result:
        """Reduce a decoded response body to a Result.

        Anything that is not an object with ``success: true`` is a failure;
        the server's catch-all service descriptor lands here too.
        """
        if not isinstance(payload, Mapping):
            return cls(success=False)
        message = payload.get("message")
        token = payload.get("token")
        posts = payload.get("posts")
        if not isinstance(posts, list):
            posts = []
        user = payload.get("user")
        post = payload.get("post")
        return cls(
            success=payload.get("success") is True,
            message=message if isinstance(message, str) else None,
            token=token if isinstance(token, str) else None,
            user=dict(user) if isinstance(user, Mapping) else None,
            posts=tuple(dict(p) for p in posts if isinstance(p, Mapping)),
            post=dict(post) if isinstance(post, Mapping) else None,
        )

    @classmethod
    def failure(cls, message: str) -> Result:
        return cls(success=False, message=message)

    def to_dict(self) -> dict[str, Any]:
        """Wire shape: only the keys that carry something."""
        data: dict[str, Any] = {"success": self.success}
        if self.message is not None:
            data["message"] = self.message
        if self.token is not None:
            data["token"] = self.token
        if self.user is not None:
            data["user"] = self.user
        if self.posts:
            data["posts"] = list(self.posts)
        if self.post is not None:
            data["post"] = self.post
        return data


class BlogBackend(Protocol):
    """Operations the controller issues, against a server or the demo store."""

    async def login(self, username: str, password: str) -> Result: ...

    async def logout(self) -> Result: ...

    async def verify(self, token: str) -> Result: ...

    async def list_posts(self) -> Result: ...

    async def create_post(
        self,
        title: str,
        content: str,
        tags: Sequence[str] = (),
        category: str | None = None,
    ) -> Result: ...

    async def update_post(
        self,
        post_id: Any,
        title: str,
        content: str,
        tags: Sequence[str] = (),
        category: str | None = None,
    ) -> Result: ...

    async def delete_post(self, post_id: Any) -> Result: ...

    def get_token(self) -> str | None: ...

    def set_token(self, token: str | None) -> None: ...

    def clear_token(self) -> None: ...
