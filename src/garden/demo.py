"""Demo mode: a client-only stand-in for the API server.

Used on static hosting where no backend is reachable. Same operations as
``APIClient``, backed by key-value storage, with a fixed artificial
delay per operation so the front end behaves as if it were talking to a
network. Every operation resolves a ``Result``; nothing raises.

Storage keys:

- ``demo_posts``: JSON list of post records, newest first
- ``demo_logged_in``: ``"true"`` while logged in
- ``demo_user``: JSON object for the logged-in user
"""

import json
import logging
import time
from collections.abc import Sequence
from datetime import date
from typing import Any

import anyio

from garden.api import Result
from garden.client import TOKEN_KEY
from garden.posts import DEMO_POSTS, make_excerpt
from garden.storage import MemoryStorage, Storage
from garden.users import DEMO_USER, check_credentials

logger = logging.getLogger("garden.demo")

POSTS_KEY = "demo_posts"
LOGGED_IN_KEY = "demo_logged_in"
USER_KEY = "demo_user"

# Seconds, before scaling by ``latency``
DELAYS: dict[str, float] = {
    "login": 0.5,
    "logout": 0.3,
    "verify": 0.3,
    "list_posts": 0.3,
    "create_post": 0.5,
    "update_post": 0.5,
    "delete_post": 0.4,
}

DEMO_CREDENTIALS_HINT = "Invalid credentials. Try admin/admin123"


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


class DemoAPI:
    """Mock backend persisted in ``storage``.

    State is re-read from storage on construction, so a second instance
    over the same storage behaves like the page after a reload::

        demo = DemoAPI(FileStorage("garden.json"))
        await demo.login("admin", "admin123")
        await demo.create_post("Hello", "First words")

    ``latency`` scales the artificial delays; ``0`` turns them off.
    """

    __slots__ = ("is_logged_in", "latency", "posts", "storage")

    def __init__(self, storage: Storage | None = None, *, latency: float = 1.0) -> None:
        self.storage: Storage = storage if storage is not None else MemoryStorage()
        self.latency = latency
        self.is_logged_in = self.storage.get_item(LOGGED_IN_KEY) == "true"
        self.posts: list[dict[str, Any]] = self._load_posts()
        self._save_posts()

    # -- Persistence --

    def _load_posts(self) -> list[dict[str, Any]]:
        raw = self.storage.get_item(POSTS_KEY)
        if raw:
            try:
                posts = json.loads(raw)
            except ValueError:
                logger.warning("Discarding unreadable %s", POSTS_KEY)
            else:
                if isinstance(posts, list):
                    return [p for p in posts if isinstance(p, dict)]
        return [dict(post) for post in DEMO_POSTS]

    def _save_posts(self) -> None:
        self.storage.set_item(POSTS_KEY, json.dumps(self.posts))

    async def _delay(self, operation: str) -> None:
        seconds = DELAYS[operation] * self.latency
        if seconds > 0:
            await anyio.sleep(seconds)

    # -- Token (same key the API client uses) --

    def get_token(self) -> str | None:
        return self.storage.get_item(TOKEN_KEY)

    def set_token(self, token: str | None) -> None:
        if token:
            self.storage.set_item(TOKEN_KEY, token)
        else:
            self.storage.remove_item(TOKEN_KEY)

    def clear_token(self) -> None:
        self.storage.remove_item(TOKEN_KEY)

    # -- Auth --

    async def login(self, username: str, password: str) -> Result:
        await self._delay("login")
        if not check_credentials(username, password):
            logger.info("Demo login failed for %s", username)
            return Result.failure(DEMO_CREDENTIALS_HINT)

        self.is_logged_in = True
        self.storage.set_item(LOGGED_IN_KEY, "true")
        self.storage.set_item(USER_KEY, json.dumps(DEMO_USER.to_dict()))
        logger.info("Demo login: %s", username)
        return Result(
            success=True,
            token=f"demo_token_{_now_millis()}",
            user=DEMO_USER.to_dict(),
        )

    async def logout(self) -> Result:
        await self._delay("logout")
        self.is_logged_in = False
        self.storage.remove_item(LOGGED_IN_KEY)
        self.storage.remove_item(USER_KEY)
        return Result(success=True)

    async def verify(self, token: str) -> Result:
        """Presence of a token plus the login flag is all there is to check."""
        await self._delay("verify")
        user = self.current_user()
        if token and user is not None:
            return Result(success=True, user=user)
        return Result.failure("Not authenticated")

    def current_user(self) -> dict[str, Any] | None:
        if not self.is_logged_in:
            return None
        raw = self.storage.get_item(USER_KEY)
        if not raw:
            return None
        try:
            user = json.loads(raw)
        except ValueError:
            return None
        return user if isinstance(user, dict) else None

    def is_authenticated(self) -> bool:
        return self.is_logged_in

    # -- Posts --

    async def list_posts(self) -> Result:
        await self._delay("list_posts")
        return Result(success=True, posts=tuple(self.posts))

    async def create_post(
        self,
        title: str,
        content: str,
        tags: Sequence[str] = (),
        category: str | None = None,
    ) -> Result:
        await self._delay("create_post")
        if not self.is_logged_in:
            return Result.failure("Not authenticated")

        post: dict[str, Any] = {
            "id": _now_millis(),
            "title": title,
            "content": content,
            "author": DEMO_USER.name,
            "date": date.today().isoformat(),
            "tags": list(tags),
            "excerpt": make_excerpt(content),
        }
        if category is not None:
            post["category"] = category

        self.posts.insert(0, post)
        self._save_posts()
        logger.info("Demo post created: %s", post["id"])
        return Result(
            success=True,
            post=post,
            message="Post created successfully (demo mode)",
        )

    async def update_post(
        self,
        post_id: Any,
        title: str,
        content: str,
        tags: Sequence[str] = (),
        category: str | None = None,
    ) -> Result:
        await self._delay("update_post")
        if not self.is_logged_in:
            return Result.failure("Not authenticated")

        for post in self.posts:
            if post.get("id") == post_id:
                post.update(
                    title=title,
                    content=content,
                    tags=list(tags),
                    excerpt=make_excerpt(content),
                )
                if category is not None:
                    post["category"] = category
                self._save_posts()
                return Result(
                    success=True,
                    post=dict(post),
                    message="Post updated successfully (demo mode)",
                )
        return Result.failure("Post not found")

    async def delete_post(self, post_id: Any) -> Result:
        await self._delay("delete_post")
        if not self.is_logged_in:
            return Result.failure("Not authenticated")

        self.posts = [post for post in self.posts if post.get("id") != post_id]
        self._save_posts()
        logger.info("Demo post deleted: %s", post_id)
        return Result(success=True, message="Post deleted successfully (demo mode)")
