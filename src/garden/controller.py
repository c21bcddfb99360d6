"""Application controller for the blog front end.

Everything the page used to keep in globals (current user, post list,
theme, the post being edited) lives in one ``AppState`` owned by the
controller. Operations issue requests to a ``BlogBackend``, update the
state, and leave a notification behind; ``render_page()`` turns the
state into HTML.

The backend is the API client on local hosts and the demo API anywhere
else, since static hosting has no server to talk to.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import httpx
from kida import Environment

from garden.api import BlogBackend, Result
from garden.client import APIClient
from garden.config import EnvironmentProfile, get_profile, is_static_deployment
from garden.demo import DemoAPI
from garden.posts import Post, find_post, parse_tags
from garden.storage import Storage
from garden.templating import create_environment, render_fragment, render_template
from garden.theme import load_theme, next_theme, save_theme, theme_icon
from garden.users import User, user_from_dict

logger = logging.getLogger("garden.controller")

SECTIONS = ("home", "posts", "create")
PUBLISH_LABEL = "Publish Post"
UPDATE_LABEL = "Update Post"
DEFAULT_CATEGORY = "general"
WELCOME = "🌱 Welcome to Digital Garden!"


@dataclass(frozen=True, slots=True)
class Notification:
    """A transient banner. Only the latest one is shown."""

    message: str
    kind: str = "info"


@dataclass(slots=True)
class EditorForm:
    """The shared create/update form."""

    title: str = ""
    content: str = ""
    category: str = DEFAULT_CATEGORY
    tags_text: str = ""


@dataclass(frozen=True, slots=True)
class PostCard:
    """What a post card shows."""

    id: Any
    title: str
    category: str
    date: str
    preview: str
    tags: tuple[str, ...]

    @classmethod
    def from_post(cls, post: Post) -> PostCard:
        return cls(
            id=post.id,
            title=post.title,
            category=post.category or "General",
            date=post.display_date,
            preview=post.preview,
            tags=post.tags,
        )


@dataclass(frozen=True, slots=True)
class SectionLink:
    name: str
    label: str


@dataclass(slots=True)
class AppState:
    """Mutable front-end state. Last write wins."""

    theme: str = "light"
    current_user: User | None = None
    posts: list[Post] = field(default_factory=list)
    section: str = "home"
    modal: str | None = None
    editing_post_id: Any = None
    editor: EditorForm = field(default_factory=EditorForm)
    submit_label: str = PUBLISH_LABEL
    notification: Notification | None = None


def select_backend(
    hostname: str,
    storage: Storage,
    *,
    profile: EnvironmentProfile | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    latency: float = 1.0,
) -> BlogBackend:
    """Demo API on static hosting, the API client on local hosts."""
    if is_static_deployment(hostname):
        logger.info("Demo mode active. Login with admin / admin123")
        return DemoAPI(storage, latency=latency)
    profile = profile or get_profile(hostname)
    return APIClient(profile.api_base_url, storage, transport=transport)


class BlogController:
    """Drives the blog page against a backend.

    Usage::

        controller = BlogController.for_hostname("localhost", FileStorage("state.json"))
        await controller.initialize()
        await controller.login("admin", "admin123")
        html = controller.render_page()
    """

    __slots__ = ("_env", "backend", "profile", "state", "storage")

    def __init__(
        self,
        backend: BlogBackend,
        storage: Storage,
        *,
        profile: EnvironmentProfile,
        env: Environment | None = None,
    ) -> None:
        self.backend = backend
        self.storage = storage
        self.profile = profile
        self.state = AppState(theme=load_theme(storage))
        self._env = env

    @classmethod
    def for_hostname(
        cls,
        hostname: str,
        storage: Storage,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        latency: float = 1.0,
    ) -> BlogController:
        """Build a controller with the profile and backend *hostname* implies."""
        profile = get_profile(hostname)
        backend = select_backend(
            hostname, storage, profile=profile, transport=transport, latency=latency
        )
        return cls(backend, storage, profile=profile)

    @property
    def demo_mode(self) -> bool:
        return isinstance(self.backend, DemoAPI)

    @property
    def env(self) -> Environment:
        if self._env is None:
            self._env = create_environment(auto_reload=self.profile.debug)
        return self._env

    # -- Lifecycle --

    async def initialize(self) -> None:
        """Restore theme and session, then load posts."""
        logger.debug("Initializing application")
        self.state.theme = load_theme(self.storage)
        self._set_section("home")

        token = self.backend.get_token()
        if token:
            await self.verify_token(token)
        else:
            logger.debug("No token, loading as guest")
        await self.load_posts()
        self.notify(WELCOME, "success")

    async def verify_token(self, token: str) -> bool:
        """Restore the user for a stored token; drop the token if rejected."""
        result = await self.backend.verify(token)
        if result.success and result.user:
            self.state.current_user = user_from_dict(result.user)
            logger.info("User verified: %s", self.state.current_user.username)
            return True
        logger.info("Stored token rejected, continuing as guest")
        self.backend.clear_token()
        self.state.current_user = None
        return False

    # -- Posts --

    async def load_posts(self) -> None:
        """Replace the post list; any failure leaves it empty."""
        try:
            result = await self.backend.list_posts()
        except Exception:
            logger.exception("Error loading posts")
            self.state.posts = []
            return
        if result.success:
            self.state.posts = [Post.from_record(record) for record in result.posts]
            logger.debug("Loaded %d posts", len(self.state.posts))
        else:
            logger.error("Failed to load posts: %s", result.message)
            self.state.posts = []

    def view_post(self, post_id: Any) -> Post | None:
        return find_post(self.state.posts, post_id)

    async def submit_post(
        self,
        title: str,
        content: str,
        category: str = DEFAULT_CATEGORY,
        tags_text: str = "",
    ) -> bool:
        """Create, or update the post being edited."""
        tags = parse_tags(tags_text)
        if self.state.editing_post_id is not None:
            return await self.update_post(
                self.state.editing_post_id, title, content, category, tags
            )
        return await self.create_post(title, content, category, tags)

    async def create_post(
        self,
        title: str,
        content: str,
        category: str = DEFAULT_CATEGORY,
        tags: Sequence[str] = (),
    ) -> bool:
        result = await self.backend.create_post(title, content, tags, category)
        return await self._after_mutation(
            result, done="Post created successfully!", failed="Failed to create post"
        )

    async def update_post(
        self,
        post_id: Any,
        title: str,
        content: str,
        category: str = DEFAULT_CATEGORY,
        tags: Sequence[str] = (),
    ) -> bool:
        result = await self.backend.update_post(post_id, title, content, tags, category)
        return await self._after_mutation(
            result, done="Post updated successfully!", failed="Failed to update post"
        )

    async def delete_post(self, post_id: Any, *, confirmed: bool = True) -> bool:
        """Delete *post_id*. Nothing happens unless the user confirmed."""
        if not confirmed:
            return False
        result = await self.backend.delete_post(post_id)
        if result.success:
            self.notify("Post deleted successfully!", "success")
            await self.load_posts()
            return True
        self.notify(result.message or "Failed to delete post", "error")
        return False

    async def _after_mutation(self, result: Result, *, done: str, failed: str) -> bool:
        if not result.success:
            self.notify(result.message or failed, "error")
            return False
        self.notify(done, "success")
        self.clear_editor()
        self._set_section("posts")
        await self.load_posts()
        return True

    # -- Editor --

    def edit_post(self, post_id: Any) -> bool:
        """Load a post into the editor and switch it to update mode."""
        post = self.view_post(post_id)
        if post is None:
            return False
        self.state.editor = EditorForm(
            title=post.title,
            content=post.content,
            category=post.category or DEFAULT_CATEGORY,
            tags_text=", ".join(post.tags),
        )
        self.state.editing_post_id = post_id
        self.state.submit_label = UPDATE_LABEL
        self._set_section("create")
        return True

    def clear_editor(self) -> None:
        self.state.editor = EditorForm()
        self.state.editing_post_id = None
        self.state.submit_label = PUBLISH_LABEL

    # -- Auth --

    async def login(self, username: str, password: str) -> bool:
        result = await self.backend.login(username, password)
        if not result.success:
            self.notify(result.message or "Login failed", "error")
            return False

        self.state.current_user = user_from_dict(result.user or {})
        self.backend.set_token(result.token)
        logger.info("Logged in as %s", self.state.current_user.username)
        self.close_modal()
        self.notify("Login successful!", "success")
        await self.load_posts()
        return True

    async def logout(self) -> None:
        await self.backend.logout()
        self.backend.clear_token()
        self.state.current_user = None
        self.notify("Logged out successfully", "success")
        self._set_section("home")
        await self.load_posts()

    # -- UI --

    async def show_section(self, section: str) -> None:
        """Switch the visible section; the posts section refreshes the list."""
        self._set_section(section)
        if self.state.section == "posts":
            await self.load_posts()

    def _set_section(self, section: str) -> None:
        self.state.section = section if section in SECTIONS else "home"

    def show_modal(self, modal_id: str) -> None:
        self.state.modal = modal_id

    def close_modal(self) -> None:
        self.state.modal = None

    def toggle_theme(self) -> str:
        theme = next_theme(self.state.theme)
        self.state.theme = theme
        save_theme(self.storage, theme)
        self.notify(f"Switched to {theme} theme", "info")
        return theme

    def notify(self, message: str, kind: str = "info") -> None:
        logger.info("Notification [%s]: %s", kind.upper(), message)
        self.state.notification = Notification(message, kind)

    # -- Rendering --

    def render_page(self) -> str:
        return render_template(self.env, "index.html", self._context())

    def render_posts(self) -> str:
        """Just the post grid, for refreshing it in place."""
        return render_fragment(self.env, "index.html", "posts", self._context())

    def _context(self) -> dict[str, Any]:
        state = self.state
        user = state.current_user
        return {
            "app_name": self.profile.app_name,
            "theme": state.theme,
            "theme_icon": theme_icon(state.theme),
            "demo_mode": self.demo_mode,
            "user": user.display_name if user else None,
            "logged_in": user is not None,
            "section": state.section,
            "sections": [SectionLink(name, name.capitalize()) for name in SECTIONS],
            "modal": state.modal,
            "notification": state.notification,
            "editor": state.editor,
            "submit_label": state.submit_label,
            "posts": [PostCard.from_post(post) for post in state.posts],
        }
