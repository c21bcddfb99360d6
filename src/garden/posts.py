"""Post records and the static data the server and demo mode ship with.

Records arrive in several shapes (``id`` or ``_id``, ``content`` or only
``excerpt``, ``date`` or ``createdAt``). ``Post.from_record`` accepts all
of them; nothing is validated.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

EXCERPT_LENGTH = 100
PREVIEW_LENGTH = 150


@dataclass(frozen=True, slots=True)
class Post:
    """A blog entry."""

    id: Any
    title: str = ""
    content: str = ""
    excerpt: str | None = None
    author: str = ""
    date: str | None = None
    tags: tuple[str, ...] = ()
    category: str | None = None
    published: bool = True

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Post:
        """Build a Post from any of the record shapes in circulation."""
        post_id = record.get("id", record.get("_id"))
        excerpt = record.get("excerpt")
        content = record.get("content")
        if content is None:
            content = excerpt or ""
        return cls(
            id=post_id,
            title=str(record.get("title") or ""),
            content=str(content),
            excerpt=excerpt,
            author=str(record.get("author") or ""),
            date=_record_date(record.get("date") or record.get("createdAt")),
            tags=_record_tags(record.get("tags")),
            category=record.get("category"),
            published=bool(record.get("published", True)),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire shape the server emits."""
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "excerpt": self.excerpt,
            "author": self.author,
            "date": self.date,
            "tags": list(self.tags),
            "published": self.published,
        }
        if self.category is not None:
            data["category"] = self.category
        return data

    @property
    def preview(self) -> str:
        """Card preview: the first characters of the body, always ellipsised."""
        return f"{self.content[:PREVIEW_LENGTH]}..."

    @property
    def display_date(self) -> str:
        """The date part of ``date`` for display, or an empty string."""
        if not self.date:
            return ""
        return self.date.split("T", 1)[0]


def _record_date(value: Any) -> str | None:
    """Dates arrive as ISO strings or as epoch milliseconds."""
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return iso_timestamp(datetime.fromtimestamp(value / 1000, UTC))
        except (OverflowError, OSError, ValueError):
            return None
    return str(value)


def _record_tags(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(str(tag) for tag in value)


def make_excerpt(content: str) -> str:
    """Derive an excerpt the way demo mode does."""
    return f"{content[:EXCERPT_LENGTH]}..."


def parse_tags(text: str) -> list[str]:
    """Split a comma-separated tag field, dropping blanks."""
    return [tag.strip() for tag in text.split(",") if tag.strip()]


def iso_timestamp(moment: datetime) -> str:
    """Format *moment* as an ISO-8601 UTC timestamp with milliseconds."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def static_posts(now: datetime | None = None) -> tuple[Post, ...]:
    """The two records the API server serves from ``GET /api/posts``."""
    now = now or datetime.now(UTC)
    return (
        Post(
            id=1,
            title="Welcome to Digital Garden",
            content="This is your first post! Start writing amazing content.",
            excerpt="Welcome to your new digital garden where ideas bloom.",
            author="Admin",
            date=iso_timestamp(now),
            tags=("welcome", "first-post"),
        ),
        Post(
            id=2,
            title="Getting Started with Blogging",
            content="Here are some tips to get started with your blog...",
            excerpt="Essential tips for new bloggers to create engaging content.",
            author="Admin",
            date=iso_timestamp(now - timedelta(days=1)),
            tags=("blogging", "tips"),
        ),
    )


DEMO_POSTS: tuple[dict[str, Any], ...] = (
    {
        "id": 1,
        "title": "Welcome to Digital Garden 🌱",
        "content": (
            "This is a demo post showing how the blog looks with content. "
            "In a full deployment, this would be connected to a database "
            "with real user authentication."
        ),
        "author": "Demo Admin",
        "date": "2025-09-18",
        "tags": ["welcome", "demo"],
        "excerpt": "Welcome to our beautiful digital garden blog...",
    },
    {
        "id": 2,
        "title": "Features of This Blog 📝",
        "content": (
            "This blog includes:\n\n"
            "• Beautiful responsive design\n"
            "• Dark/Light theme toggle\n"
            "• User authentication (demo mode)\n"
            "• Modern UI with animations\n"
            "• Mobile-friendly layout"
        ),
        "author": "Demo Admin",
        "date": "2025-09-17",
        "tags": ["features", "design"],
        "excerpt": "Explore all the amazing features built into this blog...",
    },
    {
        "id": 3,
        "title": "How to Deploy with Backend 🚀",
        "content": (
            "To get full functionality:\n\n"
            "1. Deploy the API server to a hosting service\n"
            "2. Update the API base URL in the environment config\n"
            "3. Deploy the front end to a static host\n\n"
            "For now, enjoy this static demo!"
        ),
        "author": "Demo Admin",
        "date": "2025-09-16",
        "tags": ["deployment", "guide"],
        "excerpt": "Learn how to deploy the full-stack version...",
    },
)


def find_post(posts: Iterable[Post], post_id: Any) -> Post | None:
    """Return the first post whose id equals *post_id*."""
    for post in posts:
        if post.id == post_id:
            return post
    return None
