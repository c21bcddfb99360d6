"""Tests for garden.posts: post records and the static data sets."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from garden.posts import (
    DEMO_POSTS,
    Post,
    find_post,
    iso_timestamp,
    make_excerpt,
    parse_tags,
    static_posts,
)


class TestFromRecord:
    def test_server_shape(self) -> None:
        post = Post.from_record(
            {
                "id": 1,
                "title": "T",
                "content": "C",
                "excerpt": "E",
                "author": "Admin",
                "date": "2025-09-18T12:00:00.000Z",
                "tags": ["a"],
            }
        )
        assert post == Post(
            id=1,
            title="T",
            content="C",
            excerpt="E",
            author="Admin",
            date="2025-09-18T12:00:00.000Z",
            tags=("a",),
        )

    def test_alternate_keys(self) -> None:
        post = Post.from_record({"_id": "abc", "excerpt": "Only this", "createdAt": "2025-01-01"})
        assert post.id == "abc"
        assert post.content == "Only this"
        assert post.date == "2025-01-01"

    def test_missing_fields_become_defaults(self) -> None:
        post = Post.from_record({})
        assert post.id is None
        assert post.title == ""
        assert post.content == ""
        assert post.tags == ()
        assert post.published is True

    def test_epoch_millisecond_date(self) -> None:
        post = Post.from_record({"_id": "a", "createdAt": 1700000000000})
        assert post.date == "2023-11-14T22:13:20.000Z"
        assert post.display_date == "2023-11-14"

    def test_odd_field_types_do_not_raise(self) -> None:
        post = Post.from_record({"id": 1, "date": True, "tags": 5})
        assert post.date == "True"
        assert post.tags == ()
        assert post.display_date == "True"


class TestPresentation:
    def test_preview_truncates_and_ellipsises(self) -> None:
        assert Post(id=1, content="y" * 200).preview == "y" * 150 + "..."
        assert Post(id=1, content="short").preview == "short..."

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("2025-09-18T12:00:00.000Z", "2025-09-18"), ("2025-09-16", "2025-09-16"), (None, "")],
    )
    def test_display_date(self, value: str | None, expected: str) -> None:
        assert Post(id=1, date=value).display_date == expected

    def test_to_dict_category_only_when_set(self) -> None:
        assert "category" not in Post(id=1).to_dict()
        assert Post(id=1, category="notes").to_dict()["category"] == "notes"


class TestHelpers:
    def test_make_excerpt(self) -> None:
        assert make_excerpt("z" * 120) == "z" * 100 + "..."

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("a, b ,c", ["a", "b", "c"]),
            (" , ,", []),
            ("", []),
            ("solo", ["solo"]),
        ],
    )
    def test_parse_tags(self, text: str, expected: list[str]) -> None:
        assert parse_tags(text) == expected

    def test_iso_timestamp(self) -> None:
        moment = datetime(2025, 9, 18, 14, 30, 5, 123456, tzinfo=timezone(timedelta(hours=2)))
        assert iso_timestamp(moment) == "2025-09-18T12:30:05.123Z"

    def test_find_post(self) -> None:
        posts = [Post(id=1), Post(id=2)]
        assert find_post(posts, 2) is posts[1]
        assert find_post(posts, 3) is None


class TestStaticData:
    def test_static_posts(self) -> None:
        now = datetime(2025, 9, 18, 8, 0, tzinfo=UTC)
        first, second = static_posts(now)
        assert (first.id, second.id) == (1, 2)
        assert first.date == "2025-09-18T08:00:00.000Z"
        assert second.date == "2025-09-17T08:00:00.000Z"
        assert first.author == second.author == "Admin"

    def test_demo_posts(self) -> None:
        assert [post["date"] for post in DEMO_POSTS] == ["2025-09-18", "2025-09-17", "2025-09-16"]
        assert all(post["author"] == "Demo Admin" for post in DEMO_POSTS)
