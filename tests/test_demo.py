"""Tests for garden.demo: the storage-backed stand-in for the server."""

from datetime import date

import pytest

from garden.demo import DELAYS, LOGGED_IN_KEY, POSTS_KEY, USER_KEY, DemoAPI
from garden.storage import FileStorage, MemoryStorage


def _demo(storage=None) -> DemoAPI:
    """Helper: a demo API without artificial delays."""
    return DemoAPI(storage if storage is not None else MemoryStorage(), latency=0)


async def _logged_in(storage=None) -> DemoAPI:
    demo = _demo(storage)
    result = await demo.login("admin", "admin123")
    assert result.success
    return demo


class TestSeeding:
    async def test_seeds_three_posts(self) -> None:
        result = await _demo().list_posts()
        assert result.success is True
        assert [post["id"] for post in result.posts] == [1, 2, 3]
        assert result.posts[0]["title"] == "Welcome to Digital Garden 🌱"

    def test_seed_is_persisted(self) -> None:
        storage = MemoryStorage()
        _demo(storage)
        assert POSTS_KEY in storage

    async def test_unreadable_posts_are_reseeded(self) -> None:
        storage = MemoryStorage({POSTS_KEY: "{broken"})
        result = await _demo(storage).list_posts()
        assert len(result.posts) == 3


class TestAuth:
    async def test_login_success(self) -> None:
        storage = MemoryStorage()
        demo = _demo(storage)
        result = await demo.login("admin", "admin123")
        assert result.success is True
        assert result.token.startswith("demo_token_")
        assert result.user["name"] == "Demo Admin"
        assert result.user["email"] == "admin@digitalgarden.com"
        assert storage.get_item(LOGGED_IN_KEY) == "true"
        assert demo.is_authenticated()

    @pytest.mark.parametrize(("username", "password"), [("admin", "x"), ("x", "admin123"), ("", "")])
    async def test_login_failure(self, username: str, password: str) -> None:
        demo = _demo()
        result = await demo.login(username, password)
        assert result.success is False
        assert result.message == "Invalid credentials. Try admin/admin123"
        assert not demo.is_authenticated()

    async def test_logout_clears_flags(self) -> None:
        storage = MemoryStorage()
        demo = await _logged_in(storage)
        result = await demo.logout()
        assert result.success is True
        assert LOGGED_IN_KEY not in storage
        assert USER_KEY not in storage
        assert demo.current_user() is None

    async def test_login_survives_reload(self) -> None:
        storage = MemoryStorage()
        await _logged_in(storage)
        reloaded = _demo(storage)
        assert reloaded.is_authenticated()
        assert reloaded.current_user()["username"] == "admin"

    async def test_verify(self) -> None:
        demo = _demo()
        assert (await demo.verify("demo_token_1")).success is False
        await demo.login("admin", "admin123")
        result = await demo.verify("demo_token_1")
        assert result.success is True
        assert result.user["name"] == "Demo Admin"
        assert (await demo.verify("")).success is False

    @pytest.mark.parametrize("operation", ["create", "update", "delete"])
    async def test_mutations_require_login(self, operation: str) -> None:
        demo = _demo()
        if operation == "create":
            result = await demo.create_post("T", "C")
        elif operation == "update":
            result = await demo.update_post(1, "T", "C")
        else:
            result = await demo.delete_post(1)
        assert result.success is False
        assert result.message == "Not authenticated"
        assert len((await demo.list_posts()).posts) == 3


class TestCreate:
    async def test_prepends_record(self) -> None:
        demo = await _logged_in()
        result = await demo.create_post("Fresh", "Sprouting", ["new"], "notes")
        assert result.success is True
        assert result.message == "Post created successfully (demo mode)"
        posts = (await demo.list_posts()).posts
        assert len(posts) == 4
        assert posts[0] == result.post

    async def test_record_shape(self) -> None:
        demo = await _logged_in()
        content = "x" * 250
        post = (await demo.create_post("Long", content, ["a", "b"])).post
        assert isinstance(post["id"], int)
        assert post["author"] == "Demo Admin"
        assert post["date"] == date.today().isoformat()
        assert post["tags"] == ["a", "b"]
        assert post["excerpt"] == "x" * 100 + "..."
        assert "category" not in post

    async def test_short_content_still_gets_ellipsis(self) -> None:
        demo = await _logged_in()
        post = (await demo.create_post("Short", "Hi")).post
        assert post["excerpt"] == "Hi..."

    async def test_survives_reload(self, tmp_path) -> None:
        path = tmp_path / "storage.json"
        demo = await _logged_in(FileStorage(path))
        created = (await demo.create_post("Kept", "Still here")).post

        reloaded = _demo(FileStorage(path))
        posts = (await reloaded.list_posts()).posts
        assert posts[0]["id"] == created["id"]
        assert posts[0]["title"] == "Kept"
        assert len(posts) == 4


class TestUpdate:
    async def test_updates_matching_record(self) -> None:
        demo = await _logged_in()
        result = await demo.update_post(2, "Renamed", "New body", ["t"], "misc")
        assert result.success is True
        posts = (await demo.list_posts()).posts
        assert posts[1]["title"] == "Renamed"
        assert posts[1]["content"] == "New body"
        assert posts[1]["category"] == "misc"
        assert [post["id"] for post in posts] == [1, 2, 3]

    async def test_missing_record(self) -> None:
        demo = await _logged_in()
        result = await demo.update_post(99, "T", "C")
        assert result.success is False
        assert result.message == "Post not found"


class TestDelete:
    async def test_removes_exactly_the_match(self) -> None:
        demo = await _logged_in()
        result = await demo.delete_post(2)
        assert result.success is True
        assert result.message == "Post deleted successfully (demo mode)"
        assert [post["id"] for post in (await demo.list_posts()).posts] == [1, 3]

    async def test_deletion_persists(self) -> None:
        storage = MemoryStorage()
        demo = await _logged_in(storage)
        await demo.delete_post(1)
        assert [post["id"] for post in (await _demo(storage).list_posts()).posts] == [2, 3]

    async def test_unknown_id_leaves_list_alone(self) -> None:
        demo = await _logged_in()
        result = await demo.delete_post(42)
        assert result.success is True
        assert len((await demo.list_posts()).posts) == 3

    async def test_id_must_match_exactly(self) -> None:
        demo = await _logged_in()
        await demo.delete_post("1")
        assert len((await demo.list_posts()).posts) == 3


class TestLatency:
    async def test_delays_scale(self, monkeypatch: pytest.MonkeyPatch) -> None:
        slept: list[float] = []

        async def fake_sleep(seconds: float) -> None:
            slept.append(seconds)

        monkeypatch.setattr("garden.demo.anyio.sleep", fake_sleep)
        demo = DemoAPI(MemoryStorage(), latency=2.0)
        await demo.login("admin", "admin123")
        await demo.list_posts()
        await demo.delete_post(1)
        assert slept == [DELAYS["login"] * 2, DELAYS["list_posts"] * 2, DELAYS["delete_post"] * 2]

    async def test_zero_latency_never_sleeps(self, monkeypatch: pytest.MonkeyPatch) -> None:
        async def fail_sleep(seconds: float) -> None:
            raise AssertionError("slept")

        monkeypatch.setattr("garden.demo.anyio.sleep", fail_sleep)
        await _demo().list_posts()
