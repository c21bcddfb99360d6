"""Tests for garden.storage: localStorage-style key-value stores."""

import json

from garden.storage import FileStorage, MemoryStorage


class TestMemoryStorage:
    def test_get_missing(self) -> None:
        assert MemoryStorage().get_item("nope") is None

    def test_set_get_remove(self) -> None:
        storage = MemoryStorage()
        storage.set_item("k", "v")
        assert storage.get_item("k") == "v"
        assert "k" in storage
        storage.remove_item("k")
        assert storage.get_item("k") is None

    def test_values_are_strings(self) -> None:
        storage = MemoryStorage()
        storage.set_item("n", 5)  # type: ignore[arg-type]
        assert storage.get_item("n") == "5"

    def test_remove_missing_is_noop(self) -> None:
        MemoryStorage().remove_item("nope")

    def test_clear_and_len(self) -> None:
        storage = MemoryStorage({"a": "1", "b": "2"})
        assert len(storage) == 2
        assert sorted(storage) == ["a", "b"]
        storage.clear()
        assert len(storage) == 0


class TestFileStorage:
    def test_missing_file_starts_empty(self, tmp_path) -> None:
        storage = FileStorage(tmp_path / "store.json")
        assert len(storage) == 0
        assert not (tmp_path / "store.json").exists()

    def test_survives_reload(self, tmp_path) -> None:
        path = tmp_path / "store.json"
        FileStorage(path).set_item("theme", "dark")
        assert FileStorage(path).get_item("theme") == "dark"

    def test_file_is_a_json_object(self, tmp_path) -> None:
        path = tmp_path / "nested" / "store.json"
        storage = FileStorage(path)
        storage.set_item("a", "1")
        storage.set_item("b", "2")
        storage.remove_item("a")
        assert json.loads(path.read_text(encoding="utf-8")) == {"b": "2"}

    def test_clear_persists(self, tmp_path) -> None:
        path = tmp_path / "store.json"
        storage = FileStorage(path)
        storage.set_item("a", "1")
        storage.clear()
        assert len(FileStorage(path)) == 0

    def test_unreadable_file_is_ignored(self, tmp_path) -> None:
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")
        storage = FileStorage(path)
        assert len(storage) == 0
        storage.set_item("a", "1")
        assert FileStorage(path).get_item("a") == "1"

    def test_non_object_file_is_ignored(self, tmp_path) -> None:
        path = tmp_path / "store.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert len(FileStorage(path)) == 0
