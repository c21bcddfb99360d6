"""Tests for garden.theme."""

from garden.storage import FileStorage, MemoryStorage
from garden.theme import load_theme, next_theme, save_theme, theme_icon


class TestTheme:
    def test_defaults_to_light(self) -> None:
        assert load_theme(MemoryStorage()) == "light"

    def test_unknown_value_falls_back(self) -> None:
        assert load_theme(MemoryStorage({"theme": "sepia"})) == "light"

    def test_persists_across_reload(self, tmp_path) -> None:
        path = tmp_path / "store.json"
        save_theme(FileStorage(path), "dark")
        assert load_theme(FileStorage(path)) == "dark"

    def test_next_theme(self) -> None:
        assert next_theme("light") == "dark"
        assert next_theme("dark") == "light"

    def test_icon(self) -> None:
        assert theme_icon("dark") == "fas fa-sun"
        assert theme_icon("light") == "fas fa-moon"
