"""Light/dark theme persistence.

The theme is a plain string in storage under ``theme``; the page applies
it as the ``data-theme`` attribute on ``<html>``.
"""

from garden.storage import Storage

THEME_KEY = "theme"
LIGHT = "light"
DARK = "dark"
DEFAULT_THEME = LIGHT


def load_theme(storage: Storage) -> str:
    """The saved theme, or light when nothing (or nonsense) is saved."""
    theme = storage.get_item(THEME_KEY)
    if theme in (LIGHT, DARK):
        return theme
    return DEFAULT_THEME


def save_theme(storage: Storage, theme: str) -> None:
    storage.set_item(THEME_KEY, theme)


def next_theme(theme: str) -> str:
    return LIGHT if theme == DARK else DARK


def theme_icon(theme: str) -> str:
    """Icon class for the toggle button: offer the sun in the dark."""
    return "fas fa-sun" if theme == DARK else "fas fa-moon"
