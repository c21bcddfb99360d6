"""Persistent key-value storage with browser ``localStorage`` semantics.

Keys and values are strings. Callers JSON-encode structured values
themselves, exactly as front-end code does with ``localStorage``.

``MemoryStorage`` lives for one process; ``FileStorage`` keeps the items
in a JSON file so a new instance (a "page reload") sees the same data.
"""

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Protocol

logger = logging.getLogger("garden.storage")


class Storage(Protocol):
    """The subset of the Web Storage API the blog relies on."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...

    def clear(self) -> None: ...


class MemoryStorage:
    """In-process storage. Lost when the object goes away."""

    __slots__ = ("_items",)

    def __init__(self, items: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)


class FileStorage(MemoryStorage):
    """Storage backed by a JSON object on disk.

    The file is read once on construction and rewritten after every
    mutation. A missing file starts empty; an unreadable one is logged
    and replaced on the next write.
    """

    __slots__ = ("path",)

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(self._load())

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable storage file %s", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring storage file %s: not a JSON object", self.path)
            return {}
        return {str(key): str(value) for key, value in data.items()}

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._items, indent=2), encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        super().set_item(key, value)
        self._save()

    def remove_item(self, key: str) -> None:
        super().remove_item(key)
        self._save()

    def clear(self) -> None:
        super().clear()
        self._save()
