"""String key-value stores used for workout persistence."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol


logger = logging.getLogger(__name__)


def default_data_dir() -> Path:
    return Path.home() / ".mapty"


def default_storage_path() -> Path:
    return default_data_dir() / "storage.json"


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStore:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)


class JsonFileStore:
    """Keep every key in one JSON object on disk.

    A missing or unreadable file reads as empty. Each write rewrites the file.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or default_storage_path()

    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = value
        self._write(items)
        logger.debug("Stored %d chars under '%s' in %s", len(value), key, self.path)

    def remove(self, key: str) -> None:
        items = self._read()
        if key not in items:
            return
        del items[key]
        self._write(items)
        logger.debug("Removed '%s' from %s", key, self.path)

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable store %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store %s: top level is not an object", self.path)
            return {}
        return data

    def _write(self, items: dict[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(items, ensure_ascii=True, indent=2), encoding="utf-8")
