from __future__ import annotations

import json
import os
from pathlib import Path

from grid_console.app.infrastructure.logging.logger import get_logger

DEFAULT_STORAGE_FILE = Path.home() / ".grid_console_local_storage.json"

logger = get_logger(__name__)


def default_storage_path() -> Path:
    configured = os.getenv("GRID_CONSOLE_STORAGE_PATH", "").strip()
    return Path(configured) if configured else DEFAULT_STORAGE_FILE


class LocalStorage:
    """String-keyed client storage persisted as one JSON document.

    Values are plain strings, callers serialize their own payloads. A missing or
    unreadable file behaves like empty storage.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path else default_storage_path()

    def get_item(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        entries = self._load()
        entries[key] = value
        self._save(entries)

    def remove_item(self, key: str) -> None:
        entries = self._load()
        if entries.pop(key, None) is not None:
            self._save(entries)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (ValueError, OSError) as exc:
            logger.warning("local storage unreadable at %s: %s", self.path, exc)
            return {}
        return payload if isinstance(payload, dict) else {}

    def _save(self, entries: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(entries, ensure_ascii=False, indent=2), encoding="utf-8")


class MemoryStorage(LocalStorage):
    """Non-persistent storage with the same interface."""

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}

    def _load(self) -> dict[str, str]:
        return dict(self._entries)

    def _save(self, entries: dict[str, str]) -> None:
        self._entries = dict(entries)
