from __future__ import annotations

from grid_console.app.local_storage import LocalStorage, MemoryStorage

TOKEN_STORAGE_KEY = "authToken"


class AuthStore:
    """Holds the single bearer credential of this browsing context."""

    def __init__(self, storage: LocalStorage | None = None) -> None:
        self._storage = storage or MemoryStorage()

    def set_token(self, token: str) -> None:
        self._storage.set_item(TOKEN_STORAGE_KEY, token)

    def get_token(self) -> str | None:
        return self._storage.get_item(TOKEN_STORAGE_KEY) or None

    def clear(self) -> None:
        self._storage.remove_item(TOKEN_STORAGE_KEY)

    def is_authenticated(self) -> bool:
        return bool(self.get_token())
