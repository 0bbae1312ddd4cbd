"""Persisted key-value store for the access token."""

from __future__ import annotations

from typing import Protocol


class TokenStore(Protocol):
    """Key-value store the client reads the access token from."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemoryTokenStore:
    """Process-local TokenStore backed by a dict."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove(self, key: str) -> None:
        """Remove a key. Removing a missing key is a no-op."""
        self._items.pop(key, None)
