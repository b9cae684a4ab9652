"""In-memory key-value store.

Notes:
- Per-process only: nothing survives a restart, so a throttle window is
  forgotten when the session ends. Useful for tests and throwaway sessions.
"""

from __future__ import annotations

from url_throttle.adapters.storage.base import AbstractKeyValueStore


class InMemoryKeyValueStore(AbstractKeyValueStore):
    """Dictionary-backed key-value store."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)
