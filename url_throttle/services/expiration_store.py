"""Persisted throttle expiration slot.

Wraps a key-value store with the single well-known key and converts between
the stored decimal string and epoch milliseconds. Storage failures are
fail-open: an unreadable or malformed value reads as "no expiration", and a
failed write is logged and dropped. A broken store must never lock the user
out permanently.
"""

from __future__ import annotations

import logging

from url_throttle.adapters.storage.base import AbstractKeyValueStore
from url_throttle.core.errors import StorageAppError

logger = logging.getLogger(__name__)

THROTTLE_EXPIRATION_KEY = "throttleExpiration"


class ThrottleExpirationStore:
    """Read/write/clear access to the persisted ``throttleExpiration`` value."""

    def __init__(self, store: AbstractKeyValueStore, key: str = THROTTLE_EXPIRATION_KEY) -> None:
        self._store = store
        self._key = key

    def read(self) -> int | None:
        """Return the stored expiration in epoch milliseconds, or None."""
        try:
            raw = self._store.get(self._key)
        except StorageAppError as exc:
            logger.warning(
                "storage.read_failed",
                extra={"error_code": exc.code, "error_message": exc.message},
            )
            return None

        if raw is None:
            return None

        try:
            return int(raw.strip())
        except ValueError:
            logger.warning("storage.malformed_expiration", extra={"raw_length": len(raw)})
            return None

    def write(self, expires_at_ms: int) -> None:
        try:
            self._store.set(self._key, str(expires_at_ms))
        except StorageAppError as exc:
            logger.error(
                "storage.write_failed",
                extra={"error_code": exc.code, "error_message": exc.message},
            )

    def clear(self) -> None:
        try:
            self._store.delete(self._key)
        except StorageAppError as exc:
            logger.error(
                "storage.clear_failed",
                extra={"error_code": exc.code, "error_message": exc.message},
            )
