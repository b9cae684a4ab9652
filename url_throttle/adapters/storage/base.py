"""Durable key-value storage interface.

The throttle should depend on this abstraction (not the concrete backend) so
the persisted expiration can live in memory for tests and in a shared file
for real sessions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class AbstractKeyValueStore(ABC):
    """Interface for string key-value stores."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None when absent.

        Raises:
            StorageAppError: If the backend cannot be read.
        """
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value.

        Raises:
            StorageAppError: If the backend cannot be written.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``; deleting a missing key is not an error.

        Raises:
            StorageAppError: If the backend cannot be written.
        """
        raise NotImplementedError
