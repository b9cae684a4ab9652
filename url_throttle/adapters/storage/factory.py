"""Factory for creating the configured key-value store."""

from url_throttle.adapters.storage.base import AbstractKeyValueStore
from url_throttle.adapters.storage.in_memory import InMemoryKeyValueStore
from url_throttle.adapters.storage.json_file import JsonFileKeyValueStore
from url_throttle.core.config import ThrottleSettings


def create_key_value_store(throttle_settings: ThrottleSettings) -> AbstractKeyValueStore:
    """Instantiate the storage backend named by ``storage_backend``.

    Args:
        throttle_settings: Throttle configuration holding backend and path.

    Returns:
        AbstractKeyValueStore: Configured store.
    """
    if throttle_settings.storage_backend == "memory":
        return InMemoryKeyValueStore()
    return JsonFileKeyValueStore(throttle_settings.storage_path)
