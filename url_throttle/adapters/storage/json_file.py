"""JSON file key-value store.

Notes:
- The file is re-read on every access, so several processes (or a user
  editing the file) sharing the same path see each other's changes.
- Writes go to a temporary file that is then moved over the original, so a
  reader never observes a half-written document.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from url_throttle.adapters.storage.base import AbstractKeyValueStore
from url_throttle.core.errors import StorageAppError

logger = logging.getLogger(__name__)


class JsonFileKeyValueStore(AbstractKeyValueStore):
    """Key-value store persisted as a single JSON object on disk."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        """Read the whole document.

        Returns:
            The stored mapping; empty when the file does not exist yet.

        Raises:
            StorageAppError: If the file cannot be read or is not a JSON object
                of strings.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise StorageAppError(
                code="storage_unreadable",
                message=f"Could not read storage file: {exc}",
                details={"storage_path": str(self._path)},
            ) from exc

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageAppError(
                code="storage_corrupt",
                message="Storage file is not valid JSON",
                details={"storage_path": str(self._path)},
            ) from exc

        if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
            raise StorageAppError(
                code="storage_corrupt",
                message="Storage file must contain a JSON object of strings",
                details={"storage_path": str(self._path)},
            )
        return data

    def _load_for_write(self) -> tuple[dict[str, str], bool]:
        """Read the document for modification.

        Returns:
            The stored mapping and whether the file was corrupt (in which case
            the mapping is empty and the caller must rewrite the file).
        """
        try:
            return self._load(), False
        except StorageAppError as exc:
            if exc.code != "storage_corrupt":
                raise
            logger.warning(
                "storage.corrupt_overwritten",
                extra={"storage_path": str(self._path)},
            )
            return {}, True

    def _dump(self, data: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageAppError(
                code="storage_unwritable",
                message=f"Could not write storage file: {exc}",
                details={"storage_path": str(self._path)},
            ) from exc

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data, _ = self._load_for_write()
        data[key] = value
        self._dump(data)

    def delete(self, key: str) -> None:
        data, corrupt = self._load_for_write()
        if key not in data and not corrupt:
            return
        data.pop(key, None)
        self._dump(data)
