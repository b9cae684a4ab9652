"""Console result sink."""

from __future__ import annotations

import sys
from typing import TextIO

from url_throttle.adapters.sink.base import AbstractResultSink
from url_throttle.schemas.result import ValidationResult


def format_result(result: ValidationResult) -> str:
    """Render a result as a single human-readable line."""
    if not result.ok:
        return f"API Error: {result.error} ... URL: {result.url}"
    return (
        f"Exists: {str(result.exists).lower()},  File: {str(result.file).lower()},  "
        f"Folder: {str(result.folder).lower()},  URL: {result.url}"
    )


class ConsoleResultSink(AbstractResultSink):
    """Writes results and status messages to a text stream.

    The last status message and rendered line are kept so the current screen
    state can be inspected.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stdout
        self.status: str = ""
        self.last_line: str | None = None

    def render(self, result: ValidationResult) -> None:
        self.last_line = format_result(result)
        self._write(self.last_line)

    def notify(self, message: str) -> None:
        if message == self.status:
            return
        self.status = message
        if message:
            self._write(message)

    def clear(self) -> None:
        self.status = ""
        self.last_line = None

    def _write(self, line: str) -> None:
        self._stream.write(line + "\n")
        self._stream.flush()
