"""Result sink interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from url_throttle.schemas.result import ValidationResult


class AbstractResultSink(ABC):
    """Where validation results and status messages are shown."""

    @abstractmethod
    def render(self, result: ValidationResult) -> None:
        """Show a validation result (success or error shaped)."""
        raise NotImplementedError

    @abstractmethod
    def notify(self, message: str) -> None:
        """Set the status line; an empty message clears it."""
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        """Remove the status line and any displayed result."""
        raise NotImplementedError
