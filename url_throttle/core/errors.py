"""Application-level exception types.

This module defines domain errors used across services/adapters, enabling
consistent error handling and logging.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability.

    Fields are optional to keep the shapes consistent without forcing every
    raise site to fill all of them.
    """

    code: str
    message: str
    hint: str
    max_value: int
    actual_value: int
    http_status: int
    storage_path: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when input/config validation fails."""


class StorageAppError(AppError):
    """Raised when durable storage cannot be read or written."""


class TransportAppError(AppError):
    """Raised when the backend request fails or returns an unusable body."""
