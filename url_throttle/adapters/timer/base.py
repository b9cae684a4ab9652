"""Periodic timer interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

TimerCallback = Callable[[], None]


class AbstractPeriodicTimer(ABC):
    """A restartable timer that fires a callback at a fixed period.

    Implementations must treat ``start`` on an active timer and ``cancel`` on
    an inactive one as no-ops.
    """

    @property
    @abstractmethod
    def active(self) -> bool:
        """Whether the timer is currently armed."""
        raise NotImplementedError

    @abstractmethod
    def start(self, callback: TimerCallback) -> None:
        """Arm the timer so ``callback`` runs once per period."""
        raise NotImplementedError

    @abstractmethod
    def cancel(self) -> None:
        """Disarm the timer."""
        raise NotImplementedError
