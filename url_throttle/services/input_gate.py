"""Input gate: whether the URL field currently accepts submissions."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class InputGate:
    """Binary enabled/disabled flag driven by the throttle controller.

    Nothing but the controller should toggle the gate; the input layer only
    reads :pyattr:`enabled`.
    """

    def __init__(self, enabled: bool = True) -> None:
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        if self._enabled:
            return
        self._enabled = True
        logger.info("input_gate.enabled")

    def disable(self) -> None:
        if not self._enabled:
            return
        self._enabled = False
        logger.info("input_gate.disabled")
