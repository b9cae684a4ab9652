"""URL check flow: validate user input, then hand it to the throttle."""

from __future__ import annotations

import logging
import uuid

from url_throttle.adapters.sink.base import AbstractResultSink
from url_throttle.core.errors import ValidationAppError
from url_throttle.core.logging import clear_submission_id, set_submission_id
from url_throttle.services.input_gate import InputGate
from url_throttle.services.throttle_controller import SubmitOutcome, ThrottleController
from url_throttle.utils.url_validator import MAX_URL_LENGTH, validate_url

logger = logging.getLogger(__name__)


class UrlCheckService:
    """Single always-registered input handler.

    Input is dropped while the gate is closed. Syntax errors go to the status
    line and never reach the controller, so they do not consume quota.
    """

    def __init__(
        self,
        controller: ThrottleController,
        gate: InputGate,
        sink: AbstractResultSink,
        *,
        max_url_length: int = MAX_URL_LENGTH,
    ) -> None:
        self.controller = controller
        self.gate = gate
        self.sink = sink
        self.max_url_length = max_url_length

    async def handle_input(self, raw: str) -> SubmitOutcome | None:
        """Process one piece of user input.

        Args:
            raw: Text entered in the URL field.

        Returns:
            The controller's outcome, or None when the input was ignored or
            failed validation.
        """
        if not self.gate.enabled:
            logger.debug("input.ignored_gate_closed")
            return None

        url = raw.strip()
        try:
            validate_url(url, self.max_url_length)
        except ValidationAppError as exc:
            self.sink.notify(exc.message)
            return None

        self.sink.notify("")

        set_submission_id(uuid.uuid4().hex[:12])
        try:
            return await self.controller.submit(url)
        finally:
            clear_submission_id()
