"""Client-side submission throttle.

Admits at most ``request_limit`` submissions, then blocks input until a
persisted expiration instant passes.

Quota state is split in two:
- The request counter lives in memory only and is lost on restart.
- The expiration timestamp lives in durable storage and is authoritative for
  whether throttling is active. It is re-read before every decision, since
  another process sharing the storage may have set or cleared it.

An elapsed expiration is cleared by whichever comes first: the next
submission, or the periodic timer armed while throttled.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from datetime import tzinfo

from url_throttle.adapters.sink.base import AbstractResultSink
from url_throttle.adapters.timer.base import AbstractPeriodicTimer
from url_throttle.adapters.transport.base import AbstractRequestTransport
from url_throttle.schemas.result import ValidationResult
from url_throttle.services.expiration_store import ThrottleExpirationStore
from url_throttle.services.input_gate import InputGate
from url_throttle.utils.clock import Clock, epoch_millis, format_wait_notice

logger = logging.getLogger(__name__)

THROTTLED_MESSAGE = "You've reached the maximum number of searches allowed."


class ThrottleState(str, enum.Enum):
    ADMITTING = "admitting"
    THROTTLED = "throttled"


class SubmitDecision(str, enum.Enum):
    ADMIT = "admit"
    ENTER_THROTTLE = "enter_throttle"
    REMAIN_THROTTLED = "remain_throttled"


@dataclass(frozen=True)
class SubmitOutcome:
    """Result of a submission attempt.

    Attributes:
        decision: What the controller did with the submission.
        result: What was rendered to the sink (backend answer or throttled notice).
        request_count: Counter value after this attempt.
        expires_at: Active expiration in epoch milliseconds, None when admitted.
    """

    decision: SubmitDecision
    result: ValidationResult
    request_count: int
    expires_at: int | None

    @property
    def admitted(self) -> bool:
        return self.decision is SubmitDecision.ADMIT


class ThrottleController:
    """Owns the request counter, throttle state and re-check timer."""

    def __init__(
        self,
        *,
        request_limit: int,
        period_seconds: int,
        expiration_store: ThrottleExpirationStore,
        gate: InputGate,
        sink: AbstractResultSink,
        transport: AbstractRequestTransport,
        timer: AbstractPeriodicTimer,
        clock: Clock = epoch_millis,
        display_tz: tzinfo | None = None,
    ) -> None:
        """Create the controller and recover any throttle left in storage.

        If storage holds an expiration still in the future, the controller
        starts throttled: the gate is disabled, the notice is shown and the
        timer is armed. An elapsed stored expiration is cleared.

        Raises:
            ValueError: If request_limit or period_seconds are invalid.
        """
        if request_limit < 1:
            raise ValueError("request_limit must be >= 1")
        if period_seconds < 1:
            raise ValueError("period_seconds must be >= 1")

        self._limit = request_limit
        self._period_ms = period_seconds * 1000
        self._expirations = expiration_store
        self._gate = gate
        self._sink = sink
        self._transport = transport
        self._timer = timer
        self._clock = clock
        self._display_tz = display_tz

        self._count = 0
        self._state = ThrottleState.ADMITTING

        now = self._clock()
        expires_at = self._read_expiration(now)
        if expires_at is None:
            return
        if now < expires_at:
            logger.info("throttle.recovered", extra={"expires_at_ms": expires_at})
            self._throttle(expires_at, url="")
        else:
            self._expirations.clear()
            logger.info("throttle.stale_cleared", extra={"expires_at_ms": expires_at})

    @property
    def state(self) -> ThrottleState:
        return self._state

    @property
    def request_count(self) -> int:
        return self._count

    @property
    def request_limit(self) -> int:
        return self._limit

    async def submit(self, url: str) -> SubmitOutcome:
        """Admit or throttle a submission of an already-validated URL.

        Every attempt consumes a quota slot, including attempts whose request
        later fails in the transport.

        Args:
            url: Syntactically valid URL.

        Returns:
            SubmitOutcome describing the decision and what was rendered.
        """
        now = self._clock()
        expires_at = self._read_expiration(now)

        if expires_at is not None and now >= expires_at:
            self._end_episode(expires_at)
            expires_at = None
        elif expires_at is None and self._state is ThrottleState.THROTTLED:
            # Someone else removed the stored value; treat the window as over.
            self._end_episode(None)

        self._count += 1

        if expires_at is not None:
            logger.info(
                "throttle.rejected",
                extra={"request_count": self._count, "expires_at_ms": expires_at},
            )
            notice = self._throttle(expires_at, url)
            return SubmitOutcome(SubmitDecision.REMAIN_THROTTLED, notice, self._count, expires_at)

        if self._count > self._limit:
            expires_at = now + self._period_ms
            self._expirations.write(expires_at)
            logger.warning(
                "throttle.entered",
                extra={
                    "request_count": self._count,
                    "limit": self._limit,
                    "expires_at_ms": expires_at,
                },
            )
            notice = self._throttle(expires_at, url)
            return SubmitOutcome(SubmitDecision.ENTER_THROTTLE, notice, self._count, expires_at)

        logger.info(
            "throttle.admitted",
            extra={"request_count": self._count, "limit": self._limit},
        )
        result = await self._transport.submit(url)
        self._sink.render(result)
        return SubmitOutcome(SubmitDecision.ADMIT, result, self._count, None)

    def check_expiration(self) -> None:
        """Timer callback: release the throttle once the stored instant passes.

        Calling this again after the throttle was released does nothing.
        """
        now = self._clock()
        expires_at = self._read_expiration(now)
        if expires_at is not None and now < expires_at:
            return

        if self._state is ThrottleState.THROTTLED:
            self._end_episode(expires_at)
        elif expires_at is not None:
            self._expirations.clear()
            logger.info("throttle.stale_cleared", extra={"expires_at_ms": expires_at})

    def shutdown(self) -> None:
        """Stop the re-check timer when the session ends.

        The persisted expiration is left in place so the next session
        starts throttled.
        """
        self._timer.cancel()

    def _read_expiration(self, now: int) -> int | None:
        """Read the stored expiration, discarding values no window could produce.

        A stored value is always set to ``now + period`` when the quota trips,
        so anything further out than one period came from corruption or an
        outside edit. It is cleared and read as absent.
        """
        expires_at = self._expirations.read()
        if expires_at is not None and expires_at > now + self._period_ms:
            logger.warning(
                "storage.malformed_expiration",
                extra={"expires_at_ms": expires_at, "max_expires_at_ms": now + self._period_ms},
            )
            self._expirations.clear()
            return None
        return expires_at

    def _throttle(self, expires_at: int, url: str) -> ValidationResult:
        self._state = ThrottleState.THROTTLED
        self._gate.disable()
        self._sink.notify(THROTTLED_MESSAGE)
        notice = ValidationResult(
            url=url,
            exists=False,
            file=False,
            folder=False,
            error=format_wait_notice(expires_at, self._display_tz),
        )
        self._sink.render(notice)
        self._timer.start(self.check_expiration)
        return notice

    def _end_episode(self, expires_at: int | None) -> None:
        """Clear the stored expiration and start a fresh quota window."""
        self._expirations.clear()
        self._count = 0

        if self._state is not ThrottleState.THROTTLED:
            logger.info("throttle.stale_cleared", extra={"expires_at_ms": expires_at})
            return

        self._state = ThrottleState.ADMITTING
        self._timer.cancel()
        self._gate.enable()
        self._sink.clear()
        logger.info("throttle.released", extra={"expires_at_ms": expires_at})
