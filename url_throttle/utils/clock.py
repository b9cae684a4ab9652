"""Wall-clock helpers working in integer epoch milliseconds."""

from __future__ import annotations

import logging
import time
from datetime import datetime, tzinfo
from typing import Callable

logger = logging.getLogger(__name__)

Clock = Callable[[], int]

UNKNOWN_WAIT_NOTICE = "Wait period end time is unavailable."


def epoch_millis() -> int:
    """Current UNIX time in whole milliseconds."""
    return int(time.time() * 1000)


def format_wait_notice(expires_at_ms: int, tz: tzinfo | None = None) -> str:
    """Build the "Wait period ends at ..." text for an expiration instant.

    Args:
        expires_at_ms: Expiration as epoch milliseconds.
        tz: Display timezone; the local timezone when None.

    Returns:
        e.g. ``"Wait period ends at 14:30:00 UTC on Mon Oct 19 2026."``
    """
    try:
        when = datetime.fromtimestamp(expires_at_ms / 1000, tz=tz)
        if tz is None:
            when = when.astimezone()
    except (OverflowError, OSError, ValueError):
        logger.warning("clock.unrepresentable_timestamp", extra={"expires_at_ms": expires_at_ms})
        return UNKNOWN_WAIT_NOTICE
    return f"Wait period ends at {when:%H:%M:%S %Z} on {when:%a %b %d %Y}."
