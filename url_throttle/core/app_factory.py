"""Session factory.

Centralizes wiring (storage, transport, timer, sink, gate, controller) so the
console entry point and tests build sessions the same way.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from url_throttle.adapters.sink.base import AbstractResultSink
from url_throttle.adapters.sink.console import ConsoleResultSink
from url_throttle.adapters.storage.factory import create_key_value_store
from url_throttle.adapters.timer.asyncio_timer import AsyncioPeriodicTimer
from url_throttle.adapters.transport.base import AbstractRequestTransport
from url_throttle.adapters.transport.factory import create_transport
from url_throttle.core.config import Settings, ThrottleSettings, settings as default_settings
from url_throttle.core.errors import ValidationAppError
from url_throttle.services.expiration_store import ThrottleExpirationStore
from url_throttle.services.input_gate import InputGate
from url_throttle.services.throttle_controller import ThrottleController
from url_throttle.services.url_check_service import UrlCheckService
from url_throttle.utils.clock import Clock, epoch_millis

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """Everything a front end needs to drive one input field."""

    controller: ThrottleController
    service: UrlCheckService
    gate: InputGate
    sink: AbstractResultSink
    transport: AbstractRequestTransport
    info_text: str

    async def aclose(self) -> None:
        self.controller.shutdown()
        await self.transport.aclose()


def build_info_text(throttle_settings: ThrottleSettings) -> str:
    """Describe the quota to the user, e.g. "... limited to 10 every 30 minutes."."""
    period = throttle_settings.period_seconds
    if period % 60 == 0:
        minutes = period // 60
        span = f"{minutes} minute" if minutes == 1 else f"{minutes} minutes"
    else:
        span = f"{period} seconds"
    return f"The number of searches is limited to {throttle_settings.request_limit} every {span}."


def _resolve_timezone(name: str | None) -> tzinfo | None:
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValidationAppError(
            code="config_invalid_timezone",
            message=f"Unknown display timezone: '{name}'",
        ) from exc


def create_session(
    cfg: Settings | None = None,
    *,
    sink: AbstractResultSink | None = None,
    transport: AbstractRequestTransport | None = None,
    clock: Clock = epoch_millis,
) -> Session:
    """Build a fully wired session from settings.

    Must be called with an event loop running: a throttle recovered from
    storage arms the asyncio timer immediately.

    Args:
        cfg: Settings to use; the global settings when omitted.
        sink: Result sink; a stdout console sink when omitted.
        transport: Request transport; built from ``cfg.transport`` when omitted.
        clock: Epoch-millisecond clock.

    Returns:
        Session: Wired controller, input service and collaborators.

    Raises:
        ValidationAppError: If the configuration cannot be satisfied.
    """
    cfg = cfg or default_settings
    throttle_cfg = cfg.throttle

    sink = sink or ConsoleResultSink()
    transport = transport or create_transport(cfg.transport)
    gate = InputGate()

    controller = ThrottleController(
        request_limit=throttle_cfg.request_limit,
        period_seconds=throttle_cfg.period_seconds,
        expiration_store=ThrottleExpirationStore(create_key_value_store(throttle_cfg)),
        gate=gate,
        sink=sink,
        transport=transport,
        timer=AsyncioPeriodicTimer(throttle_cfg.poll_interval_seconds),
        clock=clock,
        display_tz=_resolve_timezone(throttle_cfg.display_timezone),
    )
    service = UrlCheckService(
        controller,
        gate,
        sink,
        max_url_length=cfg.input.max_url_length,
    )

    logger.info(
        "session.created",
        extra={
            "limit": throttle_cfg.request_limit,
            "window_s": throttle_cfg.period_seconds,
            "poll_s": throttle_cfg.poll_interval_seconds,
            "storage_backend": throttle_cfg.storage_backend,
            "transport_mode": cfg.transport.mode,
            "initial_state": controller.state.value,
        },
    )
    return Session(
        controller=controller,
        service=service,
        gate=gate,
        sink=sink,
        transport=transport,
        info_text=build_info_text(throttle_cfg),
    )
