"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
It pins the environment before anything imports the settings module so no
.env file or real storage path leaks into the tests.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("THROTTLE_STORAGE_BACKEND", "memory")
os.environ.setdefault("TRANSPORT_MODE", "mock")

from datetime import timezone
from typing import Any
from unittest.mock import Mock

import pytest

from url_throttle.adapters.sink.base import AbstractResultSink
from url_throttle.adapters.storage.in_memory import InMemoryKeyValueStore
from url_throttle.adapters.timer.base import AbstractPeriodicTimer, TimerCallback
from url_throttle.adapters.transport.mock import MockRequestTransport
from url_throttle.schemas.result import ValidationResult
from url_throttle.services.expiration_store import ThrottleExpirationStore
from url_throttle.services.input_gate import InputGate
from url_throttle.services.throttle_controller import ThrottleController

START_MS = 1_700_000_000_000
MINUTE_MS = 60_000


class FakeTimer(AbstractPeriodicTimer):
    """Timer that only fires when the test calls :meth:`tick`."""

    def __init__(self) -> None:
        self.callback: TimerCallback | None = None
        self.starts = 0
        self.cancels = 0

    @property
    def active(self) -> bool:
        return self.callback is not None

    def start(self, callback: TimerCallback) -> None:
        if self.active:
            return
        self.starts += 1
        self.callback = callback

    def cancel(self) -> None:
        if not self.active:
            return
        self.cancels += 1
        self.callback = None

    def tick(self) -> None:
        assert self.callback is not None, "timer is not armed"
        self.callback()


class RecordingSink(AbstractResultSink):
    """Sink that keeps everything it was asked to show."""

    def __init__(self) -> None:
        self.rendered: list[ValidationResult] = []
        self.messages: list[str] = []
        self.clears = 0

    @property
    def status(self) -> str:
        return self.messages[-1] if self.messages else ""

    def render(self, result: ValidationResult) -> None:
        self.rendered.append(result)

    def notify(self, message: str) -> None:
        self.messages.append(message)

    def clear(self) -> None:
        self.clears += 1
        self.messages.append("")


@pytest.fixture
def clock() -> Mock:
    return Mock(return_value=START_MS)


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def expiration_store(kv_store: InMemoryKeyValueStore) -> ThrottleExpirationStore:
    return ThrottleExpirationStore(kv_store)


@pytest.fixture
def timer() -> FakeTimer:
    return FakeTimer()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def gate() -> InputGate:
    return InputGate()


@pytest.fixture
def transport() -> MockRequestTransport:
    return MockRequestTransport()


@pytest.fixture
def make_controller(
    clock: Mock,
    expiration_store: ThrottleExpirationStore,
    gate: InputGate,
    sink: RecordingSink,
    transport: MockRequestTransport,
    timer: FakeTimer,
):
    """Build a controller over the shared fakes; later calls simulate a restart."""

    def _make(**overrides: Any) -> ThrottleController:
        kwargs: dict[str, Any] = {
            "request_limit": 10,
            "period_seconds": 30 * 60,
            "expiration_store": expiration_store,
            "gate": gate,
            "sink": sink,
            "transport": transport,
            "timer": timer,
            "clock": clock,
            "display_tz": timezone.utc,
        }
        kwargs.update(overrides)
        return ThrottleController(**kwargs)

    return _make
