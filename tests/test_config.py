"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from url_throttle.core.config import LogSettings, ThrottleSettings, TransportSettings


def test_throttle_defaults_match_documented_quota(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("THROTTLE_STORAGE_BACKEND", raising=False)

    cfg = ThrottleSettings()

    assert cfg.request_limit == 10
    assert cfg.period_seconds == 30 * 60
    assert cfg.poll_interval_seconds == 60.0
    assert cfg.storage_backend == "file"


def test_throttle_settings_read_prefixed_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("THROTTLE_REQUEST_LIMIT", "3")
    monkeypatch.setenv("THROTTLE_PERIOD_SECONDS", "120")
    monkeypatch.setenv("THROTTLE_DISPLAY_TIMEZONE", "Europe/Berlin")

    cfg = ThrottleSettings()

    assert cfg.request_limit == 3
    assert cfg.period_seconds == 120
    assert cfg.display_timezone == "Europe/Berlin"


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("THROTTLE_REQUEST_LIMIT", "0"),
        ("THROTTLE_PERIOD_SECONDS", "0"),
        ("THROTTLE_POLL_INTERVAL_SECONDS", "0"),
        ("THROTTLE_STORAGE_BACKEND", "redis"),
    ],
)
def test_out_of_range_values_fail_at_startup(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        ThrottleSettings()


def test_transport_and_log_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRANSPORT_MODE", "http")
    monkeypatch.setenv("TRANSPORT_API_URL", "https://api.example.com/check")
    monkeypatch.setenv("LOG_FORMAT", "plain")

    assert TransportSettings().api_url == "https://api.example.com/check"
    assert LogSettings().format == "plain"
