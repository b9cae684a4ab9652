"""Tests for session wiring and the console entry point."""

import threading
from io import StringIO
from pathlib import Path
from unittest.mock import Mock

import pytest

from tests.conftest import RecordingSink, START_MS
from url_throttle.adapters.storage.json_file import JsonFileKeyValueStore
from url_throttle.adapters.transport.mock import MockRequestTransport
from url_throttle.core.app_factory import build_info_text, create_session
from url_throttle.core.config import Settings, ThrottleSettings, TransportSettings
from url_throttle.core.errors import ValidationAppError
from url_throttle.main import GATE_CLOSED_MESSAGE, run_console
from url_throttle.services.expiration_store import THROTTLE_EXPIRATION_KEY
from url_throttle.services.throttle_controller import ThrottleState


def _settings(tmp_path: Path, **throttle: object) -> Settings:
    throttle_kwargs = {
        "storage_backend": "file",
        "storage_path": str(tmp_path / "storage.json"),
        "request_limit": 2,
        "period_seconds": 60,
        "poll_interval_seconds": 30,
    }
    throttle_kwargs.update(throttle)
    return Settings(
        throttle=ThrottleSettings(**throttle_kwargs),
        transport=TransportSettings(mode="mock"),
    )


class TestBuildInfoText:
    @pytest.mark.parametrize(
        ("limit", "period", "expected"),
        [
            (10, 1800, "The number of searches is limited to 10 every 30 minutes."),
            (5, 60, "The number of searches is limited to 5 every 1 minute."),
            (3, 45, "The number of searches is limited to 3 every 45 seconds."),
        ],
    )
    def test_describes_quota(self, limit: int, period: int, expected: str) -> None:
        cfg = ThrottleSettings(request_limit=limit, period_seconds=period)
        assert build_info_text(cfg) == expected


class TestCreateSession:
    @pytest.mark.asyncio
    async def test_wires_configured_collaborators(self, tmp_path: Path) -> None:
        session = create_session(_settings(tmp_path), sink=RecordingSink())

        assert isinstance(session.transport, MockRequestTransport)
        assert session.controller.request_limit == 2
        assert session.controller.state is ThrottleState.ADMITTING
        assert session.info_text.endswith("every 1 minute.")
        await session.aclose()

    @pytest.mark.asyncio
    async def test_recovers_throttle_from_file_storage(self, tmp_path: Path) -> None:
        path = tmp_path / "storage.json"
        JsonFileKeyValueStore(path).set(THROTTLE_EXPIRATION_KEY, str(START_MS + 60_000))
        clock = Mock(return_value=START_MS)

        session = create_session(_settings(tmp_path), sink=RecordingSink(), clock=clock)

        assert session.controller.state is ThrottleState.THROTTLED
        assert session.gate.enabled is False

        clock.return_value = START_MS + 60_000
        session.controller.check_expiration()
        assert session.gate.enabled is True
        assert JsonFileKeyValueStore(path).get(THROTTLE_EXPIRATION_KEY) is None

    @pytest.mark.asyncio
    async def test_unknown_timezone_is_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValidationAppError) as exc_info:
            create_session(_settings(tmp_path, display_timezone="Mars/Olympus_Mons"))

        assert exc_info.value.code == "config_invalid_timezone"


class TestRunConsole:
    @pytest.mark.asyncio
    async def test_processes_lines_until_eof(self, tmp_path: Path) -> None:
        stdin = StringIO(
            "https://example.com/a\n"
            "not a url\n"
            "\n"
            "https://example.com/b\n"
            "https://example.com/c\n"
            "https://example.com/d\n"
        )
        stdout = StringIO()

        await run_console(_settings(tmp_path), stdin=stdin, stdout=stdout)

        lines = stdout.getvalue().splitlines()
        assert lines[0] == "The number of searches is limited to 2 every 1 minute."
        assert "Exists: true,  File: true,  Folder: false,  URL: https://example.com/a" in lines
        assert "Error: URL is invalid." in lines
        assert "You've reached the maximum number of searches allowed." in lines
        assert any(line.startswith("API Error: Wait period ends at") for line in lines)
        assert lines[-1] == GATE_CLOSED_MESSAGE
        assert JsonFileKeyValueStore(tmp_path / "storage.json").get(THROTTLE_EXPIRATION_KEY)

    @pytest.mark.asyncio
    async def test_unreadable_stdin_ends_session(self, tmp_path: Path) -> None:
        stdin = Mock()
        stdin.readline.side_effect = OSError("stdin closed")
        stdout = StringIO()

        await run_console(_settings(tmp_path), stdin=stdin, stdout=stdout)

        assert stdout.getvalue().splitlines() == [
            "The number of searches is limited to 2 every 1 minute."
        ]

    @pytest.mark.asyncio
    async def test_stdin_is_read_on_daemon_thread(self, tmp_path: Path) -> None:
        readers: list[threading.Thread] = []

        def _readline() -> str:
            readers.append(threading.current_thread())
            return ""

        stdin = Mock()
        stdin.readline.side_effect = _readline

        await run_console(_settings(tmp_path), stdin=stdin, stdout=StringIO())

        assert readers and readers[0].daemon
        assert readers[0] is not threading.main_thread()
