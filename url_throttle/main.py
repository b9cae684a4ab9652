"""Console front end: one URL per line, results printed as they arrive."""

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from typing import TextIO

from url_throttle.adapters.sink.console import ConsoleResultSink
from url_throttle.core.app_factory import create_session
from url_throttle.core.config import Settings, settings
from url_throttle.core.errors import AppError
from url_throttle.core.logging import configure_logging

logger = logging.getLogger(__name__)

GATE_CLOSED_MESSAGE = "Input is disabled until the wait period ends."


def _start_line_reader(stdin: TextIO) -> asyncio.Queue[str | None]:
    """Feed lines from ``stdin`` into a queue from a daemon thread.

    ``None`` is queued at EOF. A daemon thread blocked in ``readline`` does
    not keep the interpreter alive, so Ctrl-C exits without waiting for input.
    """
    loop = asyncio.get_running_loop()
    lines: asyncio.Queue[str | None] = asyncio.Queue()

    def _pump() -> None:
        try:
            try:
                for line in iter(stdin.readline, ""):
                    loop.call_soon_threadsafe(lines.put_nowait, line)
            except (OSError, ValueError):
                logger.exception("console.stdin_failed")
            loop.call_soon_threadsafe(lines.put_nowait, None)
        except RuntimeError:
            # The event loop closed while this thread was still reading.
            return

    threading.Thread(target=_pump, name="stdin-reader", daemon=True).start()
    return lines


async def run_console(
    cfg: Settings | None = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> None:
    """Read URLs from ``stdin`` until EOF and submit each through the throttle.

    Lines are read on a daemon thread so the re-check timer keeps ticking
    while the prompt waits.
    """
    stdin = stdin or sys.stdin
    out = stdout or sys.stdout
    session = create_session(cfg, sink=ConsoleResultSink(out))

    out.write(session.info_text + "\n")
    out.flush()
    lines = _start_line_reader(stdin)
    try:
        while True:
            line = await lines.get()
            if line is None:
                break
            if not line.strip():
                continue
            if not session.gate.enabled:
                out.write(GATE_CLOSED_MESSAGE + "\n")
                out.flush()
                continue
            await session.service.handle_input(line)
    finally:
        await session.aclose()


def main() -> int:
    configure_logging(settings.log)
    try:
        asyncio.run(run_console(settings))
    except AppError as exc:
        logger.error("startup_failed", extra={"error_code": exc.code, "error_message": exc.message})
        print(exc.message, file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        return 130
    return 0
