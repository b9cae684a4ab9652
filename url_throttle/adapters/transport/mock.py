"""Offline transport returning a canned answer."""

from url_throttle.adapters.transport.base import AbstractRequestTransport
from url_throttle.schemas.result import ValidationResult


class MockRequestTransport(AbstractRequestTransport):
    """Answers every URL as an existing file without touching the network.

    Handy while the backend endpoint is not reachable.
    """

    def __init__(self) -> None:
        self.submitted: list[str] = []

    async def submit(self, url: str) -> ValidationResult:
        self.submitted.append(url)
        return ValidationResult(url=url, exists=True, file=True, folder=False, error="")
