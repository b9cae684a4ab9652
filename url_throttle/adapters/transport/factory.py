"""Factory pattern for creating request transport instances."""

from url_throttle.adapters.transport.base import AbstractRequestTransport
from url_throttle.adapters.transport.http_client import HttpRequestTransport
from url_throttle.adapters.transport.mock import MockRequestTransport
from url_throttle.core.config import TransportSettings
from url_throttle.core.errors import ValidationAppError


def create_transport(transport_settings: TransportSettings) -> AbstractRequestTransport:
    """Instantiate the transport named by ``mode``.

    Args:
        transport_settings: Transport configuration.

    Returns:
        AbstractRequestTransport: Configured transport instance.

    Raises:
        ValidationAppError: If the mode is unknown or its requirements are not met.
    """
    mode = transport_settings.mode.lower()

    if mode == "http":
        if not transport_settings.api_url:
            raise ValidationAppError(
                code="transport_missing_api_url",
                message="HTTP transport requires TRANSPORT_API_URL",
            )
        return HttpRequestTransport(
            api_url=transport_settings.api_url,
            timeout_seconds=transport_settings.timeout_seconds,
        )

    if mode == "mock":
        return MockRequestTransport()

    raise ValidationAppError(
        code="transport_unknown_mode",
        message=f"Unknown transport mode: '{mode}'. Supported modes: http, mock",
    )
