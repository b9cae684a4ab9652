"""HTTP request transport adapter."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from url_throttle.adapters.transport.base import AbstractRequestTransport
from url_throttle.core.errors import TransportAppError
from url_throttle.schemas.result import ValidationResult, error_result

logger = logging.getLogger(__name__)


class HttpRequestTransport(AbstractRequestTransport):
    """POSTs ``{"url": ...}`` as JSON to the check endpoint.

    Uses ``httpx.AsyncClient``. Every failure (network error, non-2xx status,
    unusable body) is turned into an error-shaped ``ValidationResult`` so the
    caller can render it verbatim.
    """

    def __init__(
        self,
        api_url: str,
        timeout_seconds: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            api_url: Endpoint receiving validation requests.
            timeout_seconds: Timeout for requests in seconds.
            client: Optional preconfigured client (tests inject one backed by
                ``httpx.MockTransport``).
        """
        self.api_url = api_url
        self.client = client or httpx.AsyncClient(timeout=timeout_seconds)

    async def submit(self, url: str) -> ValidationResult:
        try:
            payload = await self._post(url)
            result = self._decode(payload)
        except TransportAppError as exc:
            logger.warning(
                "transport.request_failed",
                extra={"error_code": exc.code, "error_message": exc.message},
            )
            return error_result(url, exc.message)

        logger.info(
            "transport.response",
            extra={"exists": result.exists, "has_error": bool(result.error)},
        )
        return result

    async def _post(self, url: str) -> Any:
        """Send the request and return the parsed JSON body.

        Raises:
            TransportAppError: On network errors, timeouts, non-2xx answers or
                a body that is not JSON.
        """
        try:
            response = await self.client.post(self.api_url, json={"url": url})
        except httpx.TimeoutException as exc:
            raise TransportAppError(
                code="transport_timeout",
                message=f"Timeout: {exc.__class__.__name__}",
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportAppError(
                code="transport_network_error",
                message=f"Error: {exc}",
            ) from exc

        if not response.is_success:
            raise TransportAppError(
                code="transport_http_error",
                message=f"HTTP Error: {response.status_code} {response.reason_phrase}".rstrip(),
                details={"http_status": response.status_code},
            )

        try:
            return response.json()
        except ValueError as exc:
            raise TransportAppError(
                code="transport_invalid_body",
                message="Error: response body is not valid JSON",
            ) from exc

    @staticmethod
    def _decode(payload: Any) -> ValidationResult:
        if not isinstance(payload, dict):
            raise TransportAppError(
                code="transport_invalid_body",
                message="Error: response body is not a JSON object",
            )
        try:
            return ValidationResult.model_validate(payload)
        except ValidationError as exc:
            raise TransportAppError(
                code="transport_invalid_body",
                message="Error: response body has an unexpected shape",
                details={"context": {"errors": exc.error_count()}},
            ) from exc

    async def aclose(self) -> None:
        await self.client.aclose()
