from abc import ABC, abstractmethod

from url_throttle.schemas.result import ValidationResult


class AbstractRequestTransport(ABC):
	"""Interface for transports that ask the backend about a URL."""

	@abstractmethod
	async def submit(self, url: str) -> ValidationResult:
		"""Send ``url`` to the backend and return its verdict.

		Args:
			url: A URL that already passed syntax validation.

		Returns:
			ValidationResult: The backend's answer, or an error-shaped result
			when the request failed. Transport failures are never raised.
		"""
		...

	async def aclose(self) -> None:
		"""Release any underlying connections."""
		return None
