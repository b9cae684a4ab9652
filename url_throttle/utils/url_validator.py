"""URL syntax validation applied before a submission reaches the throttle.

The pattern follows the OWASP validation regex repository URL entry. It only
checks syntax; whether the URL exists is the backend's question.
"""

from __future__ import annotations

import logging
import re

from url_throttle.core.errors import ValidationAppError

logger = logging.getLogger(__name__)

MAX_URL_LENGTH = 2000

URL_PATTERN = re.compile(
    r"((((https?|ftps?|gopher|telnet|nntp)://)|(mailto:|news:))"
    r"(%[0-9A-Fa-f]{2}|[-()_.!~*';/?:@&=+$,A-Za-z0-9])+)"
    r"([).!';/?:,][ \t])?"
)


def validate_url(url: str, max_length: int = MAX_URL_LENGTH) -> str:
    """Check that ``url`` is syntactically acceptable.

    Args:
        url: Raw user input.
        max_length: Maximum accepted length in characters.

    Returns:
        The URL unchanged.

    Raises:
        ValidationAppError: ``url_invalid`` if the pattern does not match,
            ``url_too_long`` if the URL exceeds ``max_length``.
    """
    if not URL_PATTERN.fullmatch(url):
        logger.debug("url_validation.invalid", extra={"length": len(url)})
        raise ValidationAppError(
            code="url_invalid",
            message="Error: URL is invalid.",
        )

    if len(url) > max_length:
        logger.debug("url_validation.too_long", extra={"length": len(url)})
        raise ValidationAppError(
            code="url_too_long",
            message="Error: URL is too long.",
            details={"max_value": max_length, "actual_value": len(url)},
        )

    return url
