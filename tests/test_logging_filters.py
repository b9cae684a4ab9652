"""Tests for sensitive data filtering and submission correlation in logs."""

from __future__ import annotations

import json
import logging
from io import StringIO

from url_throttle.core.logging import (
    JsonFormatter,
    SensitiveDataFilter,
    SubmissionIdFilter,
    clear_submission_id,
    set_submission_id,
)


def _logger_with_stream(name: str) -> tuple[logging.Logger, StringIO]:
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    logger.propagate = False

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(SubmissionIdFilter())
    handler.addFilter(SensitiveDataFilter())
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger, stream


def test_sensitive_filter_redacts_user_urls():
    """User-entered URLs can carry tokens in the query string."""

    logger, stream = _logger_with_stream("test_url_redaction")

    logger.info(
        "throttle.admitted",
        extra={
            "url": "https://example.com/?token=sk-secret-123",
            "request_count": 3,
        },
    )

    output = json.loads(stream.getvalue())

    assert "sk-secret-123" not in stream.getvalue()
    assert output["url"] == "[REDACTED]"
    assert output["request_count"] == 3
    assert output["message"] == "throttle.admitted"
    assert output["level"] == "info"


def test_sensitive_filter_redacts_nested_values():
    logger, stream = _logger_with_stream("test_nested_redaction")

    logger.info("event", extra={"context": {"password": "hunter2", "safe": "visible"}})

    output = stream.getvalue()
    assert "hunter2" not in output
    assert "visible" in output


def test_submission_id_is_attached_from_context():
    logger, stream = _logger_with_stream("test_submission_id")

    set_submission_id("abc123")
    try:
        logger.info("throttle.rejected")
    finally:
        clear_submission_id()
    logger.info("after")

    first, second = (json.loads(line) for line in stream.getvalue().splitlines())
    assert first["submission_id"] == "abc123"
    assert "submission_id" not in second
