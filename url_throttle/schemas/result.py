"""Pydantic schemas for URL validation results."""

from pydantic import BaseModel, Field


class ValidationResult(BaseModel):
    """Outcome of a URL check as rendered to the user.

    The backend answers with this shape on success. Transport failures and
    throttled submissions are mapped onto the same shape with a non-empty
    ``error`` so the sink only has one thing to render.
    """

    url: str = Field(..., description="The URL that was submitted.")
    exists: bool = Field(False, description="Whether the URL resolves to something.")
    file: bool = Field(False, description="Whether the URL points at a file.")
    folder: bool = Field(False, description="Whether the URL points at a folder.")
    error: str = Field("", description="Error message; empty on success.")

    @property
    def ok(self) -> bool:
        return not self.error


def error_result(url: str, message: str) -> ValidationResult:
    """Build an error-shaped result for ``url``."""
    return ValidationResult(url=url, error=message)
