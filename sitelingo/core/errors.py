"""
Error taxonomy for the transformation pipeline.

ValidationError is always surfaced to the caller. ProviderError is
recovered locally by falling back to the mock provider. Partial batch
failures are normally reported as data, not raised.
"""

from __future__ import annotations

from typing import Any


class TransformError(Exception):
    """Base class for all pipeline errors."""
    pass


class ValidationError(TransformError):
    """Bad operation name, empty text, or unsupported language."""
    pass


class NotFoundError(TransformError):
    """A content entity referenced by the caller does not exist."""
    pass


class ProviderError(TransformError):
    """Network, HTTP, or parse failure talking to the remote provider."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    def __str__(self) -> str:
        message = super().__str__()
        if self.status_code is not None:
            return f"{message} (status {self.status_code})"
        return message


class PartialBatchError(TransformError):
    """One or more fields failed inside a fan-out batch."""

    def __init__(self, language: str, failures: list[Any]) -> None:
        keys = ", ".join(f.key for f in failures)
        super().__init__(f"Translation to '{language}' incomplete, failed fields: {keys}")
        self.language = language
        self.failures = failures
