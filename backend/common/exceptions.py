"""Custom exceptions for Jackpot Predictor.

All modules should raise these exceptions instead of generic ones.
The FastAPI exception handlers in main.py catch JackpotBaseException
and return structured JSON error responses.
"""

from __future__ import annotations


class JackpotBaseException(Exception):
    """Base exception for all Jackpot Predictor errors.

    Args:
        message: Human-readable error description.
        context: Optional dict of structured data for logging/debugging.
    """

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message)
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            safe_context = {
                k: "[REDACTED]" if _is_secret_key(k) else v for k, v in self.context.items()
            }
            return f"{super().__str__()} | context={safe_context}"
        return super().__str__()


class ValidationError(JackpotBaseException):
    """Caller input is invalid (wrong fixture count, blank fields, etc.)."""


class NotFoundError(JackpotBaseException):
    """A requested record does not exist."""


class JackpotNotFoundError(NotFoundError):
    """No jackpot exists with the requested ID."""


class ParseError(JackpotBaseException):
    """Fixture text or CSV input could not be parsed."""


class ExportError(JackpotBaseException):
    """There is nothing to export, or the export could not be built."""


def _is_secret_key(key: str) -> bool:
    """Check if a dict key name suggests it contains secret data."""
    secret_words = {"key", "secret", "password", "token", "credential"}
    key_lower = key.lower()
    return any(word in key_lower for word in secret_words)
