"""Custom exception classes for expense categorization.

Each exception carries an error code that maps to the error catalog in
errors.py. Only InvalidRequestError is meant to abort a whole batch; the
others are recorded against a single expense.
"""

from typing import Any


class CategorizationError(Exception):
    """Base exception for all expense and categorization errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "API_001")
        details: Additional context about the error (for logging)
        http_status: HTTP status code to return (default: 500)
    """

    default_code = "SYS_001"
    default_status = 500

    def __init__(
        self,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        http_status: int | None = None,
    ):
        """Initialize the exception.

        Args:
            error_code: Error code from errors.py
            details: Additional error context (not shown to users)
            http_status: HTTP status code
        """
        self.error_code = error_code or self.default_code
        self.details = details or {}
        self.http_status = http_status or self.default_status
        super().__init__(self.error_code)


class InvalidRequestError(CategorizationError):
    """Raised for malformed input, e.g. an empty batch of expense ids."""

    default_code = "API_001"
    default_status = 400


class NotFoundError(CategorizationError):
    """Raised when an expense id does not resolve to a record."""

    default_code = "API_002"
    default_status = 404


class ProviderError(CategorizationError):
    """Raised when the semantic classification provider fails.

    Network errors, authentication failures, rate limits and timeouts all
    land here. The resolver catches it and falls back to keyword rules.
    """

    default_code = "LLM_001"
    default_status = 502


class NoCategoryAvailableError(CategorizationError):
    """Raised when no category exists to choose from."""

    default_code = "CAT_001"
    default_status = 422


class PersistenceError(CategorizationError):
    """Raised when writing an expense or category usage fails."""

    default_code = "DB_001"
    default_status = 500
