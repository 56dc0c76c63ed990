"""
Error Hierarchy

This module defines the exceptions raised while transferring bookmarks
between services. The request and decoding layers always raise; only the
importer turns per-item failures into logged outcomes.
"""

from typing import Optional


# ============================================================================
# Unified Exception Hierarchy for Rainbridge
# ============================================================================
# All custom exceptions for the project are defined here.
# Import these exceptions from rainbridge.utils.error_handler
# ============================================================================


class RainbridgeError(Exception):
    """Base exception for all rainbridge errors."""

    pass


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(RainbridgeError):
    """Configuration-related errors."""

    pass


# ============================================================================
# API Errors
# ============================================================================


class APIError(RainbridgeError):
    """Base class for errors raised by a single API call."""

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.operation = operation


class TransportError(APIError):
    """The request never produced a response (DNS, refused, timeout)."""

    pass


class RateLimitExhausted(APIError):
    """HTTP 429 persisted past the retry cap."""

    def __init__(
        self, retries: int, status_line: str, operation: Optional[str] = None
    ):
        super().__init__(
            f"rate limited after {retries} retries: {status_line}", operation
        )
        self.retries = retries
        self.status_line = status_line


class UnexpectedStatus(APIError):
    """A response arrived with a status the operation does not accept."""

    def __init__(self, operation: str, status_code: int, status_line: str):
        super().__init__(f"failed to {operation}: {status_line}", operation)
        self.status_code = status_code
        self.status_line = status_line


class DecodeError(APIError):
    """The response body could not be decoded into the expected shape."""

    def __init__(self, operation: str, detail: str):
        super().__init__(f"failed to decode {operation} response: {detail}", operation)
        self.detail = detail


# ============================================================================
# Transfer Errors
# ============================================================================


class PaginationLimitExceeded(RainbridgeError):
    """A paged endpoint kept returning items past the configured page cap."""

    def __init__(self, max_pages: int):
        super().__init__(f"pagination did not terminate within {max_pages} pages")
        self.max_pages = max_pages


class ImportAbortedError(RainbridgeError):
    """The import could not start because the source folders were unreadable."""

    pass
