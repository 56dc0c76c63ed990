"""
Utility modules for Rainbridge.

This package contains the exception hierarchy, retry/backoff helpers and
logging setup.
"""

from .error_handler import (
    APIError,
    ConfigurationError,
    DecodeError,
    ImportAbortedError,
    PaginationLimitExceeded,
    RainbridgeError,
    RateLimitExhausted,
    TransportError,
    UnexpectedStatus,
)
from .retry_handler import ExponentialBackoff, RealSleeper, Sleeper, backoff_delay

__all__ = [
    "APIError",
    "ConfigurationError",
    "DecodeError",
    "ExponentialBackoff",
    "ImportAbortedError",
    "PaginationLimitExceeded",
    "RainbridgeError",
    "RateLimitExhausted",
    "RealSleeper",
    "Sleeper",
    "TransportError",
    "UnexpectedStatus",
    "backoff_delay",
]
