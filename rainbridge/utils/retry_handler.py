"""
Retry Handler Module

Exponential backoff used when an API answers with HTTP 429, and the sleep
capability the request executor waits through. Sleeping is injected so
tests can record and skip delays.
"""

import random
import time
from typing import Callable, Protocol, runtime_checkable

DEFAULT_BASE_DELAY = 1.0
JITTER_FRACTION = 0.1


def backoff_delay(
    attempt: int,
    base_delay: float = DEFAULT_BASE_DELAY,
    rand: Callable[[], float] = random.random,
) -> float:
    """
    Calculate the delay before retry number ``attempt`` (0 = first retry).

    The delay is ``base_delay * 2**attempt`` plus a jitter drawn uniformly
    from ``[0, 10%]`` of that value.

    Args:
        attempt: Non-negative retry index
        base_delay: Delay for the first retry in seconds
        rand: Source of uniform floats in [0, 1)

    Returns:
        Delay in seconds
    """
    if attempt < 0:
        raise ValueError(f"attempt must be non-negative, got {attempt}")

    delay = base_delay * (2**attempt)
    return delay + rand() * delay * JITTER_FRACTION


class ExponentialBackoff:
    """Exponential backoff strategy with proportional jitter."""

    def __init__(
        self,
        base_delay: float = DEFAULT_BASE_DELAY,
        rand: Callable[[], float] = random.random,
    ):
        self.base_delay = base_delay
        self._rand = rand

    def get_delay(self, attempt: int) -> float:
        """Calculate delay for given attempt."""
        return backoff_delay(attempt, self.base_delay, self._rand)


@runtime_checkable
class Sleeper(Protocol):
    """Blocks the calling thread for a number of seconds."""

    def sleep(self, seconds: float) -> None:
        ...


class RealSleeper:
    """Sleeper backed by ``time.sleep``; safe to share between threads."""

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)

    def __repr__(self) -> str:
        return "RealSleeper()"
