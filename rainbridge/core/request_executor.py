"""
Resilient Request Executor

Sends a single prepared HTTP request and retries it while the remote service
answers with HTTP 429 (Too Many Requests). Every other outcome is handed back
to the caller untouched: transport failures raise immediately and non-429
statuses are returned for the caller to judge.
"""

import logging
from http import HTTPStatus
from typing import Iterable, Optional, Union

import requests

from rainbridge.utils.error_handler import RateLimitExhausted, TransportError
from rainbridge.utils.retry_handler import ExponentialBackoff, RealSleeper, Sleeper
from rainbridge.utils.secure_logging import mask_tokens

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 5
DEFAULT_TIMEOUT = 30.0


def format_status(response: requests.Response) -> str:
    """Return a status line such as ``"404 Not Found"``."""
    reason = response.reason
    if not reason:
        try:
            reason = HTTPStatus(response.status_code).phrase
        except ValueError:
            reason = ""
    return f"{response.status_code} {reason}".strip()


class RequestExecutor:
    """
    Rate-limit aware HTTP request executor.

    The executor keeps no per-call state: the attempt counter and delays live
    inside ``execute``. It may be shared between worker threads provided the
    injected sleeper is thread-safe (``RealSleeper`` is).

    Args:
        session: ``requests.Session`` used to send requests
        sleeper: Object with a ``sleep(seconds)`` method used between retries
        max_retries: Retries after the first 429 before giving up
        backoff: Strategy with ``get_delay(attempt)``
        timeout: Per-request transport timeout in seconds
        secrets: Tokens to mask in error messages
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        sleeper: Optional[Sleeper] = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        backoff: Optional[ExponentialBackoff] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        secrets: Iterable[Optional[str]] = (),
    ):
        if max_retries < 0:
            raise ValueError("max_retries must be non-negative")

        self.session = session if session is not None else requests.Session()
        self.sleeper = sleeper if sleeper is not None else RealSleeper()
        self.max_retries = max_retries
        self.backoff = backoff if backoff is not None else ExponentialBackoff()
        self.timeout = timeout
        self._secrets = [s for s in secrets if s]

    def execute(
        self,
        request: Union[requests.Request, requests.PreparedRequest],
        operation: Optional[str] = None,
    ) -> requests.Response:
        """
        Send ``request``, retrying on HTTP 429 with exponential backoff.

        The caller must have set the ``Authorization`` header already.

        Args:
            request: Request to send; resent unchanged on every retry
            operation: Human-readable operation name for error messages

        Returns:
            The first non-429 response

        Raises:
            TransportError: The request could not be sent or timed out
            RateLimitExhausted: Every attempt was answered with 429
        """
        if isinstance(request, requests.Request):
            prepared = request.prepare()
        else:
            prepared = request

        for attempt in range(self.max_retries + 1):
            try:
                response = self.session.send(prepared, timeout=self.timeout)
            except requests.RequestException as e:
                message = mask_tokens(
                    f"{prepared.method} {prepared.url} failed: {e}", self._secrets
                )
                raise TransportError(message, operation) from e

            if response.status_code != HTTPStatus.TOO_MANY_REQUESTS:
                return response

            status_line = format_status(response)
            response.close()

            if attempt == self.max_retries:
                raise RateLimitExhausted(self.max_retries, status_line, operation)

            delay = self.backoff.get_delay(attempt)
            logger.warning(
                f"Rate limited (429), retrying in {delay:.2f}s "
                f"(attempt {attempt + 1}/{self.max_retries})"
            )
            self.sleeper.sleep(delay)

        # range() always ends in a return or raise above
        raise AssertionError("unreachable")
