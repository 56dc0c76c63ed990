"""
Base API Client

Shared plumbing for the source and destination clients: bearer
authentication, request building, status checking and response decoding.
Every call goes through a ``RequestExecutor`` so HTTP 429 is retried in one
place.
"""

import logging
from typing import Any, Collection, Dict, Optional, Type, TypeVar

import requests
from pydantic import TypeAdapter, ValidationError

from rainbridge.core.request_executor import RequestExecutor, format_status
from rainbridge.utils.error_handler import DecodeError, UnexpectedStatus
from rainbridge.utils.retry_handler import ExponentialBackoff, Sleeper

T = TypeVar("T")


class BaseAPIClient:
    """
    Base class for bearer-token JSON API clients.

    Args:
        token: Bearer token sent on every request
        base_url: API root, without a trailing slash
        executor: Request executor; built from the remaining arguments
            when omitted
        session: ``requests.Session`` for a default executor
        sleeper: Sleeper for a default executor
        timeout: Per-request timeout for a default executor
        max_retries: 429 retry cap for a default executor
        base_delay: First backoff delay for a default executor
    """

    DEFAULT_BASE_URL = ""

    def __init__(
        self,
        token: str,
        base_url: Optional[str] = None,
        executor: Optional[RequestExecutor] = None,
        session: Optional[requests.Session] = None,
        sleeper: Optional[Sleeper] = None,
        timeout: Optional[float] = 30.0,
        max_retries: int = 5,
        base_delay: float = 1.0,
    ):
        self.token = token
        self.base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")

        if executor is None:
            executor = RequestExecutor(
                session=session,
                sleeper=sleeper,
                max_retries=max_retries,
                backoff=ExponentialBackoff(base_delay),
                timeout=timeout,
                secrets=[token],
            )
        self.executor = executor

        self.logger = logging.getLogger(self.__class__.__name__)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.executor.session.close()

    def set_base_url(self, base_url: str) -> None:
        self.base_url = base_url.rstrip("/")

    def _get_auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}

    def _build_request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> requests.Request:
        headers = {"Accept": "application/json"}
        headers.update(self._get_auth_headers())
        if json is not None:
            headers["Content-Type"] = "application/json"

        return requests.Request(
            method=method,
            url=f"{self.base_url}/{path.lstrip('/')}",
            headers=headers,
            params=params,
            json=json,
        )

    def _request(
        self,
        method: str,
        path: str,
        operation: str,
        expected_status: Collection[int] = (200,),
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> requests.Response:
        """
        Send a request and check its status.

        Args:
            method: HTTP method
            path: Path relative to ``base_url``
            operation: Name used in error messages ("create bookmark")
            expected_status: Statuses that count as success
            params: Query parameters
            json: JSON body

        Returns:
            The successful response; the body has not been read

        Raises:
            TransportError: From the executor
            RateLimitExhausted: From the executor
            UnexpectedStatus: The response status is not expected
        """
        request = self._build_request(method, path, params=params, json=json)
        response = self.executor.execute(request, operation=operation)

        if response.status_code not in expected_status:
            status_line = format_status(response)
            response.close()
            raise UnexpectedStatus(operation, response.status_code, status_line)

        return response

    def _decode(self, response: requests.Response, operation: str, shape: Type[T]) -> T:
        """
        Decode a JSON response body into ``shape``.

        Raises:
            DecodeError: The body is not JSON or does not match ``shape``
        """
        try:
            payload = response.json()
        except ValueError as e:
            raise DecodeError(operation, f"invalid JSON: {e}") from e
        finally:
            response.close()

        try:
            return TypeAdapter(shape).validate_python(payload)
        except ValidationError as e:
            raise DecodeError(operation, str(e)) from e

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_url={self.base_url!r})"
