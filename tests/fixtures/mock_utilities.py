"""
Mock utilities and builders for rainbridge tests.

This module provides fake HTTP sessions, canned responses and a recording
sleeper so the request executor, clients and importer can be tested without
network access or real delays.
"""

import json
import threading
from typing import Any, Callable, Dict, List, Optional, Tuple
from urllib.parse import parse_qs, urlsplit

import requests


def make_response(
    status_code: int = 200,
    json_data: Any = None,
    body: Optional[bytes] = None,
    reason: Optional[str] = None,
    url: str = "https://api.example.test/",
) -> requests.Response:
    """Build a real ``requests.Response`` with an in-memory body."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason if reason is not None else _REASONS.get(status_code, "")
    response.url = url
    if body is None:
        body = b"" if json_data is None else json.dumps(json_data).encode("utf-8")
    response._content = body
    response._content_consumed = True
    response.headers["Content-Type"] = "application/json"
    return response


_REASONS = {
    200: "OK",
    201: "Created",
    204: "No Content",
    400: "Bad Request",
    401: "Unauthorized",
    404: "Not Found",
    429: "Too Many Requests",
    500: "Internal Server Error",
    503: "Service Unavailable",
}


class RecordingSleeper:
    """Sleeper that records requested delays instead of waiting."""

    def __init__(self):
        self._lock = threading.Lock()
        self.delays: List[float] = []

    def sleep(self, seconds: float) -> None:
        with self._lock:
            self.delays.append(seconds)

    @property
    def calls(self) -> int:
        return len(self.delays)


class ScriptedSession:
    """
    Stand-in for ``requests.Session`` returning queued outcomes in order.

    Each outcome is either a ``requests.Response`` or an exception instance,
    which is raised from ``send``.
    """

    def __init__(self, outcomes: List[Any]):
        self._outcomes = list(outcomes)
        self.sent: List[requests.PreparedRequest] = []
        self.closed = False

    def send(self, request: requests.PreparedRequest, **kwargs) -> requests.Response:
        self.sent.append(request)
        if not self._outcomes:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def close(self) -> None:
        self.closed = True


Handler = Callable[[str, str, Dict[str, List[str]], Any], requests.Response]


class RoutingSession:
    """
    Stand-in for ``requests.Session`` that answers like a tiny HTTP server.

    ``handler(method, path, query, json_body)`` builds each response.
    Every call is recorded as ``(method, path, query, json_body)``.
    """

    def __init__(self, handler: Handler):
        self._handler = handler
        self._lock = threading.Lock()
        self.calls: List[Tuple[str, str, Dict[str, List[str]], Any]] = []
        self.headers_seen: List[Dict[str, str]] = []

    def send(self, request: requests.PreparedRequest, **kwargs) -> requests.Response:
        parts = urlsplit(request.url)
        query = parse_qs(parts.query)
        body = json.loads(request.body) if request.body else None
        with self._lock:
            self.calls.append((request.method, parts.path, query, body))
            self.headers_seen.append(dict(request.headers))
        return self._handler(request.method, parts.path, query, body)

    def calls_to(self, method: str, path_prefix: str = "") -> List[Tuple]:
        with self._lock:
            return [
                c for c in self.calls if c[0] == method and c[1].startswith(path_prefix)
            ]

    def close(self) -> None:
        pass
