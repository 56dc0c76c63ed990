"""
Secure Logging Module

Keeps API tokens out of log records and error messages.
"""

import logging
import re
from typing import Iterable, List, Optional

BEARER_PATTERN = re.compile(r"(?i)(bearer\s+)([A-Za-z0-9._~+/=-]{6,})")
QUERY_TOKEN_PATTERN = re.compile(
    r"(?i)([?&](?:token|access_token|api_key|key)=)([^&\s]+)"
)


def sanitize_token(token: str) -> str:
    """
    Sanitize a token for safe logging.

    Args:
        token: Token to sanitize

    Returns:
        Sanitized version showing only the first/last few characters
    """
    if not token or len(token) < 10:
        return "***"
    return f"{token[:4]}...{token[-4:]}"


def mask_tokens(message: str, tokens: Iterable[Optional[str]] = ()) -> str:
    """
    Mask bearer credentials and any of the given tokens in ``message``.

    Args:
        message: Text that might contain secrets
        tokens: Known secret values to mask verbatim

    Returns:
        Message with secrets masked
    """
    masked = BEARER_PATTERN.sub(r"\1***REDACTED***", message)
    masked = QUERY_TOKEN_PATTERN.sub(r"\1***REDACTED***", masked)
    for token in tokens:
        if token and token in masked:
            masked = masked.replace(token, sanitize_token(token))
    return masked


class TokenRedactingFilter(logging.Filter):
    """Logging filter that rewrites records so no token reaches a handler."""

    def __init__(self, tokens: Iterable[Optional[str]] = ()):
        super().__init__()
        self._tokens: List[str] = [t for t in tokens if t]

    def add_token(self, token: Optional[str]) -> None:
        if token and token not in self._tokens:
            self._tokens.append(token)

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = mask_tokens(message, self._tokens)
        if masked != message:
            record.msg = masked
            record.args = None
        return True
