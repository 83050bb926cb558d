"""
Error types raised by the Reddit and LLM clients.

Every failure that leaves a client is a ``Redditx2mdError`` subclass with a
fixed ``kind``. Callers dispatch on ``kind`` (or the class), never on the
message text.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    RATE_LIMIT = "RATE_LIMIT"
    FORBIDDEN = "FORBIDDEN"
    TIMEOUT = "TIMEOUT"
    AUTH_ERROR = "AUTH_ERROR"
    SERVER_ERROR = "SERVER_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"


class Redditx2mdError(Exception):
    """Base class for classified client failures.

    Attributes:
        kind: Failure classification
        message: Human-readable description
        cause: The underlying exception, if any
        status_code: HTTP status code when the failure came from a response
        source: Which collaborator failed ("reddit", "deepseek", ...)
    """

    kind: ErrorKind = ErrorKind.NETWORK_ERROR

    def __init__(
        self,
        message: str,
        *,
        cause: BaseException | None = None,
        status_code: int | None = None,
        source: str = "",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.status_code = status_code
        self.source = source

    def __str__(self) -> str:
        return self.message


class RateLimitError(Redditx2mdError):
    kind = ErrorKind.RATE_LIMIT


class ForbiddenError(Redditx2mdError):
    kind = ErrorKind.FORBIDDEN


class RequestTimeoutError(Redditx2mdError):
    kind = ErrorKind.TIMEOUT


class AuthError(Redditx2mdError):
    kind = ErrorKind.AUTH_ERROR


class ServerError(Redditx2mdError):
    kind = ErrorKind.SERVER_ERROR


class NetworkError(Redditx2mdError):
    kind = ErrorKind.NETWORK_ERROR
