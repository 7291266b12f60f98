"""
metaphor-client - Custom Exceptions

Every failure of the request pipeline surfaces as a distinct subclass of
MetaphorError so callers can branch on kind rather than on message text.

Anti-Patterns Avoided:
- Exception shadowing: names never collide with builtins such as
  ConnectionError or TimeoutError (TransportError covers both)
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class MetaphorError(Exception):
    """Base exception for metaphor-client.

    All custom exceptions inherit from this base class.
    """


class ConfigurationError(MetaphorError):
    """Raised when client configuration is invalid or missing (e.g. empty API key)."""


class RequestBuildError(MetaphorError):
    """Raised when request parameters cannot be merged or serialized."""


class TransportError(MetaphorError):
    """Raised when the HTTP call itself fails (connect, timeout, protocol).

    The underlying httpx exception is available as __cause__.
    """

    def __init__(self, message: str, operation: str | None = None) -> None:
        """Initialize TransportError.

        Args:
            message: Human-readable description
            operation: Operation that was in flight (search, find_similar, get_contents)
        """
        super().__init__(message)
        self.operation = operation


class ServerError(MetaphorError):
    """Raised when the service answers with a non-success status.

    Attributes:
        message: Text from the service's error envelope
        status_code: HTTP status code of the response
    """

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(f"request failed with status {status_code}: {message}")


class MalformedErrorResponse(MetaphorError):
    """Raised when a non-success response body is not a valid error envelope."""

    def __init__(self, status_code: int, body: bytes) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"unparsable error response with status {status_code}")


class DecodeError(MetaphorError):
    """Raised when a success response body cannot be parsed into a result."""

    def __init__(self, message: str, operation: str | None = None) -> None:
        super().__init__(message)
        self.operation = operation


class EmptyResultKind(str, Enum):
    """Which operation came back with an empty collection."""

    NO_SEARCH_RESULTS = "no search results were found"
    NO_SIMILAR_LINKS = "no links were found"
    NO_CONTENTS = "no content was extracted"


class EmptyResultError(MetaphorError):
    """Raised when a successful response holds zero items.

    An empty collection is treated as a failure, not as a valid empty result.

    Attributes:
        kind: EmptyResultKind for the operation
        response: The decoded (empty) response, kept for inspection
    """

    def __init__(self, kind: EmptyResultKind, response: Any = None) -> None:
        self.kind = kind
        self.response = response
        super().__init__(kind.value)
