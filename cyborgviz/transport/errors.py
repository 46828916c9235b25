"""
Transport errors and results.

Error taxonomy:
- TRANSPORT_ERROR: network unreachable, timeout, malformed URL
- PROTOCOL_ERROR: server answered with a non-200 status
- DECODE_ERROR: body does not match the expected shape
- NO_ACTIVE_GAME: operation needs a game id and none was given

Errors never escape the transport. They are carried in a TransportResult
and the caller decides what to do.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar


T = TypeVar("T")


class ErrorCode(str, Enum):
    """Structured error codes."""
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    PROTOCOL_ERROR = "PROTOCOL_ERROR"
    DECODE_ERROR = "DECODE_ERROR"
    NO_ACTIVE_GAME = "NO_ACTIVE_GAME"


class SessionClientError(Exception):
    """Base class for session transport failures."""
    code: ErrorCode = ErrorCode.TRANSPORT_ERROR


class TransportError(SessionClientError):
    """The request never produced an HTTP response."""
    code = ErrorCode.TRANSPORT_ERROR


class ProtocolError(SessionClientError):
    """The server answered with a status other than 200."""
    code = ErrorCode.PROTOCOL_ERROR

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(SessionClientError):
    """The response body could not be decoded into the expected model."""
    code = ErrorCode.DECODE_ERROR


class NoActiveGameError(SessionClientError):
    """A game operation was requested without a game id."""
    code = ErrorCode.NO_ACTIVE_GAME


@dataclass
class TransportResult(Generic[T]):
    """
    Result of one transport call.

    Exactly one of value/error is set.
    """
    value: T | None = None
    error: SessionClientError | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def error_code(self) -> str | None:
        return self.error.code.value if self.error else None

    @classmethod
    def ok(cls, value: T) -> TransportResult[T]:
        """Create a success result."""
        return cls(value=value)

    @classmethod
    def failure(cls, error: SessionClientError) -> TransportResult[T]:
        """Create a failure result."""
        return cls(error=error)
