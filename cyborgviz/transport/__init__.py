"""
Transport Module - HTTP access to the game server.

Every call returns a TransportResult; no exception reaches the caller.
"""

from .errors import (
    ErrorCode,
    SessionClientError,
    TransportError,
    ProtocolError,
    DecodeError,
    NoActiveGameError,
    TransportResult,
)
from .client import SessionTransport, GAMES_PATH

__all__ = [
    "ErrorCode",
    "SessionClientError",
    "TransportError",
    "ProtocolError",
    "DecodeError",
    "NoActiveGameError",
    "TransportResult",
    "SessionTransport",
    "GAMES_PATH",
]
