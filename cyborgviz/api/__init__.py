"""
API Module - Wire contract with the CybORG game server.

The client:
1. Starts a game with chosen red/blue agents and a step ceiling
2. Advances the game one step at a time
3. Re-reads steps it has already seen
4. Ends the game

All payloads are JSON described by pydantic models.
"""

from .schemas import (
    # Requests
    StartGameRequest,
    # Responses
    StartGameResponse,
    EndGameResponse,
    GraphSnapshot,
    # Shared
    SideView,
    NodeInfo,
    EdgeInfo,
    RED,
    BLUE,
    SIDES,
)

__all__ = [
    # Requests
    "StartGameRequest",
    # Responses
    "StartGameResponse",
    "EndGameResponse",
    "GraphSnapshot",
    # Shared
    "SideView",
    "NodeInfo",
    "EdgeInfo",
    "RED",
    "BLUE",
    "SIDES",
]
