"""
Session Module - The client-side game session.

A session represents one game on the server:
- Created when the user starts a game
- Steps forward (new steps are played by the server) and backward
  (already-played steps are re-read)
- Destroyed when the user ends the game

At most one operation is in flight at a time.
"""

from .state import Session, SessionPhase
from .action import SessionAction, Effect, EffectType, RejectionCode, Transition
from .reducer import plan, resolve
from .controller import SessionController

__all__ = [
    "Session",
    "SessionPhase",
    "SessionAction",
    "Effect",
    "EffectType",
    "RejectionCode",
    "Transition",
    "plan",
    "resolve",
    "SessionController",
]
