"""
Session State - The client's view of one game.

A session is either:
- NO_GAME: nothing started (game_id is None, counters at 0)
- ACTIVE: a game is running on the server

Step counters:
- current_step: step being displayed (0 = started, nothing played yet)
- latest_fetched_step: highest step the server has produced so far

Invariants:
- max_steps >= 1
- 0 <= current_step <= max_steps
- current_step <= latest_fetched_step <= max_steps
- NO_GAME sessions have both counters at 0

Sessions are immutable; transitions build new ones.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum

from ..config import DEFAULT_MAX_STEPS, DEFAULT_RED_AGENT, DEFAULT_BLUE_AGENT


class SessionPhase(Enum):
    """Phase of the session state machine."""
    NO_GAME = "no_game"
    ACTIVE = "active"


@dataclass(frozen=True)
class Session:
    """
    Client-side session state.

    red_agent/blue_agent/max_steps are the settings the next Start will use
    (and that the running game was started with).
    """
    max_steps: int = DEFAULT_MAX_STEPS
    red_agent: str = DEFAULT_RED_AGENT
    blue_agent: str = DEFAULT_BLUE_AGENT

    game_id: str | None = None
    current_step: int = 0
    latest_fetched_step: int = 0

    def __post_init__(self):
        if self.max_steps < 1:
            raise ValueError(f"max_steps must be at least 1, got {self.max_steps}")
        if not 0 <= self.current_step <= self.max_steps:
            raise ValueError(
                f"current_step {self.current_step} outside [0, {self.max_steps}]"
            )
        if not self.current_step <= self.latest_fetched_step <= self.max_steps:
            raise ValueError(
                f"latest_fetched_step {self.latest_fetched_step} must be between "
                f"current_step {self.current_step} and max_steps {self.max_steps}"
            )
        if self.game_id is None and (self.current_step or self.latest_fetched_step):
            raise ValueError("A session without a game cannot have taken steps")

    @property
    def phase(self) -> SessionPhase:
        return SessionPhase.ACTIVE if self.game_id is not None else SessionPhase.NO_GAME

    def is_active(self) -> bool:
        """Check if a game is running."""
        return self.phase == SessionPhase.ACTIVE

    def is_terminal(self) -> bool:
        """Check if the game reached its step ceiling."""
        return self.is_active() and self.current_step == self.max_steps

    def can_advance(self) -> bool:
        return self.is_active() and self.current_step < self.max_steps

    def can_rewind(self) -> bool:
        return self.is_active() and self.current_step > 1

    def has_replay_ahead(self) -> bool:
        """True when the next step was already produced and only needs re-reading."""
        return self.current_step < self.latest_fetched_step

    def reset(self) -> Session:
        """Return to NO_GAME, keeping the game settings."""
        return Session(
            max_steps=self.max_steps,
            red_agent=self.red_agent,
            blue_agent=self.blue_agent,
        )

    def _copy_with(self, **changes) -> Session:
        return replace(self, **changes)
