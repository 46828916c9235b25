"""
Session Actions, effects and transitions.

Actions are what the user asks for (start, next, previous, end).
Effects are what must happen as a consequence:
1. Transport effects - one server call (start, advance, fetch step, end)
2. View effects - replace or clear the displayed snapshot

A Transition carries the new session state plus the effects to perform.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .state import Session
    from ..api.schemas import GraphSnapshot


class SessionAction(Enum):
    """User-level session operations."""
    START = "start"
    ADVANCE = "advance"  # "next step"
    REWIND = "rewind"  # "previous step"
    END = "end"


class EffectType(Enum):
    """Types of effects a transition can request."""
    # Transport
    START_GAME = "start_game"
    ADVANCE_GAME = "advance_game"
    FETCH_STEP = "fetch_step"
    END_GAME = "end_game"

    # View
    REPLACE_SNAPSHOT = "replace_snapshot"
    CLEAR_SNAPSHOT = "clear_snapshot"


TRANSPORT_EFFECTS = frozenset({
    EffectType.START_GAME,
    EffectType.ADVANCE_GAME,
    EffectType.FETCH_STEP,
    EffectType.END_GAME,
})


class RejectionCode(str, Enum):
    """Why an action was refused before reaching the server."""
    GAME_ALREADY_ACTIVE = "GAME_ALREADY_ACTIVE"
    GAME_NOT_STARTED = "GAME_NOT_STARTED"
    AT_MAX_STEPS = "AT_MAX_STEPS"
    AT_FIRST_STEP = "AT_FIRST_STEP"
    OPERATION_IN_PROGRESS = "OPERATION_IN_PROGRESS"
    UNEXPECTED_EFFECT = "UNEXPECTED_EFFECT"


@dataclass(frozen=True)
class Effect:
    """
    One effect to perform.

    Generic container; which fields are set depends on effect_type.
    """
    effect_type: EffectType
    game_id: str | None = None
    step: int | None = None

    # START_GAME
    red_agent: str | None = None
    blue_agent: str | None = None
    max_steps: int | None = None

    # REPLACE_SNAPSHOT
    snapshot: Any | None = None  # GraphSnapshot

    @property
    def is_transport(self) -> bool:
        return self.effect_type in TRANSPORT_EFFECTS

    @classmethod
    def start_game(cls, red_agent: str, blue_agent: str, max_steps: int) -> Effect:
        return cls(
            effect_type=EffectType.START_GAME,
            red_agent=red_agent,
            blue_agent=blue_agent,
            max_steps=max_steps,
        )

    @classmethod
    def advance_game(cls, game_id: str, step: int) -> Effect:
        """`step` is the step the server is expected to produce."""
        return cls(effect_type=EffectType.ADVANCE_GAME, game_id=game_id, step=step)

    @classmethod
    def fetch_step(cls, game_id: str, step: int) -> Effect:
        return cls(effect_type=EffectType.FETCH_STEP, game_id=game_id, step=step)

    @classmethod
    def end_game(cls, game_id: str) -> Effect:
        return cls(effect_type=EffectType.END_GAME, game_id=game_id)

    @classmethod
    def replace_snapshot(cls, snapshot: GraphSnapshot) -> Effect:
        return cls(effect_type=EffectType.REPLACE_SNAPSHOT, snapshot=snapshot)

    @classmethod
    def clear_snapshot(cls) -> Effect:
        return cls(effect_type=EffectType.CLEAR_SNAPSHOT)


@dataclass
class Transition:
    """
    Result of planning or resolving an action.

    Contains:
    - Whether the action is allowed / succeeded
    - The session state to adopt
    - Effects to perform (transport call when planning, view updates when resolving)
    - Error information on failure
    """
    success: bool
    new_state: Session | None = None
    effects: list[Effect] = field(default_factory=list)
    error: str | None = None
    error_code: str | None = None

    # Closing message from the server, set when ending a game succeeds
    message: str | None = None

    @property
    def rejected(self) -> bool:
        """True when the action was refused before any server call."""
        return not self.success and self.error_code in {code.value for code in RejectionCode}

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        state: Session | None = None,
    ) -> Transition:
        """Create a failure result; `state` is the unchanged session."""
        return cls(success=False, new_state=state, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Session,
        effects: list[Effect] | None = None,
        message: str | None = None,
    ) -> Transition:
        """Create a success result with new state."""
        return cls(success=True, new_state=state, effects=effects or [], message=message)
