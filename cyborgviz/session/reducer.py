"""
Reducer - Session state transitions.

The reducer is the single place session state changes are decided.
Every user action goes through two pure steps:

1. plan(state, action) -> Transition
   Checks the guard and names the server call to make. Nothing changes yet.
2. resolve(state, effect, outcome) -> Transition
   Given the server call's outcome, computes the new state and the view
   effects (replace or clear the snapshot).

Design principles:
- Pure functions: no I/O, no mutation
- A failed server call never changes state
- Guards reject before any server call
"""

from __future__ import annotations
from typing import Callable

from .state import Session
from .action import SessionAction, Effect, EffectType, RejectionCode, Transition
from ..transport.errors import TransportResult


# =============================================================================
# Planning
# =============================================================================

def plan(state: Session, action: SessionAction) -> Transition:
    """
    Validate `action` against `state` and return the server call to make.

    On success the transition holds the unchanged state and exactly one
    transport effect.
    """
    planner = _PLANNERS.get(action)
    if planner is None:
        return Transition.failure(
            f"No planner for action: {action}",
            error_code=RejectionCode.UNEXPECTED_EFFECT.value,
            state=state,
        )
    return planner(state)


def _plan_start(state: Session) -> Transition:
    if state.is_active():
        return _reject(state, f"Game {state.game_id} is already running", RejectionCode.GAME_ALREADY_ACTIVE)
    effect = Effect.start_game(state.red_agent, state.blue_agent, state.max_steps)
    return Transition.success_with_state(state, [effect])


def _plan_advance(state: Session) -> Transition:
    if not state.is_active():
        return _reject(state, "Start a game first", RejectionCode.GAME_NOT_STARTED)
    if state.current_step >= state.max_steps:
        return _reject(
            state,
            f"Reached round {state.current_step}, the last of {state.max_steps}",
            RejectionCode.AT_MAX_STEPS,
        )

    next_step = state.current_step + 1
    if state.has_replay_ahead():
        effect = Effect.fetch_step(state.game_id, next_step)
    else:
        effect = Effect.advance_game(state.game_id, next_step)
    return Transition.success_with_state(state, [effect])


def _plan_rewind(state: Session) -> Transition:
    if not state.is_active():
        return _reject(state, "Start a game first", RejectionCode.GAME_NOT_STARTED)
    if state.current_step <= 1:
        return _reject(state, "Already at the first round", RejectionCode.AT_FIRST_STEP)
    return Transition.success_with_state(
        state, [Effect.fetch_step(state.game_id, state.current_step - 1)]
    )


def _plan_end(state: Session) -> Transition:
    if not state.is_active():
        return _reject(state, "No game to end", RejectionCode.GAME_NOT_STARTED)
    return Transition.success_with_state(state, [Effect.end_game(state.game_id)])


def _reject(state: Session, error: str, code: RejectionCode) -> Transition:
    return Transition.failure(error, error_code=code.value, state=state)


_PLANNERS: dict[SessionAction, Callable[[Session], Transition]] = {
    SessionAction.START: _plan_start,
    SessionAction.ADVANCE: _plan_advance,
    SessionAction.REWIND: _plan_rewind,
    SessionAction.END: _plan_end,
}


# =============================================================================
# Resolution
# =============================================================================

def resolve(state: Session, effect: Effect, outcome: TransportResult) -> Transition:
    """
    Compute the transition for a finished server call.

    Failures leave `state` untouched. For END_GAME this means the game id is
    kept, since the game is presumed to still be running on the server.
    """
    if not outcome.success:
        return Transition.failure(str(outcome.error), error_code=outcome.error_code, state=state)

    if effect.effect_type == EffectType.START_GAME:
        new_state = state.reset()._copy_with(game_id=outcome.value)
        return Transition.success_with_state(new_state, [Effect.clear_snapshot()])

    if effect.effect_type == EffectType.ADVANCE_GAME:
        new_state = state._copy_with(
            current_step=state.current_step + 1,
            latest_fetched_step=state.latest_fetched_step + 1,
        )
        return Transition.success_with_state(new_state, [Effect.replace_snapshot(outcome.value)])

    if effect.effect_type == EffectType.FETCH_STEP:
        new_state = state._copy_with(current_step=effect.step)
        return Transition.success_with_state(new_state, [Effect.replace_snapshot(outcome.value)])

    if effect.effect_type == EffectType.END_GAME:
        return Transition.success_with_state(
            state.reset(), [Effect.clear_snapshot()], message=outcome.value
        )

    return Transition.failure(
        f"Cannot resolve effect: {effect.effect_type}",
        error_code=RejectionCode.UNEXPECTED_EFFECT.value,
        state=state,
    )
