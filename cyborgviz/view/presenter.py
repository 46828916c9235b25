"""
Presenter - Text and control state for the front-end.

Derived purely from the session state, the view model and the loading flag.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any
import json

from ..session.state import Session
from .graph_model import GraphViewModel


@dataclass(frozen=True)
class ControlStates:
    """Which session controls are enabled."""
    start: bool
    previous: bool
    next: bool
    end: bool


def control_states(state: Session, loading: bool = False) -> ControlStates:
    """
    Enable controls the way the state machine guards allow.

    Everything is disabled while an operation is in flight.
    """
    if loading:
        return ControlStates(start=False, previous=False, next=False, end=False)
    return ControlStates(
        start=not state.is_active(),
        previous=state.can_rewind(),
        next=state.can_advance(),
        end=state.is_active(),
    )


def status_text(state: Session, loading: bool = False) -> str:
    """Headline shown above the controls."""
    if loading:
        return "Loading..."
    if not state.is_active():
        return "No Game has started yet"
    if state.current_step == 0:
        return f"Initialized Game: {state.game_id}\nClick Next to Play"
    if state.is_terminal():
        return f"Reached Round {state.current_step}, End of Game!"
    return f"Round: {state.current_step}"


def format_action_info(info: Any) -> str:
    if info is None:
        return "-"
    if isinstance(info, str):
        return info
    return json.dumps(info, indent=2, sort_keys=True, default=str)


def observation_info(view: GraphViewModel) -> dict[str, str] | None:
    """Red and Blue action summaries, or None when nothing is displayed."""
    if not view.has_graph:
        return None
    return {
        "Red": format_action_info(view.red_action_info),
        "Blue": format_action_info(view.blue_action_info),
    }
