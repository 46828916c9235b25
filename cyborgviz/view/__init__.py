"""
View Module - What the front-end displays.

The renderer only reads from here; it never talks to the server.
"""

from .graph_model import GraphViewModel
from .presenter import ControlStates, control_states, status_text, observation_info

__all__ = [
    "GraphViewModel",
    "ControlStates",
    "control_states",
    "status_text",
    "observation_info",
]
