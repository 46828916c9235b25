"""
Pydantic Schemas for the game server API.

These models define the exact contract between the client and the CybORG
game server:

    POST   /api/games/start              StartGameRequest -> StartGameResponse
    POST   /api/games/{game_id}          -> GraphSnapshot (next step)
    GET    /api/games/{game_id}/step/{n} -> GraphSnapshot (historical step)
    DELETE /api/games/{game_id}          -> EndGameResponse

Decoding policy:
- Every response model accepts snake_case field names and their camelCase
  aliases, so one policy applies to all endpoints.
- Snapshot sides are keyed "Red" and "Blue" on the wire.
- Unknown keys sent by the server are kept on snapshots, nodes and edges.
- Response models are frozen: a decoded snapshot never changes.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


RED = "Red"
BLUE = "Blue"
SIDES = (RED, BLUE)


# =============================================================================
# Request Models
# =============================================================================

class StartGameRequest(BaseModel):
    """Request to start a new game on the server."""
    red_agent: str = Field(..., description="Red (attacker) agent strategy")
    step: int = Field(..., description="Maximum number of steps for the game")
    blue_agent: str = Field(..., description="Blue (defender) agent strategy")


# =============================================================================
# Response Models
# =============================================================================

class _WireModel(BaseModel):
    """Base for everything decoded from a server response."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class StartGameResponse(_WireModel):
    """Response from starting a game."""
    game_id: str = Field(..., min_length=1, description="Server-issued game identifier")


class EndGameResponse(_WireModel):
    """Response from ending a game."""
    message: str = Field(..., description="Human-readable closing message")


class NodeInfo(_WireModel):
    """A simulated host in the network graph."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Host identifier")
    label: Optional[str] = None
    status: Optional[str] = Field(
        None, description="Compromise/status indicator, e.g. safe, exploited, privileged"
    )
    position: Optional[tuple[float, ...]] = Field(
        None, description="Layout hint (x, y[, z])"
    )

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def display_name(self) -> str:
        return self.label or self.id


class EdgeInfo(_WireModel):
    """A link between two simulated hosts."""

    model_config = ConfigDict(extra="allow")

    source: str
    target: str

    @field_validator("source", "target", mode="before")
    @classmethod
    def _coerce_endpoint(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class SideView(_WireModel):
    """One participant's view of the network at a given step."""

    model_config = ConfigDict(extra="allow")

    action_info: Any = Field(..., description="Free-form action/observation summary, may be null")
    nodes: tuple[NodeInfo, ...] = Field(default_factory=tuple)
    edges: tuple[EdgeInfo, ...] = Field(default_factory=tuple)


class GraphSnapshot(_WireModel):
    """
    Point-in-time rendering of the simulated network.

    Holds the Red (attacker) and Blue (defender) views. Two snapshots
    compare equal when their content is equal.
    """

    model_config = ConfigDict(extra="allow")

    red: SideView = Field(..., alias=RED)
    blue: SideView = Field(..., alias=BLUE)
    step: Optional[int] = None

    def side(self, name: str) -> SideView:
        """Get a side by its wire name ("Red" or "Blue")."""
        if name == RED:
            return self.red
        if name == BLUE:
            return self.blue
        raise KeyError(f"Unknown side: {name}")
