"""
Graph View Model - The snapshot currently on display.

Holds at most one GraphSnapshot. Each successful fetch replaces it whole;
ending a game clears it. The renderer treats the node/edge set as opaque
input and lays it out from scratch on every change.
"""

from __future__ import annotations
from typing import Any, Callable

from ..api.schemas import GraphSnapshot, SideView, NodeInfo, EdgeInfo, RED, BLUE, SIDES


class GraphViewModel:
    """
    Owner of the displayed snapshot.

    Snapshots are immutable, so replace() is a single reference swap and
    readers see either the old graph or the new one, never a mix.

    Listeners registered with subscribe() are called with the new snapshot
    (or None after clear()).
    """

    def __init__(self):
        self._snapshot: GraphSnapshot | None = None
        self._listeners: list[Callable[[GraphSnapshot | None], None]] = []

    @property
    def snapshot(self) -> GraphSnapshot | None:
        return self._snapshot

    @property
    def has_graph(self) -> bool:
        return self._snapshot is not None

    def replace(self, snapshot: GraphSnapshot) -> None:
        """Display `snapshot` instead of the current one."""
        self._snapshot = snapshot
        self._notify(snapshot)

    def clear(self) -> None:
        """Remove the displayed snapshot."""
        self._snapshot = None
        self._notify(None)

    def subscribe(self, listener: Callable[[GraphSnapshot | None], None]) -> None:
        self._listeners.append(listener)

    def _notify(self, snapshot: GraphSnapshot | None) -> None:
        for listener in list(self._listeners):
            listener(snapshot)

    # =========================================================================
    # Accessors
    # =========================================================================

    def side(self, name: str) -> SideView | None:
        snapshot = self._snapshot
        return snapshot.side(name) if snapshot else None

    @property
    def red_action_info(self) -> Any:
        view = self.side(RED)
        return view.action_info if view else None

    @property
    def blue_action_info(self) -> Any:
        view = self.side(BLUE)
        return view.action_info if view else None

    @property
    def nodes(self) -> tuple[NodeInfo, ...]:
        """All hosts across both sides, first occurrence wins (Red before Blue)."""
        snapshot = self._snapshot
        if snapshot is None:
            return ()
        seen: dict[str, NodeInfo] = {}
        for name in SIDES:
            for node in snapshot.side(name).nodes:
                seen.setdefault(node.id, node)
        return tuple(seen.values())

    @property
    def edges(self) -> tuple[EdgeInfo, ...]:
        """All links across both sides, without duplicates."""
        snapshot = self._snapshot
        if snapshot is None:
            return ()
        seen: dict[tuple[str, str], EdgeInfo] = {}
        for name in SIDES:
            for edge in snapshot.side(name).edges:
                seen.setdefault((edge.source, edge.target), edge)
        return tuple(seen.values())

    def node_ids(self) -> list[str]:
        return [node.id for node in self.nodes]

    def describe_node(self, node_id: str) -> str | None:
        """
        Text shown when a node is selected in the scene.

        Lists the node's status as each side sees it, plus any extra
        attributes the server sent. Returns None for unknown nodes.
        """
        snapshot = self._snapshot
        if snapshot is None:
            return None

        lines: list[str] = []
        for name in SIDES:
            node = next((n for n in snapshot.side(name).nodes if n.id == node_id), None)
            if node is None:
                continue
            if not lines:
                lines.append(f"Node: {node.display_name}")
            lines.append(f"{name} view: {node.status or 'unknown'}")
            for key, value in (node.model_extra or {}).items():
                lines.append(f"  {key}: {value}")

        return "\n".join(lines) if lines else None
