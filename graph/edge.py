"""
edge.py — Graph Edge
====================
Connects two nodes with a numeric weight.  Graphs are undirected: the
edge A–B and the edge B–A are the same edge, so every status lookup goes
through the canonical key from `edge_key()`.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - Weight defaults to 1 for unweighted graphs.
"""

from enum import Enum
from typing import Optional


# ---------------------------------------------------------------------------
# Edge Status Enum
# ---------------------------------------------------------------------------
class EdgeStatus(Enum):
    UNVISITED  = "unvisited"    # thin, neutral
    PROCESSING = "processing"   # being relaxed / considered
    FINALIZED  = "finalized"    # part of the result (shortest-path tree, MST)
    REJECTED   = "rejected"     # proven suboptimal for the current decision


def edge_key(a: str, b: str) -> str:
    """Direction-independent identity: sort(a, b).join("-")."""
    return "-".join(sorted((a, b)))


# ---------------------------------------------------------------------------
# Edge
# ---------------------------------------------------------------------------
class Edge:
    """
    Attributes:
        source : ID of one endpoint (the one named first by the caller).
        target : ID of the other endpoint.
        weight : Numeric cost. May be negative for Bellman-Ford demos.
    """

    __slots__ = ("source", "target", "weight")

    def __init__(self, source: str, target: str, weight: float = 1.0):
        self.source: str   = source
        self.target: str   = target
        self.weight: float = weight

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @property
    def key(self) -> str:
        return edge_key(self.source, self.target)

    def other_end(self, node_id: str) -> Optional[str]:
        """Given one endpoint, return the other. None if node_id isn't an endpoint."""
        if node_id == self.source:
            return self.target
        if node_id == self.target:
            return self.source
        return None

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            source=str(data["source"]),
            target=str(data["target"]),
            weight=data.get("weight", 1.0),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Edge({self.source} ↔ {self.target}, w={self.weight})"

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Edge)
            and self.key == other.key
            and self.weight == other.weight
        )

    def __hash__(self) -> int:
        return hash((self.key, self.weight))
