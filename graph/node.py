"""
node.py — Graph Node
====================
A node is pure identity: an id and a label for the canvas.  Everything an
algorithm learns about a node lives in the Step snapshots, never on the
Node itself, so one Graph can feed any number of runs.
"""

from enum import Enum
from typing import Optional


# ---------------------------------------------------------------------------
# Node Status Enum — closed set shared by every executor
# ---------------------------------------------------------------------------
class NodeStatus(Enum):
    UNVISITED  = "unvisited"    # not touched yet
    CURRENT    = "current"      # being expanded RIGHT NOW
    PROCESSING = "processing"   # candidate under evaluation
    FINALIZED  = "finalized"    # optimal value fixed
    REJECTED   = "rejected"     # permanently excluded (greedy executors only)


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
class Node:
    """
    Attributes:
        id    : Unique identifier within its Graph.
        label : Human-readable name (defaults to the id).
    """

    __slots__ = ("id", "label")

    def __init__(self, node_id: str, label: Optional[str] = None):
        self.id: str    = node_id
        self.label: str = label or node_id

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {"id": self.id, "label": self.label}

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        label = data.get("label")
        return cls(node_id=str(data["id"]), label=None if label is None else str(label))

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id}, label={self.label})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id and self.label == other.label

    def __hash__(self) -> int:
        return hash(self.id)
