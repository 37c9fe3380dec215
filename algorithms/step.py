"""
step.py — Algorithm Step Snapshot
==================================
Every executor yields Step objects.  A Step is a frozen-in-time picture
of everything a renderer needs to draw one frame:

    • The status of EVERY node and EVERY edge (full maps, not deltas)
    • Which node / edge is highlighted right now
    • Algorithm-specific data: distances, the all-pairs matrix,
      the running MST cost, knapsack selection & value, the
      negative-cycle flag
    • A plain-English description of what just happened

Design decisions:
  - Step is a frozen dataclass.  It is a SNAPSHOT: every container it
    holds is a private copy made at build time, so producing step i+1
    can never change what step i shows, and mutating one Step's dicts
    never leaks into another.
  - StepBuilder is the mutable scratch-pad that carries the running
    status maps through an executor.  The executor is the only writer;
    the controller / renderer are pure readers of the built Steps.
  - Optional fields stay None when an algorithm does not use them, so a
    solution panel can render "whichever field is populated".
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from graph import NodeStatus, EdgeStatus, edge_key


# ---------------------------------------------------------------------------
# Knapsack selection entry
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class SelectedItem:
    id:       str
    value:    float
    weight:   float
    ratio:    float
    fraction: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id":       self.id,
            "value":    self.value,
            "weight":   self.weight,
            "ratio":    self.ratio,
            "fraction": self.fraction,
        }


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number             : 0-based index of this step in the trace.
        description             : Human-readable narration.
        node_statuses           : {node_id: NodeStatus} for every node.
        edge_statuses           : {edge_key: EdgeStatus} for every edge.
        current_node_id         : Node being highlighted (or None).
        current_edge            : (source, target) being highlighted (or None).
        distance_map            : {node_id: float}  — Dijkstra / Bellman-Ford.
        distance_matrix         : n×n tuple of row tuples — Floyd-Warshall.
                                  Rows are immutable, so an unchanged row is
                                  shared between consecutive snapshots.
        mst_cost                : running MST weight — Prim.
        total_value             : running value — Fractional Knapsack.
        selected_items          : running selection — Fractional Knapsack.
        negative_cycle_detected : terminal flag — Bellman-Ford.
        is_final                : True on the very last step of the trace.
    """

    step_number:             int                              = 0
    description:             str                              = ""
    node_statuses:           Dict[str, NodeStatus]            = field(default_factory=dict)
    edge_statuses:           Dict[str, EdgeStatus]            = field(default_factory=dict)
    current_node_id:         Optional[str]                    = None
    current_edge:            Optional[Tuple[str, str]]        = None
    distance_map:            Optional[Dict[str, float]]       = None
    distance_matrix:         Optional[Tuple[Tuple[float, ...], ...]] = None
    mst_cost:                Optional[float]                  = None
    total_value:             Optional[float]                  = None
    selected_items:          Optional[List[SelectedItem]]     = None
    negative_cycle_detected: Optional[bool]                   = None
    is_final:                bool                             = False

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready form: enum values as strings, infinity as None."""
        return {
            "step_number":     self.step_number,
            "description":     self.description,
            "node_statuses":   {k: v.value for k, v in self.node_statuses.items()},
            "edge_statuses":   {k: v.value for k, v in self.edge_statuses.items()},
            "current_node_id": self.current_node_id,
            "current_edge": (
                {"source": self.current_edge[0], "target": self.current_edge[1]}
                if self.current_edge else None
            ),
            "distance_map": (
                {k: _finite(v) for k, v in self.distance_map.items()}
                if self.distance_map is not None else None
            ),
            "distance_matrix": (
                [[_finite(v) for v in row] for row in self.distance_matrix]
                if self.distance_matrix is not None else None
            ),
            "mst_cost":    self.mst_cost,
            "total_value": self.total_value,
            "selected_items": (
                [item.to_dict() for item in self.selected_items]
                if self.selected_items is not None else None
            ),
            "negative_cycle_detected": self.negative_cycle_detected,
            "is_final":    self.is_final,
        }


def _finite(value: float) -> Optional[float]:
    return None if math.isinf(value) else value


def fmt(value: float) -> str:
    """Number for narration text: ∞ for infinity, no trailing .0 on whole floats."""
    if math.isinf(value):
        return "∞" if value > 0 else "-∞"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return f"{value:g}" if isinstance(value, float) else str(value)


# ---------------------------------------------------------------------------
# Builder: running status maps + snapshotting
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Mutable scratch-pad that carries the running node / edge statuses
    through one executor invocation and stamps out Steps.

    Usage inside an executor generator:
        sb = StepBuilder(graph.node_ids(), graph.edge_keys())
        sb.set_node("A", NodeStatus.CURRENT)
        yield sb.build("Start from A.", current_node_id="A")
    """

    def __init__(self, node_ids: Iterable[str] = (), edge_keys: Iterable[str] = ()):
        self.node_states: Dict[str, NodeStatus] = {nid: NodeStatus.UNVISITED for nid in node_ids}
        self.edge_states: Dict[str, EdgeStatus] = {key: EdgeStatus.UNVISITED for key in edge_keys}
        self.step_number: int = 0

    # -- helpers --
    def set_node(self, node_id: str, status: NodeStatus) -> None:
        self.node_states[node_id] = status

    def set_edge(self, a: str, b: str, status: EdgeStatus) -> None:
        self.edge_states[edge_key(a, b)] = status

    def has_edge(self, a: str, b: str) -> bool:
        return edge_key(a, b) in self.edge_states

    def mark_nodes(self, node_ids: Iterable[str], status: NodeStatus) -> None:
        for nid in node_ids:
            self.node_states[nid] = status

    def build(
        self,
        description: str,
        *,
        current_node_id: Optional[str] = None,
        current_edge: Optional[Tuple[str, str]] = None,
        distance_map: Optional[Mapping[str, float]] = None,
        distance_matrix: Optional[Sequence[Sequence[float]]] = None,
        mst_cost: Optional[float] = None,
        total_value: Optional[float] = None,
        selected_items: Optional[Sequence[SelectedItem]] = None,
        negative_cycle_detected: Optional[bool] = None,
        is_final: bool = False,
    ) -> Step:
        step = Step(
            step_number=self.step_number,
            description=description,
            node_statuses=dict(self.node_states),
            edge_statuses=dict(self.edge_states),
            current_node_id=current_node_id,
            current_edge=tuple(current_edge) if current_edge else None,
            distance_map=dict(distance_map) if distance_map is not None else None,
            distance_matrix=(
                tuple(tuple(row) for row in distance_matrix)
                if distance_matrix is not None else None
            ),
            mst_cost=mst_cost,
            total_value=total_value,
            selected_items=list(selected_items) if selected_items is not None else None,
            negative_cycle_detected=negative_cycle_detected,
            is_final=is_final,
        )
        self.step_number += 1
        return step
