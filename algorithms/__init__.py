"""
algorithms/__init__.py — Executor Registry
===========================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, RunRequest, run_algorithm

    steps = run_algorithm("dijkstra", RunRequest(graph=g, start_id="A"))

Every executor is a generator of Steps, but they take different inputs:
single-source algorithms want (graph, start), Floyd-Warshall wants just
the graph, the knapsack wants (items, capacity).  AlgoInfo.run hides
that behind one contract, run(RunRequest) -> List[Step], and always
materialises the whole trace before returning; playback needs random
access, so there is no lazy mode.

Adding an algorithm is: write the generator, add one entry here.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from graph import Graph
from algorithms.step import Step, StepBuilder, SelectedItem

from algorithms.dijkstra            import dijkstra            as _dijkstra,  PSEUDOCODE as _dij_pc
from algorithms.bellman_ford        import bellman_ford        as _bf,        PSEUDOCODE as _bf_pc
from algorithms.floyd_warshall      import floyd_warshall      as _fw,        PSEUDOCODE as _fw_pc
from algorithms.prims_mst           import prims_mst           as _prim,      PSEUDOCODE as _prim_pc
from algorithms.fractional_knapsack import (
    fractional_knapsack as _knapsack,
    PSEUDOCODE          as _knap_pc,
    KnapsackItem,
    DEFAULT_ITEMS,
    DEFAULT_CAPACITY,
)


SINGLE_SOURCE = "single_source"
ALL_PAIRS     = "all_pairs"
ITEMS         = "items"


class UnknownAlgorithmError(KeyError):
    pass


# ---------------------------------------------------------------------------
# RunRequest — the union of every executor's inputs
# ---------------------------------------------------------------------------
@dataclass
class RunRequest:
    graph:    Optional[Graph]              = None
    start_id: Optional[str]                = None
    items:    Sequence[KnapsackItem]       = field(default_factory=list)
    capacity: Optional[float]              = None


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card + run adapter for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                  # registry key, e.g. "dijkstra"
    label:            str                  # human label, e.g. "Dijkstra's Algorithm"
    fn:               Callable             # the generator function
    input_kind:       str                  # SINGLE_SOURCE / ALL_PAIRS / ITEMS
    pseudocode:       List[str]            # lines for the side-panel
    supports_negative: bool = False        # can handle negative edges?
    complexity_time:  str   = ""           # e.g. "O(V²)"
    complexity_space: str   = ""           # e.g. "O(V)"
    description:      str   = ""           # one-liner for the UI card

    def run(self, request: RunRequest) -> List[Step]:
        """Execute to completion and return the full, ordered trace."""
        if self.input_kind == ITEMS:
            capacity = DEFAULT_CAPACITY if request.capacity is None else request.capacity
            return list(self.fn(request.items, capacity))

        if request.graph is None:
            raise ValueError(f"{self.label} needs a graph")
        if self.input_kind == ALL_PAIRS:
            return list(self.fn(request.graph))

        if request.start_id is None:
            raise ValueError(f"{self.label} needs a start node")
        return list(self.fn(request.graph, request.start_id))

    def to_dict(self) -> dict:
        return {
            "key":               self.key,
            "label":             self.label,
            "input_kind":        self.input_kind,
            "pseudocode":        list(self.pseudocode),
            "supports_negative": self.supports_negative,
            "complexity_time":   self.complexity_time,
            "complexity_space":  self.complexity_space,
            "description":       self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=_dijkstra, pseudocode=_dij_pc,
        input_kind=SINGLE_SOURCE,
        complexity_time="O(V²)", complexity_space="O(V)",
        description="Greedily finalizes the closest node. Optimal for non-negative weights.",
    ),

    "bellman_ford": AlgoInfo(
        key="bellman_ford", label="Bellman–Ford", fn=_bf, pseudocode=_bf_pc,
        input_kind=SINGLE_SOURCE, supports_negative=True,
        complexity_time="O(V · E)", complexity_space="O(V)",
        description="Relaxes every edge V-1 times. Detects negative cycles.",
    ),

    "floyd_warshall": AlgoInfo(
        key="floyd_warshall", label="Floyd–Warshall", fn=_fw, pseudocode=_fw_pc,
        input_kind=ALL_PAIRS, supports_negative=True,
        complexity_time="O(V³)", complexity_space="O(V²)",
        description="All-pairs shortest paths via dynamic programming. Watch the matrix evolve!",
    ),

    "prim": AlgoInfo(
        key="prim", label="Prim's MST", fn=_prim, pseudocode=_prim_pc,
        input_kind=SINGLE_SOURCE, supports_negative=True,
        complexity_time="O(V · E)", complexity_space="O(V)",
        description="Grows a minimum spanning tree one lightest crossing edge at a time.",
    ),

    "fractional_knapsack": AlgoInfo(
        key="fractional_knapsack", label="Fractional Knapsack", fn=_knapsack,
        pseudocode=_knap_pc, input_kind=ITEMS,
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Greedy by value/weight ratio; the last item may be split.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> AlgoInfo:
    """Return AlgoInfo by key, or raise UnknownAlgorithmError."""
    try:
        return REGISTRY[key]
    except KeyError:
        raise UnknownAlgorithmError(key) from None


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def run_algorithm(key: str, request: RunRequest) -> List[Step]:
    return get_algorithm(key).run(request)


__all__ = [
    "AlgoInfo",
    "RunRequest",
    "REGISTRY",
    "UnknownAlgorithmError",
    "get_algorithm",
    "list_algorithms",
    "run_algorithm",
    "Step",
    "StepBuilder",
    "SelectedItem",
    "KnapsackItem",
    "DEFAULT_ITEMS",
    "DEFAULT_CAPACITY",
    "SINGLE_SOURCE",
    "ALL_PAIRS",
    "ITEMS",
]
