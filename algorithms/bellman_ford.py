"""
bellman_ford.py — Bellman–Ford Algorithm
=========================================
The single-source shortest-path algorithm that tolerates NEGATIVE edge
weights and reports negative cycles instead of looping forever.

Structure:
  • Up to V-1 passes relaxing every edge.  Edges are undirected, so each
    edge is tried source→target, then target→source.
  • A pass that relaxes nothing ends the passes early (this changes the
    step count, so it is part of the trace, not an optimisation detail).
  • One more silent sweep: any edge that can still be relaxed means a
    negative cycle.  Note that an undirected negative edge reachable from
    the start IS a negative cycle (u → v → u).

Yields a Step for:
  1. Initialisation
  2. Start of each pass
  3. Each edge considered, then its outcome (relaxed / no improvement)
  4. Early termination (if a pass relaxed nothing)
  5. Terminal: negative cycle detected, or success

Edge colouring keeps the current predecessor tree FINALIZED: an edge on
the tree is never downgraded, and an edge that drops off the tree
(because its node found a better predecessor) becomes REJECTED.
"""

from typing import Dict, Generator, List, Optional, Tuple

from graph import Graph, NodeStatus, EdgeStatus
from algorithms.step import Step, StepBuilder, fmt


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BellmanFord(graph, start):",              # 0
    "    dist ← {v: ∞ for v in V}",                # 1
    "    dist[start] ← 0",                         # 2
    "    for i in 1 … |V|-1:",                     # 3
    "        for each edge (u, v, w):",            # 4
    "            if dist[u] + w < dist[v]:",       # 5
    "                dist[v] ← dist[u] + w",       # 6
    "        if nothing relaxed: break",           # 7
    "    for each edge (u, v, w):",                # 8
    "        if dist[u] + w < dist[v]:",           # 9
    "            return NEGATIVE CYCLE",           # 10
    "    return dist",                             # 11
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bellman_ford(graph: Graph, start_id: str) -> Generator[Step, None, None]:
    graph.require_node(start_id)

    INF = float("inf")

    dist:     Dict[str, float]         = {nid: INF for nid in graph.node_ids()}
    previous: Dict[str, Optional[str]] = {nid: None for nid in graph.node_ids()}
    dist[start_id] = 0

    # (u, v, w) in both directions; a self-loop only once
    relaxations: List[Tuple[str, str, float]] = []
    for edge in graph.edges:
        relaxations.append((edge.source, edge.target, edge.weight))
        if edge.source != edge.target:
            relaxations.append((edge.target, edge.source, edge.weight))

    def on_tree(a: str, b: str) -> bool:
        return previous.get(b) == a or previous.get(a) == b

    sb = StepBuilder(graph.node_ids(), graph.edge_keys())
    sb.set_node(start_id, NodeStatus.CURRENT)

    # -- init step --
    yield sb.build(
        f"Initialize distances. Distance to start node {start_id} is 0, "
        f"all others are infinity.",
        current_node_id=start_id,
        distance_map=dist,
    )

    # ==============================================================
    # MAIN PASSES
    # ==============================================================
    V = graph.node_count()
    for i in range(1, V):
        relaxed_any = False

        yield sb.build(f"Iteration {i}: Relax all edges.", distance_map=dist)

        for u, v, w in relaxations:
            if dist[u] == INF:
                continue   # can't relax from an unreachable node

            v_status = sb.node_states[v]
            sb.set_edge(u, v, EdgeStatus.PROCESSING)
            sb.set_node(v, NodeStatus.PROCESSING)
            yield sb.build(
                f"Considering edge from {u} to {v} with weight {fmt(w)}.",
                current_edge=(u, v),
                distance_map=dist,
            )

            if dist[u] + w < dist[v]:
                old_prev    = previous[v]
                dist[v]     = dist[u] + w
                previous[v] = u
                relaxed_any = True
                sb.set_edge(u, v, EdgeStatus.FINALIZED)
                if old_prev is not None and old_prev != u and not on_tree(old_prev, v):
                    sb.set_edge(old_prev, v, EdgeStatus.REJECTED)
                description = (
                    f"Relaxed edge from {u} to {v}. "
                    f"New distance to {v} is {fmt(dist[v])}."
                )
            else:
                sb.set_edge(
                    u, v,
                    EdgeStatus.FINALIZED if on_tree(u, v) else EdgeStatus.REJECTED,
                )
                description = f"No improvement for edge from {u} to {v}."

            yield sb.build(description, current_edge=(u, v), distance_map=dist)
            sb.set_node(v, v_status)

        if not relaxed_any:
            yield sb.build(
                f"No edges were relaxed in iteration {i}. Algorithm can terminate early.",
                distance_map=dist,
            )
            break

    # ==============================================================
    # NEGATIVE-CYCLE CHECK
    # ==============================================================
    offending = next(
        (
            (u, v) for u, v, w in relaxations
            if dist[u] != INF and dist[u] + w < dist[v]
        ),
        None,
    )

    if offending is not None:
        u, v = offending
        yield sb.build(
            f"A negative cycle was detected in the graph "
            f"(edge {u} to {v} can still be relaxed).",
            current_edge=(u, v),
            distance_map=dist,
            negative_cycle_detected=True,
            is_final=True,
        )
        return

    sb.mark_nodes([nid for nid in graph.node_ids() if dist[nid] != INF], NodeStatus.FINALIZED)
    yield sb.build(
        "Bellman-Ford algorithm completed. All shortest paths from the source "
        "have been found.",
        distance_map=dist,
        negative_cycle_detected=False,
        is_final=True,
    )
