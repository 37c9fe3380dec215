"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Single-source shortest paths over an undirected weighted graph, using a
linear scan for the closest unvisited node (the scan is what the
animation shows, so no heap).

Yields a Step at:
  1. Initialise distances (start = 0, all others = ∞)
  2. Select the closest unvisited node  →  FINALIZED
  3. Each unvisited neighbour examined  →  edge PROCESSING
  4. Relaxation outcome                 →  distance UPDATED or edge REJECTED
  5. Unreachable nodes reported (only if the graph is disconnected)
  6. Final: shortest-path tree edges FINALIZED, every node FINALIZED

Ties on the minimum distance go to the lexicographically smallest node
id, so the trace never depends on set iteration order.

Correctness note: Dijkstra requires non-negative weights.
The caller (or the UI) should warn / block if negative edges exist.
"""

from typing import Dict, Generator, List, Optional

from graph import Graph, NodeStatus, EdgeStatus
from algorithms.step import Step, StepBuilder, fmt


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, start):",                 # 0
    "    dist ← {v: ∞ for v in V}",                # 1
    "    dist[start] ← 0",                         # 2
    "    unvisited ← V",                           # 3
    "    while unvisited is not empty:",           # 4
    "        u ← argmin dist[v], v in unvisited",  # 5
    "        if dist[u] = ∞: break",               # 6
    "        remove u from unvisited",             # 7
    "        for (v, w) in adj(u), v unvisited:",  # 8
    "            if dist[u] + w < dist[v]:",       # 9
    "                dist[v] ← dist[u] + w",       # 10
    "                prev[v] ← u",                 # 11
    "    return dist, prev",                       # 12
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dijkstra(graph: Graph, start_id: str) -> Generator[Step, None, None]:
    graph.require_node(start_id)

    INF = float("inf")

    dist:      Dict[str, float]         = {nid: INF for nid in graph.node_ids()}
    previous:  Dict[str, Optional[str]] = {nid: None for nid in graph.node_ids()}
    unvisited: List[str]                = graph.node_ids()
    dist[start_id] = 0

    sb = StepBuilder(graph.node_ids(), graph.edge_keys())
    sb.set_node(start_id, NodeStatus.CURRENT)

    # --- init step ---
    yield sb.build(
        f"Starting Dijkstra's algorithm from node {start_id}. "
        f"Initial distance: {start_id} = 0, all others = ∞.",
        current_node_id=start_id,
        distance_map=dist,
    )

    # --- main loop ---
    while unvisited:
        current = _closest(unvisited, dist)
        if current is None:
            break

        unvisited.remove(current)
        sb.set_node(current, NodeStatus.FINALIZED)
        yield sb.build(
            f"Selected node {current} with minimum distance {fmt(dist[current])}.",
            current_node_id=current,
            distance_map=dist,
        )

        # -- relax neighbours --
        for nbr, edge in graph.neighbours(current):
            if nbr not in unvisited:
                continue

            sb.set_node(nbr, NodeStatus.PROCESSING)
            sb.set_edge(current, nbr, EdgeStatus.PROCESSING)
            yield sb.build(
                f"Examining neighbor {nbr} from {current}.",
                current_node_id=current,
                current_edge=(current, nbr),
                distance_map=dist,
            )

            new_dist = dist[current] + edge.weight
            if new_dist < dist[nbr]:
                old_prev = previous[nbr]
                if old_prev is not None and old_prev != current:
                    # the old tree edge into nbr just lost
                    sb.set_edge(old_prev, nbr, EdgeStatus.REJECTED)
                dist[nbr]     = new_dist
                previous[nbr] = current
                yield sb.build(
                    f"Updated distance to {nbr}: {fmt(new_dist)} via {current}.",
                    current_node_id=current,
                    current_edge=(current, nbr),
                    distance_map=dist,
                )
            else:
                sb.set_edge(current, nbr, EdgeStatus.REJECTED)
                yield sb.build(
                    f"Path to {nbr} via {current} is not better "
                    f"({fmt(new_dist)} ≥ {fmt(dist[nbr])}).",
                    current_node_id=current,
                    current_edge=(current, nbr),
                    distance_map=dist,
                )

            # still in the unvisited set
            sb.set_node(nbr, NodeStatus.UNVISITED)

    # --- disconnected remainder ---
    unreachable = [nid for nid in graph.node_ids() if dist[nid] == INF]
    if unreachable:
        yield sb.build(
            f"Graph is disconnected: {', '.join(unreachable)} cannot be reached "
            f"from {start_id} (distance stays ∞).",
            distance_map=dist,
        )

    # --- shortest-path tree ---
    for nid in graph.node_ids():
        cur, prev = nid, previous[nid]
        while prev is not None:
            sb.set_edge(cur, prev, EdgeStatus.FINALIZED)
            cur, prev = prev, previous[prev]

    sb.mark_nodes(graph.node_ids(), NodeStatus.FINALIZED)
    yield sb.build(
        "Dijkstra's algorithm complete. The shortest paths from the start node "
        "to all other nodes have been found.",
        distance_map=dist,
        is_final=True,
    )


# ---------------------------------------------------------------------------
def _closest(unvisited: List[str], dist: Dict[str, float]) -> Optional[str]:
    """Unvisited node with the smallest finite distance; ties by id."""
    best: Optional[str] = None
    for nid in unvisited:
        if dist[nid] == float("inf"):
            continue
        if best is None or (dist[nid], nid) < (dist[best], best):
            best = nid
    return best
