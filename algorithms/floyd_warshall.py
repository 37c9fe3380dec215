"""
floyd_warshall.py — Floyd–Warshall (All-Pairs Shortest Paths)
===============================================================
The signature "matrix algorithm".  Every Step carries the full n×n
distance matrix so the UI can render it as a live grid, the single most
important visual for understanding Floyd-Warshall.

Structure:
  for k in nodes:          ← "intermediate" node
      for i in nodes (i ≠ k):
          for j in nodes (j ≠ k, j ≠ i):
              if dist[i][k] + dist[k][j] < dist[i][j]:
                  dist[i][j] = dist[i][k] + dist[k][j]

Yields a Step for:
  1. Initialisation (adjacency → matrix)
  2. Start of each k-round
  3. EVERY (k, i, j) combination, improved or not
  4. Final: all nodes finalized

There is no condensed mode: playback expects one step per (k, i, j),
so the trace is O(V³) long.  Rows of the matrix are tuples and only the
row that changed is rebuilt, so consecutive snapshots share the rest.

Matrix indices follow `graph.nodes` order, not node ids.  The diagonal is
never relaxed (i = j is skipped), so no negative-cycle flag is produced.
"""

from typing import Generator, List, Tuple

from graph import Graph, NodeStatus, EdgeStatus
from algorithms.step import Step, StepBuilder, fmt


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def FloydWarshall(graph):",                   # 0
    "    dist ← adjacency matrix (diag = 0)",      # 1
    "    for k in 0 … n-1:",                       # 2
    "        for i in 0 … n-1:",                   # 3
    "            for j in 0 … n-1:",               # 4
    "                if dist[i][k]+dist[k][j]",    # 5
    "                      < dist[i][j]:",         # 6
    "                    dist[i][j] = …",          # 7
    "    return dist",                             # 8
]


Matrix = List[Tuple[float, ...]]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def floyd_warshall(graph: Graph) -> Generator[Step, None, None]:
    INF = float("inf")

    ids = graph.node_ids()
    n   = len(ids)

    # --- initialise dist matrix ---
    rows = [[INF] * n for _ in range(n)]
    for i in range(n):
        rows[i][i] = 0
    for edge in graph.edges:
        u = graph.index_of(edge.source)
        v = graph.index_of(edge.target)
        if u == v:
            continue
        # parallel edges: keep the lighter one
        if edge.weight < rows[u][v]:
            rows[u][v] = edge.weight
            rows[v][u] = edge.weight
    dist: Matrix = [tuple(r) for r in rows]

    sb = StepBuilder(ids, graph.edge_keys())

    # -- init step --
    yield sb.build(
        "Initialize distance matrix. Distance from a vertex to itself is 0, "
        "and between connected vertices is the edge weight.",
        distance_matrix=dist,
    )

    # ==============================================================
    # MAIN TRIPLE LOOP
    # ==============================================================
    for k in range(n):
        sb.set_node(ids[k], NodeStatus.PROCESSING)
        yield sb.build(
            f"Considering {ids[k]} as an intermediate vertex.",
            current_node_id=ids[k],
            distance_matrix=dist,
        )

        for i in range(n):
            if i == k:
                continue
            i_status = sb.node_states[ids[i]]
            sb.set_node(ids[i], NodeStatus.CURRENT)

            for j in range(n):
                if j == k or j == i:
                    continue
                j_status = sb.node_states[ids[j]]
                sb.set_node(ids[j], NodeStatus.PROCESSING)

                d_ik, d_kj = dist[i][k], dist[k][j]
                if d_ik != INF and d_kj != INF and d_ik + d_kj < dist[i][j]:
                    # the bypassed direct edge loses, the two legs win
                    if sb.has_edge(ids[i], ids[j]):
                        sb.set_edge(ids[i], ids[j], EdgeStatus.REJECTED)
                    if sb.has_edge(ids[i], ids[k]):
                        sb.set_edge(ids[i], ids[k], EdgeStatus.FINALIZED)
                    if sb.has_edge(ids[k], ids[j]):
                        sb.set_edge(ids[k], ids[j], EdgeStatus.FINALIZED)

                    row = list(dist[i])
                    row[j] = d_ik + d_kj
                    dist[i] = tuple(row)

                    description = (
                        f"Found shorter path from {ids[i]} to {ids[j]} through {ids[k]}. "
                        f"New distance: {fmt(dist[i][j])}"
                    )
                else:
                    description = (
                        f"No improvement for path from {ids[i]} to {ids[j]} "
                        f"through {ids[k]}."
                    )

                yield sb.build(
                    description,
                    current_node_id=ids[k],
                    current_edge=(ids[i], ids[j]),
                    distance_matrix=dist,
                )
                sb.set_node(ids[j], j_status)

            sb.set_node(ids[i], i_status)

        sb.set_node(ids[k], NodeStatus.FINALIZED)

    sb.mark_nodes(ids, NodeStatus.FINALIZED)
    yield sb.build(
        "Floyd-Warshall algorithm completed. All shortest paths between all "
        "pairs of vertices have been found.",
        distance_matrix=dist,
        is_final=True,
    )
