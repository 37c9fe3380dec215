"""
prims_mst.py — Prim's Minimum Spanning Tree
=============================================
Grows a tree from the start node, always adding the lightest edge that
crosses from the tree to the rest of the graph.

Each round scans every edge leaving the tree:
  • MST nodes in the order they joined the tree
  • their incident edges in graph edge order
The first edge with a strictly smaller weight becomes the new minimum,
so ties go to whichever crossing edge the scan meets first.

Yields a Step for:
  1. Start node
  2. Each crossing edge examined, and each new minimum found
  3. The winning edge added (with the running MST cost)
  4. Terminal: graph disconnected, or MST complete
"""

from typing import Generator, List, Optional, Tuple

from graph import Graph, Edge, NodeStatus, EdgeStatus
from algorithms.step import Step, StepBuilder, fmt


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Prim(graph, start):",                     # 0
    "    tree ← {start}",                          # 1
    "    cost ← 0",                                # 2
    "    while |tree| < |V|:",                     # 3
    "        (u, v, w) ← lightest edge with",      # 4
    "                    u ∈ tree, v ∉ tree",      # 5
    "        if none: return DISCONNECTED",        # 6
    "        tree ← tree ∪ {v}",                   # 7
    "        cost ← cost + w",                     # 8
    "    return tree, cost",                       # 9
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def prims_mst(graph: Graph, start_id: str) -> Generator[Step, None, None]:
    graph.require_node(start_id)

    mst_nodes: List[str] = []          # insertion order drives the scan
    mst_edges: set       = set()       # canonical keys
    mst_cost: float      = 0

    sb = StepBuilder(graph.node_ids(), graph.edge_keys())
    sb.set_node(start_id, NodeStatus.CURRENT)

    yield sb.build(
        f"Starting Prim's algorithm from node {start_id}.",
        current_node_id=start_id,
        mst_cost=mst_cost,
    )

    mst_nodes.append(start_id)
    sb.set_node(start_id, NodeStatus.FINALIZED)

    while len(mst_nodes) < graph.node_count():
        best: Optional[Tuple[str, str, Edge]] = None   # (tree node, new node, edge)

        # -- scan crossing edges --
        for node_id in mst_nodes:
            for nbr, edge in graph.neighbours(node_id):
                if nbr in mst_nodes:
                    continue

                sb.set_node(nbr, NodeStatus.PROCESSING)
                sb.set_edge(edge.source, edge.target, EdgeStatus.PROCESSING)
                yield sb.build(
                    f"Examining edge {edge.source}-{edge.target} with weight {fmt(edge.weight)}.",
                    current_node_id=node_id,
                    current_edge=(edge.source, edge.target),
                    mst_cost=mst_cost,
                )

                if best is None or edge.weight < best[2].weight:
                    best = (node_id, nbr, edge)
                    yield sb.build(
                        f"Edge {edge.source}-{edge.target} with weight {fmt(edge.weight)} "
                        f"is the current minimum.",
                        current_node_id=node_id,
                        current_edge=(edge.source, edge.target),
                        mst_cost=mst_cost,
                    )

                sb.set_node(nbr, NodeStatus.UNVISITED)
                sb.set_edge(edge.source, edge.target, EdgeStatus.UNVISITED)

        # -- nothing crosses: the rest is unreachable --
        if best is None:
            missing = [nid for nid in graph.node_ids() if nid not in mst_nodes]
            yield sb.build(
                f"Graph is disconnected. Cannot complete MST: "
                f"{', '.join(missing)} unreachable from {start_id}. "
                f"Spanning tree of the reachable part costs {fmt(mst_cost)}.",
                mst_cost=mst_cost,
                is_final=True,
            )
            return

        _, new_node, edge = best
        mst_edges.add(edge.key)
        sb.set_edge(edge.source, edge.target, EdgeStatus.FINALIZED)
        mst_nodes.append(new_node)
        sb.set_node(new_node, NodeStatus.FINALIZED)
        mst_cost += edge.weight

        # other edges between the new node and the tree can never be used
        for nbr, other in graph.neighbours(new_node):
            if nbr in mst_nodes and other.key not in mst_edges:
                sb.set_edge(other.source, other.target, EdgeStatus.REJECTED)

        yield sb.build(
            f"Added edge {edge.source}-{edge.target} with weight {fmt(edge.weight)} "
            f"to MST. Total cost: {fmt(mst_cost)}.",
            current_node_id=new_node,
            current_edge=(edge.source, edge.target),
            mst_cost=mst_cost,
        )

    sb.mark_nodes(mst_nodes, NodeStatus.FINALIZED)
    yield sb.build(
        f"Prim's algorithm complete. MST has been found with total cost: {fmt(mst_cost)}.",
        mst_cost=mst_cost,
        is_final=True,
    )
