"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Node, Edge, edge_key
    from graph import NodeStatus, EdgeStatus
"""

from graph.node  import Node,  NodeStatus
from graph.edge  import Edge,  EdgeStatus, edge_key
from graph.graph import (
    Graph,
    AdjacencyMatrix,
    InvalidGraphError,
    UnknownNodeError,
    SAMPLE_GRAPH,
)

__all__ = [
    "Node",      "NodeStatus",
    "Edge",      "EdgeStatus",  "edge_key",
    "Graph",     "AdjacencyMatrix",
    "InvalidGraphError", "UnknownNodeError",
    "SAMPLE_GRAPH",
]
