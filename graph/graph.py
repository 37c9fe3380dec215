"""
graph.py — Graph Container & Generator
=======================================
Static input for every executor.  Algorithms only ever READ a Graph;
anything they need to mutate (distances, matrices, sets) lives in their
own private working copies.

Responsibilities:
  1. Ordered storage of nodes & edges       (order defines scan order)
  2. Structural validation                   (ids, weights, dangling edges)
  3. Adjacency queries                       (neighbours)
  4. Adjacency-matrix view                   (labels + weight matrix)
  5. Sample / random / text-import factories
  6. Serialisation round-trip                (to_dict / from_dict)

Design decisions:
  - `nodes` and `edges` are lists, not dicts: Floyd-Warshall indexes its
    matrix by node position, and every tie-break that falls back to scan
    order must see the caller's order, not a hash order.
  - A separate adjacency dict  `_adj[node_id] → [edge_index, …]`
    is built once so neighbour queries are O(degree), not O(E).
"""

import math
import random
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set, Tuple

from graph.node import Node
from graph.edge import Edge, edge_key


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
class InvalidGraphError(ValueError):
    """Structural contract violation: bad or duplicate ids, bad weights, dangling edges."""


class UnknownNodeError(InvalidGraphError):
    """A node id (e.g. a start node) that is not part of the graph."""


# ---------------------------------------------------------------------------
# Adjacency-matrix view
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AdjacencyMatrix:
    labels: Tuple[str, ...]
    matrix: Tuple[Tuple[Optional[float], ...], ...]   # None = no edge

    def to_dict(self) -> dict:
        return {"labels": list(self.labels), "matrix": [list(r) for r in self.matrix]}


# The graph every visualization page starts with.
SAMPLE_GRAPH: dict = {
    "nodes": [{"id": nid, "label": nid} for nid in "ABCDEF"],
    "edges": [
        {"source": "A", "target": "B", "weight": 4},
        {"source": "A", "target": "C", "weight": 2},
        {"source": "B", "target": "C", "weight": 1},
        {"source": "B", "target": "D", "weight": 5},
        {"source": "C", "target": "D", "weight": 8},
        {"source": "C", "target": "E", "weight": 10},
        {"source": "D", "target": "E", "weight": 2},
        {"source": "D", "target": "F", "weight": 6},
        {"source": "E", "target": "F", "weight": 3},
    ],
}


def _is_weight(value) -> bool:
    """Finite int or float; bool is an int subclass but not a weight."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


class Graph:
    """
    Attributes:
        nodes : [Node]  – caller's order is preserved
        edges : [Edge]  – caller's order is preserved
        _adj  : {node_id: [edge_index, …]}
    """

    def __init__(self, nodes: Iterable[Node] = (), edges: Iterable[Edge] = ()):
        self.nodes: List[Node] = list(nodes)
        self.edges: List[Edge] = list(edges)
        self._index: Dict[str, int] = {}
        self._adj:   Dict[str, List[int]] = {}
        self._validate()

    # ==================================================================
    # VALIDATION
    # ==================================================================
    def _validate(self) -> None:
        for i, node in enumerate(self.nodes):
            if not isinstance(node.id, str):
                raise InvalidGraphError(f"Node id must be a string, got {node.id!r}")
            if node.id in self._index:
                raise InvalidGraphError(f"Duplicate node id: {node.id!r}")
            self._index[node.id] = i
            self._adj[node.id] = []

        for ei, edge in enumerate(self.edges):
            for end in (edge.source, edge.target):
                if end not in self._index:
                    raise InvalidGraphError(
                        f"Edge {edge.source}-{edge.target} references unknown node {end!r}"
                    )
            if not _is_weight(edge.weight):
                raise InvalidGraphError(
                    f"Edge {edge.source}-{edge.target} needs a finite numeric weight, got {edge.weight!r}"
                )
            self._adj[edge.source].append(ei)
            if edge.target != edge.source:
                self._adj[edge.target].append(ei)

    def require_node(self, node_id: str) -> None:
        """Raise UnknownNodeError unless node_id is part of this graph."""
        if node_id not in self._index:
            raise UnknownNodeError(f"Unknown node: {node_id!r}")

    # ==================================================================
    # LOOKUPS
    # ==================================================================
    def index_of(self, node_id: str) -> int:
        self.require_node(node_id)
        return self._index[node_id]

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: str) -> List[Tuple[str, Edge]]:
        """Return [(neighbour_id, edge)] for every incident edge, in edge order."""
        result = []
        for ei in self._adj.get(node_id, []):
            edge = self.edges[ei]
            result.append((edge.other_end(node_id), edge))
        return result

    def adjacency_matrix(self) -> AdjacencyMatrix:
        """Label/weight matrix in node order. Undirected, so it is symmetric."""
        n = len(self.nodes)
        rows: List[List[Optional[float]]] = [[None] * n for _ in range(n)]
        for edge in self.edges:
            i, j = self._index[edge.source], self._index[edge.target]
            if rows[i][j] is None or edge.weight < rows[i][j]:   # parallel edges: lightest
                rows[i][j] = edge.weight
                rows[j][i] = edge.weight
        return AdjacencyMatrix(
            labels=tuple(node.id for node in self.nodes),
            matrix=tuple(tuple(r) for r in rows),
        )

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        try:
            nodes = [Node.from_dict(nd) for nd in data.get("nodes", [])]
            edges = [Edge.from_dict(ed) for ed in data.get("edges", [])]
        except (AttributeError, KeyError, TypeError) as exc:
            raise InvalidGraphError(f"Malformed graph data: {exc}") from exc
        return cls(nodes, edges)

    # ==================================================================
    # FACTORIES
    # ==================================================================

    # ---------- Sample Graph ----------
    @classmethod
    def sample(cls) -> "Graph":
        """The six-node A–F graph used by every algorithm page."""
        return cls.from_dict(SAMPLE_GRAPH)

    # ---------- Random Graph ----------
    @classmethod
    def generate_random(
        cls,
        num_nodes: int = 8,
        edge_probability: float = 0.3,
        weight_range: Tuple[int, int] = (1, 10),
        seed: Optional[int] = None,
    ) -> "Graph":
        """
        Erdős–Rényi style random graph with a guaranteed backbone path so it
        is always connected.  A private Random instance keeps the global
        random state untouched; the same seed always gives the same graph.
        """
        rng = random.Random(seed)
        ids = [str(i) for i in range(num_nodes)]
        nodes = [Node(nid) for nid in ids]
        edges: List[Edge] = []
        seen: Set[str] = set()

        for i in range(num_nodes):
            for j in range(i + 1, num_nodes):
                if rng.random() < edge_probability:
                    edges.append(Edge(ids[i], ids[j], rng.randint(*weight_range)))
                    seen.add(edge_key(ids[i], ids[j]))

        # backbone: a shuffled path through every node
        shuffled = list(ids)
        rng.shuffle(shuffled)
        for k in range(1, len(shuffled)):
            a, b = shuffled[k - 1], shuffled[k]
            if edge_key(a, b) not in seen:
                edges.append(Edge(a, b, rng.randint(*weight_range)))
                seen.add(edge_key(a, b))

        return cls(nodes, edges)

    # ---------- Import from Adjacency List (text) ----------
    @classmethod
    def from_adjacency_list(cls, text: str) -> "Graph":
        """
        Parse a simple text adjacency list.

        Supported formats (one node per line):
            A: B C D            → A connects to B, C, D  (weight 1)
            A: B(3) C(7)        → A–B weight 3, A–C weight 7
            A -> B(3), C(7)     → alternate arrow syntax

        Undirected: "A: B(3)" and "B: A(3)" describe the same edge, which
        is kept once (first occurrence wins).
        """
        order: List[str] = []
        pairs: List[Tuple[str, str, float]] = []

        def remember(label: str) -> None:
            if label not in order:
                order.append(label)

        for raw in text.strip().splitlines():
            line = raw.strip()
            if not line or line.startswith("#"):
                continue

            for sep in (":", "→", "->"):
                if sep in line:
                    src, rest = line.split(sep, 1)
                    break
            else:
                raise InvalidGraphError(f"Cannot parse adjacency line: {line!r}")

            src = src.strip()
            remember(src)

            for token in rest.replace(",", " ").split():
                if "(" in token and token.endswith(")"):
                    tgt, w_str = token[:-1].split("(", 1)
                    try:
                        w = float(w_str)
                    except ValueError as exc:
                        raise InvalidGraphError(f"Bad weight in {token!r}") from exc
                else:
                    tgt, w = token, 1.0
                remember(tgt)
                pairs.append((src, tgt, w))

        seen: Set[str] = set()
        edges: List[Edge] = []
        for src, tgt, w in pairs:
            key = edge_key(src, tgt)
            if key in seen:
                continue
            seen.add(key)
            edges.append(Edge(src, tgt, w))

        return cls([Node(label) for label in order], edges)

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def has_negative_edges(self) -> bool:
        return any(e.weight < 0 for e in self.edges)

    def node_ids(self) -> List[str]:
        return [n.id for n in self.nodes]

    def edge_keys(self) -> List[str]:
        """Canonical keys in edge order, duplicates (parallel edges) removed."""
        return list(dict.fromkeys(e.key for e in self.edges))

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()})"
