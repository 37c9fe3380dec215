import pytest

from graph import (
    Graph,
    Node,
    Edge,
    edge_key,
    InvalidGraphError,
    UnknownNodeError,
    SAMPLE_GRAPH,
)


def test_edge_key_is_direction_independent():
    assert edge_key("B", "A") == "A-B"
    assert edge_key("A", "B") == "A-B"
    assert Edge("D", "C", 8).key == "C-D"


def test_edge_helpers():
    e = Edge("A", "B", 4)
    assert e.other_end("A") == "B"
    assert e.other_end("Z") is None


def test_node_label_defaults_to_id():
    assert Node("A").label == "A"
    assert Node("A", "Alpha").label == "Alpha"


def test_sample_graph_shape(sample_graph):
    assert sample_graph.node_ids() == list("ABCDEF")
    assert sample_graph.edge_count() == len(SAMPLE_GRAPH["edges"]) == 9
    assert not sample_graph.has_negative_edges()


def test_neighbours_follow_edge_order(sample_graph):
    got = [(nbr, edge.weight) for nbr, edge in sample_graph.neighbours("C")]
    assert got == [("A", 2), ("B", 1), ("D", 8), ("E", 10)]


def test_duplicate_node_ids_rejected():
    with pytest.raises(InvalidGraphError, match="Duplicate"):
        Graph([Node("A"), Node("A")], [])


def test_dangling_edge_rejected():
    with pytest.raises(InvalidGraphError, match="unknown node"):
        Graph([Node("A")], [Edge("A", "B", 1)])


def test_from_dict_coerces_ids_to_strings():
    g = Graph.from_dict({
        "nodes": [{"id": 1}, {"id": 2, "label": 20}],
        "edges": [{"source": 1, "target": 2, "weight": 3}],
    })
    assert g.node_ids() == ["1", "2"]
    assert g.nodes[1].label == "20"
    assert g.edge_keys() == ["1-2"]


def test_non_string_node_id_rejected():
    with pytest.raises(InvalidGraphError, match="string"):
        Graph([Node(1)], [])


@pytest.mark.parametrize("weight", ["x", None, True, [1], float("inf"), float("nan")])
def test_bad_weight_rejected(weight):
    with pytest.raises(InvalidGraphError, match="weight"):
        Graph.from_dict({
            "nodes": [{"id": "A"}, {"id": "B"}],
            "edges": [{"source": "A", "target": "B", "weight": weight}],
        })


def test_require_node(sample_graph):
    sample_graph.require_node("A")
    with pytest.raises(UnknownNodeError):
        sample_graph.require_node("Z")
    # still a ValueError for callers that only care about bad input
    with pytest.raises(ValueError):
        sample_graph.index_of("Z")


def test_adjacency_matrix_is_symmetric(sample_graph):
    adj = sample_graph.adjacency_matrix()
    assert adj.labels == tuple("ABCDEF")
    n = len(adj.labels)
    for i in range(n):
        for j in range(n):
            assert adj.matrix[i][j] == adj.matrix[j][i]
    assert adj.matrix[0][1] == 4        # A-B
    assert adj.matrix[0][3] is None     # no A-D edge
    assert adj.to_dict()["labels"] == list("ABCDEF")


def test_dict_round_trip(sample_graph):
    again = Graph.from_dict(sample_graph.to_dict())
    assert again.to_dict() == sample_graph.to_dict()


@pytest.mark.parametrize("bad", [
    {"nodes": [{"label": "no id"}]},
    {"nodes": [{"id": "A"}], "edges": [{"source": "A"}]},
    {"nodes": "not a list of dicts"},
])
def test_from_dict_malformed(bad):
    with pytest.raises(InvalidGraphError):
        Graph.from_dict(bad)


def test_random_graph_is_seeded_and_connected():
    g1 = Graph.generate_random(num_nodes=10, edge_probability=0.2, seed=7)
    g2 = Graph.generate_random(num_nodes=10, edge_probability=0.2, seed=7)
    assert g1.to_dict() == g2.to_dict()

    # connected: flood fill from the first node reaches everything
    seen, todo = set(), [g1.node_ids()[0]]
    while todo:
        cur = todo.pop()
        if cur in seen:
            continue
        seen.add(cur)
        todo.extend(nbr for nbr, _ in g1.neighbours(cur))
    assert seen == set(g1.node_ids())

    # no parallel edges
    assert len(g1.edge_keys()) == g1.edge_count()


def test_random_graph_weights_in_range():
    g = Graph.generate_random(num_nodes=8, edge_probability=0.5, weight_range=(3, 4), seed=1)
    assert all(3 <= e.weight <= 4 for e in g.edges)


def test_from_adjacency_list_dedups_undirected_edges():
    g = Graph.from_adjacency_list("""
        # comment
        A: B(4) C(2)
        B: A(4), C(1)
        C -> D
    """)
    assert g.node_ids() == ["A", "B", "C", "D"]
    assert g.edge_keys() == ["A-B", "A-C", "B-C", "C-D"]
    assert [e.weight for e in g.edges] == [4.0, 2.0, 1.0, 1.0]


def test_from_adjacency_list_errors():
    with pytest.raises(InvalidGraphError, match="Cannot parse"):
        Graph.from_adjacency_list("A B C")
    with pytest.raises(InvalidGraphError, match="Bad weight"):
        Graph.from_adjacency_list("A: B(x)")


def test_edge_keys_drop_parallel_edges():
    g = Graph([Node("A"), Node("B")], [Edge("A", "B", 5), Edge("B", "A", 2)])
    assert g.edge_keys() == ["A-B"]
    assert g.edge_count() == 2


def test_has_negative_edges():
    g = Graph([Node("A"), Node("B")], [Edge("A", "B", -1)])
    assert g.has_negative_edges()
