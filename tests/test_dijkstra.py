import math

import pytest

from algorithms.dijkstra import dijkstra
from graph import Graph, Node, Edge, NodeStatus, EdgeStatus, UnknownNodeError

from _graph_oracles import brute_force_distances


def test_sample_graph_distances(sample_graph):
    final = list(dijkstra(sample_graph, "A"))[-1]
    assert final.distance_map == {"A": 0, "B": 3, "C": 2, "D": 8, "E": 10, "F": 13}
    assert final.distance_map == brute_force_distances(sample_graph, "A")


@pytest.mark.parametrize("seed", range(5))
def test_random_graphs_match_brute_force(seed):
    g = Graph.generate_random(num_nodes=7, edge_probability=0.3, seed=seed)
    final = list(dijkstra(g, "0"))[-1]
    assert final.distance_map == brute_force_distances(g, "0")


def test_first_step_initialises(sample_graph):
    first = next(dijkstra(sample_graph, "A"))
    assert first.current_node_id == "A"
    assert first.node_statuses["A"] == NodeStatus.CURRENT
    assert first.distance_map["A"] == 0
    assert all(first.distance_map[n] == math.inf for n in "BCDEF")


def test_trace_shape(sample_graph):
    steps = list(dijkstra(sample_graph, "A"))
    assert len(steps) == 26
    selected = [s.current_node_id for s in steps if s.description.startswith("Selected")]
    assert selected == ["A", "C", "B", "D", "E", "F"]
    assert [s.step_number for s in steps] == list(range(len(steps)))


def test_final_step_marks_shortest_path_tree(sample_graph):
    final = list(dijkstra(sample_graph, "A"))[-1]
    assert final.is_final
    assert set(final.node_statuses.values()) == {NodeStatus.FINALIZED}

    finalized = {k for k, v in final.edge_statuses.items() if v == EdgeStatus.FINALIZED}
    rejected  = {k for k, v in final.edge_statuses.items() if v == EdgeStatus.REJECTED}
    assert finalized == {"A-C", "B-C", "B-D", "D-E", "E-F"}
    assert rejected  == {"A-B", "C-D", "C-E", "D-F"}


def test_equal_distances_break_ties_by_id():
    g = Graph(
        [Node("A"), Node("C"), Node("B")],
        [Edge("A", "C", 1), Edge("A", "B", 1)],
    )
    selected = [
        s.current_node_id for s in dijkstra(g, "A") if s.description.startswith("Selected")
    ]
    assert selected == ["A", "B", "C"]


def test_failed_relaxation_rejects_edge():
    g = Graph(
        [Node("A"), Node("B"), Node("C")],
        [Edge("A", "B", 1), Edge("A", "C", 1), Edge("B", "C", 5)],
    )
    steps = list(dijkstra(g, "A"))
    not_better = [s for s in steps if "is not better" in s.description]
    assert len(not_better) == 1
    assert not_better[0].current_edge == ("B", "C")
    assert not_better[0].edge_statuses["B-C"] == EdgeStatus.REJECTED
    assert steps[-1].edge_statuses["B-C"] == EdgeStatus.REJECTED


def test_lighter_parallel_edge_keeps_edge_in_play():
    g = Graph([Node("A"), Node("B")], [Edge("A", "B", 5), Edge("A", "B", 2)])
    steps = list(dijkstra(g, "A"))
    updates = [s for s in steps if s.description.startswith("Updated distance to B")]

    assert len(updates) == 2
    assert updates[-1].distance_map["B"] == 2
    assert all(s.edge_statuses["A-B"] == EdgeStatus.PROCESSING for s in updates)
    assert steps[-1].edge_statuses["A-B"] == EdgeStatus.FINALIZED


def test_disconnected_graph_reports_unreachable(disconnected_graph):
    steps = list(dijkstra(disconnected_graph, "A"))
    notice, final = steps[-2], steps[-1]

    assert "disconnected" in notice.description
    assert "D, E" in notice.description
    assert final.distance_map["D"] == math.inf
    assert final.to_dict()["distance_map"]["E"] is None
    assert final.is_final


def test_unknown_start_node(sample_graph):
    with pytest.raises(UnknownNodeError):
        list(dijkstra(sample_graph, "Z"))


def test_single_node_graph():
    steps = list(dijkstra(Graph([Node("A")], []), "A"))
    assert steps[-1].distance_map == {"A": 0}
    assert steps[-1].is_final
