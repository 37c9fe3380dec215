import pytest

from algorithms.prims_mst import prims_mst
from graph import Graph, Node, Edge, NodeStatus, EdgeStatus, UnknownNodeError

from _graph_oracles import kruskal_weight


def finalized_edges(step):
    return {k for k, v in step.edge_statuses.items() if v == EdgeStatus.FINALIZED}


def weight_of(graph, keys):
    return sum(e.weight for e in graph.edges if e.key in keys)


def test_sample_mst_weight(sample_graph):
    final = list(prims_mst(sample_graph, "A"))[-1]
    edges = finalized_edges(final)

    assert len(edges) == sample_graph.node_count() - 1
    assert edges == {"A-C", "B-C", "B-D", "D-E", "E-F"}
    assert weight_of(sample_graph, edges) == kruskal_weight(sample_graph) == 13
    assert final.mst_cost == 13
    assert final.is_final


@pytest.mark.parametrize("seed", range(6))
def test_random_graph_mst_weight(seed):
    g = Graph.generate_random(num_nodes=8, edge_probability=0.4, seed=seed)
    final = list(prims_mst(g, g.node_ids()[0]))[-1]
    edges = finalized_edges(final)
    assert len(edges) == g.node_count() - 1
    assert final.mst_cost == kruskal_weight(g)


def test_running_cost_on_added_steps(sample_graph):
    added = [s for s in prims_mst(sample_graph, "A") if s.description.startswith("Added edge")]
    assert [s.mst_cost for s in added] == [2, 3, 8, 10, 13]
    assert [s.current_node_id for s in added] == ["C", "B", "D", "E", "F"]


def test_edges_inside_the_tree_are_rejected(sample_graph):
    steps = list(prims_mst(sample_graph, "A"))
    final = steps[-1]
    rejected = {k for k, v in final.edge_statuses.items() if v == EdgeStatus.REJECTED}
    assert rejected == {"A-B", "C-D", "C-E", "D-F"}

    # A-B is rejected on the very step that adds B
    adds_b = next(s for s in steps if s.description.startswith("Added edge B-C"))
    assert adds_b.edge_statuses["A-B"] == EdgeStatus.REJECTED


def test_new_minimum_follows_each_smaller_candidate(sample_graph):
    steps = list(prims_mst(sample_graph, "A"))
    # first round scans A-B (4) then A-C (2): both become the running minimum
    minima = [s.current_edge for s in steps[:6] if "current minimum" in s.description]
    assert minima == [("A", "B"), ("A", "C")]


def test_weight_ties_go_to_first_scanned_edge():
    g = Graph(
        [Node("A"), Node("B"), Node("C")],
        [Edge("A", "B", 1), Edge("A", "C", 1), Edge("B", "C", 1)],
    )
    first_added = next(s for s in prims_mst(g, "A") if s.description.startswith("Added edge"))
    assert first_added.current_edge == ("A", "B")


def test_disconnected_graph_stops_with_terminal_step(disconnected_graph):
    steps = list(prims_mst(disconnected_graph, "A"))
    final = steps[-1]

    assert final.is_final
    assert "disconnected" in final.description
    assert final.mst_cost == 3
    assert {n for n, s in final.node_statuses.items() if s == NodeStatus.FINALIZED} == {"A", "B", "C"}
    assert final.node_statuses["D"] == NodeStatus.UNVISITED
    assert sum(1 for s in steps if s.is_final) == 1


def test_unknown_start_node(sample_graph):
    with pytest.raises(UnknownNodeError):
        list(prims_mst(sample_graph, "Q"))


def test_single_node_graph():
    steps = list(prims_mst(Graph([Node("A")], []), "A"))
    assert len(steps) == 2
    assert steps[-1].mst_cost == 0
    assert steps[-1].node_statuses["A"] == NodeStatus.FINALIZED
