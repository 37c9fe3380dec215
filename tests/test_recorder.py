import json
import logging

from algorithms import get_algorithm, RunRequest, DEFAULT_ITEMS
from engine import Recorder
from graph import Graph, Node, Edge


def test_prim_metrics(sample_graph):
    run = Recorder(get_algorithm("prim")).record(RunRequest(graph=sample_graph, start_id="A"))
    m = run.metrics

    assert m.algo_key == "prim"
    assert m.algo_label == "Prim's MST"
    assert m.total_steps == len(run.steps)
    assert m.mst_cost == 13
    assert m.edges_finalized == 5
    assert m.nodes_finalized == 6
    assert m.distance_map is None
    assert m.wall_time_ms >= 0


def test_bellman_ford_negative_cycle_metric():
    g = Graph([Node("A"), Node("B")], [Edge("A", "B", -1)])
    m = Recorder(get_algorithm("bellman_ford")).record(RunRequest(graph=g, start_id="A")).metrics
    assert m.negative_cycle_detected is True


def test_knapsack_metrics():
    m = Recorder(get_algorithm("fractional_knapsack")).record(
        RunRequest(items=DEFAULT_ITEMS, capacity=50)
    ).metrics
    assert m.total_value == 280
    assert m.edges_finalized == 0


def test_export_is_json_serialisable(disconnected_graph):
    rec = Recorder(get_algorithm("dijkstra"))
    run = rec.record(RunRequest(graph=disconnected_graph, start_id="A"))
    exported = json.loads(json.dumps(run.export()))

    assert exported["algo_key"] == "dijkstra"
    assert exported["start_id"] == "A"
    assert exported["graph"] == disconnected_graph.to_dict()
    assert len(exported["steps"]) == run.metrics.total_steps
    # unreachable nodes: infinity is exported as null
    assert exported["metrics"]["distance_map"]["D"] is None
    assert exported["steps"][-1]["distance_map"]["E"] is None
    assert rec.last is run


def test_record_logs_summary(sample_graph, caplog):
    with caplog.at_level(logging.INFO, logger="engine.recorder"):
        Recorder(get_algorithm("floyd_warshall")).record(RunRequest(graph=sample_graph))
    assert "Recorded floyd_warshall: 128 steps" in caplog.text
