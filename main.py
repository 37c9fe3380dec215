"""
main.py — Graph Algorithm Visualizer Flask App
================================================
JSON API in front of the step-trace engine.  Rendering lives in the
browser; this server only builds graphs, runs executors and moves the
playback cursor.

Routes:
  GET  /api/algorithms           – the executor registry
  GET  /api/graph                – current graph + adjacency matrix
  POST /api/graph                – set graph (sample / random / dict / adj-list)
  POST /api/run                  – run an algorithm, start a fresh playback
  POST /api/playback/<command>   – step_forward, step_back, play, pause,
                                   toggle, reset, tick
  POST /api/playback/seek        – jump to {"index"}
  POST /api/playback/speed       – set {"speed"} (1..100)
  GET  /api/state                – cursor + current step

State management:
  The Flask session cookie carries only an opaque id.  The graph, the run
  parameters and the PlaybackController live in SESSIONS, in this
  process's memory.  Past cfg.max_sessions the least recently used
  session is dropped and its controller closed.
"""

from flask import Flask, request, jsonify, session
import logging
import secrets
import sys
import os
import threading
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import List, Optional

# add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import load_config
from graph import Graph
from algorithms import (
    get_algorithm,
    list_algorithms,
    RunRequest,
    UnknownAlgorithmError,
    KnapsackItem,
    DEFAULT_ITEMS,
    DEFAULT_CAPACITY,
    SINGLE_SOURCE,
    ITEMS,
)
from engine import PlaybackController, Recorder

logger = logging.getLogger(__name__)

cfg = load_config()

app = Flask(__name__)
app.secret_key = cfg.secret_key


# ---------------------------------------------------------------------------
# Per-browser session state (server side)
# ---------------------------------------------------------------------------
@dataclass
class VisualizerSession:
    graph:      Graph                        = field(default_factory=Graph.sample)
    algo_key:   Optional[str]                = None
    controller: Optional[PlaybackController] = None
    metrics:    Optional[dict]               = None
    lock:       threading.Lock               = field(default_factory=threading.Lock)

    def discard_run(self) -> None:
        """Inputs changed: the old trace and its pending tick go away."""
        if self.controller is not None:
            self.controller.close()
        self.controller = None
        self.metrics    = None


class SessionStore:
    """LRU map of sid → VisualizerSession, capped at `max_sessions`."""

    def __init__(self, max_sessions: int):
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, VisualizerSession]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, sid: str) -> VisualizerSession:
        evicted: List[VisualizerSession] = []
        with self._lock:
            vs = self._sessions.get(sid)
            if vs is None:
                vs = self._sessions[sid] = VisualizerSession()
                while len(self._sessions) > self.max_sessions:
                    evicted.append(self._sessions.popitem(last=False)[1])
            else:
                self._sessions.move_to_end(sid)

        # outside the store lock: an evicted session may be mid-request
        for old in evicted:
            with old.lock:
                old.discard_run()
        if evicted:
            logger.debug("Evicted %d session(s); %d live", len(evicted), len(self))
        return vs

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, sid: str) -> bool:
        return sid in self._sessions


SESSIONS = SessionStore(cfg.max_sessions)


def current_session() -> VisualizerSession:
    if "sid" not in session:
        session["sid"] = secrets.token_urlsafe(16)
    return SESSIONS.get(session["sid"])


def body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ApiError("Request body must be a JSON object")
    return data


class ApiError(Exception):
    def __init__(self, message: str, status: int = 400):
        super().__init__(message)
        self.message = message
        self.status  = status


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------
@app.errorhandler(ApiError)
def handle_api_error(e: ApiError):
    logger.warning("Rejected %s %s: %s", request.method, request.path, e.message)
    return jsonify({"error": e.message}), e.status


@app.errorhandler(UnknownAlgorithmError)
def handle_unknown_algorithm(e: UnknownAlgorithmError):
    message = f"Unknown algorithm: {e.args[0]}"
    logger.warning("Rejected %s %s: %s", request.method, request.path, message)
    return jsonify({"error": message}), 404


@app.errorhandler(ValueError)
def handle_value_error(e: ValueError):
    # InvalidGraphError / UnknownNodeError land here too
    logger.warning("Rejected %s %s: %s", request.method, request.path, e)
    return jsonify({"error": str(e)}), 400


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def graph_payload(g: Graph) -> dict:
    return {
        "graph":            g.to_dict(),
        "node_ids":         g.node_ids(),
        "adjacency_matrix": g.adjacency_matrix().to_dict(),
        "has_negative_edges": g.has_negative_edges(),
    }


def state_payload(vs: VisualizerSession) -> dict:
    ctrl = vs.controller
    if ctrl is None:
        return {
            "algo":        vs.algo_key,
            "index":       0,
            "length":      0,
            "playing":     False,
            "state":       "idle",
            "speed":       cfg.default_speed,
            "delay_ms":    None,
            "speed_label": None,
            "step":        None,
        }
    step = ctrl.current_step
    return {
        "algo": vs.algo_key,
        **ctrl.to_dict(),
        "seconds_until_tick": ctrl.seconds_until_tick(),
        "step": step.to_dict() if step is not None else None,
    }


def require_controller(vs: VisualizerSession) -> PlaybackController:
    if vs.controller is None:
        raise ApiError("No run in progress; POST /api/run first")
    return vs.controller


def parse_items(raw) -> List[KnapsackItem]:
    if raw is None:
        return list(DEFAULT_ITEMS)
    if not isinstance(raw, list):
        raise ApiError("'items' must be a list of {id, value, weight}")
    if len(raw) > cfg.max_items:
        raise ApiError(f"At most {cfg.max_items} items allowed, got {len(raw)}")
    try:
        return [KnapsackItem.from_dict(item) for item in raw]
    except (KeyError, TypeError) as e:
        raise ApiError(f"Malformed item: {e}") from e


# ---------------------------------------------------------------------------
# API: Registry
# ---------------------------------------------------------------------------
@app.route("/api/algorithms", methods=["GET"])
def api_algorithms():
    return jsonify({"algorithms": [info.to_dict() for info in list_algorithms()]})


# ---------------------------------------------------------------------------
# API: Graph
# ---------------------------------------------------------------------------
@app.route("/api/graph", methods=["GET"])
def api_graph_get():
    vs = current_session()
    with vs.lock:
        return jsonify(graph_payload(vs.graph))


@app.route("/api/graph", methods=["POST"])
def api_graph_set():
    data = body()
    mode = data.get("mode", "sample")

    if mode == "sample":
        g = Graph.sample()
    elif mode == "random":
        try:
            num_nodes = int(data.get("nodes", 8))
            prob      = float(data.get("prob", 0.3))
            weights   = (int(data.get("min_weight", 1)), int(data.get("max_weight", 10)))
        except (TypeError, ValueError) as e:
            raise ApiError(f"Bad random-graph parameter: {e}") from e
        if num_nodes > cfg.max_nodes:
            raise ApiError(f"At most {cfg.max_nodes} nodes allowed, got {num_nodes}")
        if weights[0] > weights[1]:
            raise ApiError("'min_weight' must not exceed 'max_weight'")
        seed = data.get("seed")
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
            raise ApiError("'seed' must be an integer")
        g = Graph.generate_random(
            num_nodes=num_nodes,
            edge_probability=prob,
            weight_range=weights,
            seed=seed,
        )
    elif mode == "dict":
        g = Graph.from_dict(data.get("graph") or {})
    elif mode == "adj-list":
        text = data.get("text", "")
        if not isinstance(text, str):
            raise ApiError("'text' must be a string")
        g = Graph.from_adjacency_list(text)
    else:
        raise ApiError(f"Unknown mode: {mode}")

    if g.node_count() > cfg.max_nodes:
        raise ApiError(f"At most {cfg.max_nodes} nodes allowed, got {g.node_count()}")

    vs = current_session()
    with vs.lock:
        vs.graph = g
        vs.discard_run()
    logger.info("Graph set (%s): %d nodes, %d edges", mode, g.node_count(), g.edge_count())
    return jsonify(graph_payload(g))


# ---------------------------------------------------------------------------
# API: Run Algorithm
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    data = body()
    algo = data.get("algo")
    if algo is not None and not isinstance(algo, str):
        raise ApiError("'algo' must be a string")

    vs   = current_session()
    info = get_algorithm(algo or vs.algo_key or "dijkstra")

    with vs.lock:
        graph    = vs.graph
        start_id = data.get("start")
        if start_id is not None:
            start_id = str(start_id)
        if info.input_kind == SINGLE_SOURCE and start_id is None:
            if not graph.node_ids():
                raise ApiError("Graph has no nodes")
            start_id = graph.node_ids()[0]

        items    = parse_items(data.get("items")) if info.input_kind == ITEMS else []
        capacity = data.get("capacity", DEFAULT_CAPACITY)
        if capacity is not None and (isinstance(capacity, bool) or not isinstance(capacity, (int, float))):
            raise ApiError("'capacity' must be a number")

        run_request = RunRequest(
            graph=graph,
            start_id=start_id,
            items=items,
            capacity=capacity,
        )
        recorder = Recorder(info)

        def compute():
            return recorder.record(run_request).steps

        # a bad start node or bad items raise here, before the old run is touched
        controller = PlaybackController(compute, speed=cfg.default_speed)

        vs.discard_run()
        vs.algo_key   = info.key
        vs.controller = controller
        vs.metrics    = recorder.last.metrics.to_dict()

        payload = state_payload(vs)
        payload["total_steps"] = controller.length
        payload["metrics"]     = vs.metrics
        payload["pseudocode"]  = list(info.pseudocode)
        return jsonify(payload)


# ---------------------------------------------------------------------------
# API: Playback
# ---------------------------------------------------------------------------
@app.route("/api/playback/seek", methods=["POST"])
def api_playback_seek():
    index = body().get("index")
    if isinstance(index, bool) or not isinstance(index, int):
        raise ApiError("'index' must be an integer")

    vs = current_session()
    with vs.lock:
        moved = require_controller(vs).seek(index)
        return jsonify({"moved": moved, **state_payload(vs)})


@app.route("/api/playback/speed", methods=["POST"])
def api_playback_speed():
    speed = body().get("speed")

    vs = current_session()
    with vs.lock:
        require_controller(vs).set_speed(speed)
        return jsonify(state_payload(vs))


PLAYBACK_COMMANDS = {
    "step_forward": PlaybackController.step_forward,
    "step_back":    PlaybackController.step_back,
    "play":         PlaybackController.play,
    "pause":        PlaybackController.pause,
    "toggle":       PlaybackController.toggle_play,
    "reset":        PlaybackController.reset,
    "tick":         PlaybackController.tick,
}


@app.route("/api/playback/<command>", methods=["POST"])
def api_playback(command: str):
    action = PLAYBACK_COMMANDS.get(command)
    if action is None:
        raise ApiError(f"Unknown playback command: {command}", status=404)

    vs = current_session()
    with vs.lock:
        ctrl   = require_controller(vs)
        before = ctrl.index
        action(ctrl)
        return jsonify({"moved": ctrl.index != before, **state_payload(vs)})


# ---------------------------------------------------------------------------
# API: State
# ---------------------------------------------------------------------------
@app.route("/api/state", methods=["GET"])
def api_state():
    vs = current_session()
    with vs.lock:
        payload = state_payload(vs)
        payload["metrics"] = vs.metrics
        return jsonify(payload)


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Graph Algorithm Visualizer on http://%s:%d", cfg.host, cfg.port)
    app.run(debug=cfg.debug, host=cfg.host, port=cfg.port)
