"""
recorder.py — Run Recorder & Analytics
========================================
Runs one algorithm to completion, keeps the whole trace, and computes
the metrics the Analytics panel shows.

Usage:
    rec = Recorder(get_algorithm("prim"))
    run = rec.record(RunRequest(graph=g, start_id="A"))
    run.metrics.mst_cost             # the analytics card
    run.export()                     # JSON-ready snapshot for save/replay
"""

import logging
import math
import time
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from algorithms import AlgoInfo, RunRequest
from algorithms.step import Step
from graph import NodeStatus, EdgeStatus

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:                str   = ""
    algo_label:              str   = ""
    total_steps:             int   = 0          # number of Steps in the trace
    wall_time_ms:            float = 0.0        # wall-clock time to run to completion
    nodes_finalized:         int   = 0          # on the final step
    edges_finalized:         int   = 0          # on the final step
    # copied from the final step; None where the algorithm has no such field
    distance_map:            Optional[Dict[str, float]] = None
    mst_cost:                Optional[float]            = None
    total_value:             Optional[float]            = None
    negative_cycle_detected: Optional[bool]             = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if self.distance_map is not None:
            data["distance_map"] = {
                k: (None if math.isinf(v) else v) for k, v in self.distance_map.items()
            }
        return data


# ---------------------------------------------------------------------------
# RecordedRun — one finished trace + its metrics
# ---------------------------------------------------------------------------
@dataclass
class RecordedRun:
    info:    AlgoInfo
    request: RunRequest
    steps:   List[Step]
    metrics: RunMetrics

    def export(self) -> Dict[str, Any]:
        """Serialisable snapshot: inputs, metrics and every step."""
        req = self.request
        return {
            "algo_key": self.info.key,
            "start_id": req.start_id,
            "graph":    req.graph.to_dict() if req.graph is not None else None,
            "items":    [item.to_dict() for item in req.items],
            "capacity": req.capacity,
            "metrics":  self.metrics.to_dict(),
            "steps":    [s.to_dict() for s in self.steps],
        }


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        info : The AlgoInfo whose executor this recorder runs.
        last : The most recent RecordedRun (None before the first record()).
    """

    def __init__(self, info: AlgoInfo):
        self.info: AlgoInfo               = info
        self.last: Optional[RecordedRun]  = None

    def record(self, request: RunRequest) -> RecordedRun:
        """Exhaust the executor, keep every step, compute metrics."""
        start   = time.monotonic()
        steps   = self.info.run(request)
        wall_ms = (time.monotonic() - start) * 1000

        metrics = self._compute_metrics(steps, wall_ms)
        logger.info(
            "Recorded %s: %d steps in %.2f ms",
            self.info.key, metrics.total_steps, metrics.wall_time_ms,
        )
        self.last = RecordedRun(info=self.info, request=request, steps=steps, metrics=metrics)
        return self.last

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, steps: List[Step], wall_ms: float) -> RunMetrics:
        last = steps[-1] if steps else None
        if last is None:
            return RunMetrics(
                algo_key=self.info.key,
                algo_label=self.info.label,
                wall_time_ms=round(wall_ms, 2),
            )

        return RunMetrics(
            algo_key=self.info.key,
            algo_label=self.info.label,
            total_steps=len(steps),
            wall_time_ms=round(wall_ms, 2),
            nodes_finalized=sum(
                1 for s in last.node_statuses.values() if s == NodeStatus.FINALIZED
            ),
            edges_finalized=sum(
                1 for s in last.edge_statuses.values() if s == EdgeStatus.FINALIZED
            ),
            distance_map=dict(last.distance_map) if last.distance_map is not None else None,
            mst_cost=last.mst_cost,
            total_value=last.total_value,
            negative_cycle_detected=last.negative_cycle_detected,
        )
