# tests/conftest.py
import sys
from pathlib import Path

import pytest

# project root on sys.path so `graph`, `algorithms`, `engine` import without installing
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from graph import Graph, Node, Edge
from algorithms import KnapsackItem


@pytest.fixture()
def sample_graph() -> Graph:
    return Graph.sample()


@pytest.fixture()
def disconnected_graph() -> Graph:
    """A–B–C connected, D–E a separate component."""
    return Graph(
        [Node(n) for n in "ABCDE"],
        [Edge("A", "B", 1), Edge("B", "C", 2), Edge("D", "E", 1)],
    )


@pytest.fixture()
def three_items():
    return [
        KnapsackItem("A", 60, 10),
        KnapsackItem("B", 100, 20),
        KnapsackItem("C", 120, 30),
    ]


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()
