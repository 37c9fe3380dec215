"""
fractional_knapsack.py — Fractional Knapsack (greedy)
=======================================================
Items may be split, so the greedy choice is optimal: take items in
descending value/weight order, whole while they fit, then a fraction
of the first one that does not, then nothing.

Items play the role of nodes (each item id gets a NodeStatus); there
are no edges.  Every item is visited: the ones met after the knapsack is
full are explicitly REJECTED rather than silently skipped.

Yields a Step for:
  1. The unsorted items
  2. The sorted items (every item listed with fraction 0)
  3. Each item considered, then its decision (whole / fraction / rejected)
  4. Final: total value

Ratio ties are broken by item id so the order never depends on the
input order.
"""

from dataclasses import dataclass
from typing import Generator, Iterable, List

from algorithms.step import SelectedItem, Step, StepBuilder, fmt
from graph import NodeStatus


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def FractionalKnapsack(items, capacity):",    # 0
    "    sort items by value/weight, descending",  # 1
    "    remaining ← capacity",                    # 2
    "    for item in items:",                      # 3
    "        if item.weight ≤ remaining:",         # 4
    "            take all of item",                # 5
    "        else if remaining > 0:",              # 6
    "            take remaining/item.weight",      # 7
    "        else: reject item",                   # 8
    "    return total value",                      # 9
]


# ---------------------------------------------------------------------------
# Input item
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class KnapsackItem:
    id:     str
    value:  float
    weight: float

    def __post_init__(self):
        if self.weight <= 0:
            raise ValueError(f"Item {self.id!r}: weight must be positive, got {self.weight}")
        if self.value < 0:
            raise ValueError(f"Item {self.id!r}: value must not be negative, got {self.value}")

    @property
    def ratio(self) -> float:
        return self.value / self.weight

    def to_dict(self) -> dict:
        return {"id": self.id, "value": self.value, "weight": self.weight}

    @classmethod
    def from_dict(cls, data: dict) -> "KnapsackItem":
        return cls(id=str(data["id"]), value=data["value"], weight=data["weight"])


DEFAULT_ITEMS: List[KnapsackItem] = [
    KnapsackItem("A", 60, 10),
    KnapsackItem("B", 100, 20),
    KnapsackItem("C", 120, 30),
    KnapsackItem("D", 80, 15),
    KnapsackItem("E", 40, 5),
]
DEFAULT_CAPACITY: float = 50


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def fractional_knapsack(
    items: Iterable[KnapsackItem],
    capacity: float,
) -> Generator[Step, None, None]:
    if capacity < 0:
        raise ValueError(f"Capacity must not be negative, got {capacity}")

    items = list(items)
    sb = StepBuilder(item.id for item in items)
    selected: List[SelectedItem] = []

    yield sb.build("Initialize with all items unsorted", selected_items=selected)

    ranked = sorted(items, key=lambda item: (-item.ratio, item.id))
    yield sb.build(
        "Sort items by value-to-weight ratio (value/weight) in descending order",
        selected_items=[_select(item, 0) for item in ranked],
    )

    remaining   = capacity
    total_value = 0

    for item in ranked:
        sb.set_node(item.id, NodeStatus.PROCESSING)
        yield sb.build(
            f"Considering item {item.id} with value {fmt(item.value)} "
            f"and weight {fmt(item.weight)}",
            current_node_id=item.id,
            selected_items=selected,
            total_value=total_value,
        )

        if remaining >= item.weight:
            remaining   -= item.weight
            total_value += item.value
            sb.set_node(item.id, NodeStatus.FINALIZED)
            selected.append(_select(item, 1))
            description = f"Added entire item {item.id}. Remaining capacity: {fmt(remaining)}"
        elif remaining > 0:
            fraction     = remaining / item.weight
            total_value += item.value * fraction
            remaining    = 0
            sb.set_node(item.id, NodeStatus.FINALIZED)
            selected.append(_select(item, fraction))
            description = (
                f"Added {fraction * 100:.2f}% of item {item.id}. Remaining capacity: 0"
            )
        else:
            sb.set_node(item.id, NodeStatus.REJECTED)
            description = f"Skipped item {item.id} due to insufficient capacity"

        yield sb.build(
            description,
            current_node_id=item.id,
            selected_items=selected,
            total_value=total_value,
        )

    yield sb.build(
        f"Fractional Knapsack solution complete. Total value: {total_value:.2f}",
        selected_items=selected,
        total_value=total_value,
        is_final=True,
    )


def _select(item: KnapsackItem, fraction: float) -> SelectedItem:
    return SelectedItem(
        id=item.id,
        value=item.value,
        weight=item.weight,
        ratio=item.ratio,
        fraction=fraction,
    )
