# mkp/core/models.py
from __future__ import annotations
import copy
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

KnapsackId = int  # 1..k, 0 = unassigned
ItemId = int      # 1..n

UNASSIGNED: KnapsackId = 0

# ---------------------------
# Items
# ---------------------------

@dataclass
class Item:
    """
    A single item of the instance.
    - num: stable identifier 1..n (used for validation and output labels)
    - value: objective contribution if the item is carried
    - weight: capacity consumption
    - knapsack: 0 while unassigned, else the 1-based knapsack number
    """
    num: ItemId
    value: float
    weight: int
    knapsack: KnapsackId = UNASSIGNED

    @property
    def assigned(self) -> bool:
        return self.knapsack != UNASSIGNED

# ---------------------------
# Instance + mutable capacity state
# ---------------------------

@dataclass
class Instance:
    """
    Full MKP instance.
    - items: list of Item (order may be changed by shuffling heuristics)
    - capacities: original knapsack capacities (length k), never mutated
    - remaining: remaining capacity per knapsack, updated by place/remove
    """
    items: List[Item]
    capacities: Tuple[int, ...]
    remaining: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.capacities = tuple(int(c) for c in self.capacities)
        if not self.remaining:
            self.remaining = list(self.capacities)

    @property
    def n(self) -> int:
        return len(self.items)

    @property
    def k(self) -> int:
        return len(self.capacities)

    def can_fit(self, idx: int, j: int) -> bool:
        """Does item at position idx fit into knapsack index j (0-based)?"""
        return self.items[idx].weight <= self.remaining[j]

    def place(self, idx: int, j: int) -> None:
        """
        Put item at position idx into knapsack index j (0-based).
        Raises ValueError instead of letting a capacity go negative.
        """
        item = self.items[idx]
        if item.assigned:
            raise ValueError(f"Item {item.num} is already in knapsack {item.knapsack}.")
        if not self.can_fit(idx, j):
            raise ValueError(
                f"Item {item.num} (weight {item.weight}) does not fit knapsack {j + 1} "
                f"(remaining {self.remaining[j]})."
            )
        self.remaining[j] -= item.weight
        item.knapsack = j + 1

    def remove(self, idx: int) -> None:
        """Take item at position idx out of its knapsack and restore the capacity."""
        item = self.items[idx]
        if not item.assigned:
            return
        self.remaining[item.knapsack - 1] += item.weight
        item.knapsack = UNASSIGNED

    def reset(self) -> None:
        for item in self.items:
            item.knapsack = UNASSIGNED
        self.remaining = list(self.capacities)

    def total_value(self) -> float:
        return float(sum(item.value for item in self.items if item.assigned))

    def unassigned_indices(self) -> List[int]:
        return [idx for idx, item in enumerate(self.items) if not item.assigned]

    def items_in(self, knapsack: KnapsackId) -> List[ItemId]:
        return [item.num for item in self.items if item.knapsack == knapsack]

    def loads(self) -> List[int]:
        """Used capacity per knapsack, derived from item state."""
        load = [0] * self.k
        for item in self.items:
            if item.assigned:
                load[item.knapsack - 1] += item.weight
        return load

    def sort_by_num(self) -> None:
        """Restore the original item order after a shuffling heuristic."""
        self.items.sort(key=lambda it: it.num)

    def copy(self) -> "Instance":
        return copy.deepcopy(self)

    def assignment_snapshot(self) -> List[KnapsackId]:
        return [item.knapsack for item in self.items]

    def restore_snapshot(self, snapshot: List[KnapsackId]) -> None:
        """Re-apply a list of knapsack numbers taken with assignment_snapshot()."""
        self.reset()
        for idx, knapsack in enumerate(snapshot):
            if knapsack != UNASSIGNED:
                self.place(idx, knapsack - 1)

    def residual(self, indices: Iterable[int]) -> "Instance":
        """
        Sub-instance made of copies of the given (unassigned) items, with the
        current remaining capacities as its capacities. Sized exactly to len(indices).
        """
        items = [
            Item(num=self.items[idx].num, value=self.items[idx].value, weight=self.items[idx].weight)
            for idx in indices
        ]
        return Instance(items=items, capacities=tuple(self.remaining))
