from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np

from core.models import Instance
from offline.models import HEURISTIC_STATUS_CODE

@dataclass
class HeuristicSolutionInfo:
    """Information about heuristic solution"""
    algorithm: str
    runtime: float
    obj_value: float
    feasible: bool
    items_assigned: int
    utilization: float
    status_code: int = HEURISTIC_STATUS_CODE
    upper_bound: Optional[float] = None
    seed: Optional[int] = None

def first_fit(inst: Instance, idx: int, knapsack_order: Iterable[int]) -> int:
    """
    Place item idx into the first knapsack of knapsack_order (0-based indices)
    with enough remaining capacity. Returns the knapsack index or -1.
    """
    for j in knapsack_order:
        if inst.can_fit(idx, j):
            inst.place(idx, j)
            return j
    return -1

def utilization(inst: Instance) -> float:
    caps = np.asarray(inst.capacities, dtype=float)
    if caps.size == 0 or caps.sum() == 0:
        return 0.0
    return float(np.sum(inst.loads()) / caps.sum())

def build_info(algorithm: str, inst: Instance, value: float, runtime: float, **extra) -> HeuristicSolutionInfo:
    return HeuristicSolutionInfo(
        algorithm=algorithm,
        runtime=runtime,
        obj_value=value,
        feasible=all(r >= 0 for r in inst.remaining),
        items_assigned=sum(1 for it in inst.items if it.assigned),
        utilization=utilization(inst),
        **extra,
    )
