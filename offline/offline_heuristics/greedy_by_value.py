from __future__ import annotations
import time

from core.models import Instance
from offline.offline_heuristics.core import HeuristicSolutionInfo, build_info, first_fit

def value_order(inst: Instance) -> list[int]:
    """Item positions by decreasing value, ties by increasing item number."""
    return sorted(range(inst.n), key=lambda idx: (-inst.items[idx].value, inst.items[idx].num))

def greedy_assign(inst: Instance) -> float:
    """
    Value-ordered first-fit: each item, most valuable first, goes into the first
    knapsack (0..k-1) that still has room. Mutates inst, keeps the item order.
    """
    z = 0.0
    knapsacks = range(inst.k)
    for idx in value_order(inst):
        if inst.items[idx].assigned:
            continue
        if first_fit(inst, idx, knapsacks) >= 0:
            z += inst.items[idx].value
    return z

class GreedyByValue:
    """Greedy-by-value first-fit heuristic"""

    def __init__(self, cfg):
        self.cfg = cfg

    def solve(self, inst: Instance) -> HeuristicSolutionInfo:
        start_time = time.perf_counter()
        greedy_assign(inst)
        runtime = time.perf_counter() - start_time
        return build_info("Greedy by value", inst, inst.total_value(), runtime)
