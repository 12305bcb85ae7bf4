from __future__ import annotations
import time
from typing import Optional

import numpy as np

from core.general_utils import make_rng, resolve_seed
from core.models import Instance
from offline.offline_heuristics.core import HeuristicSolutionInfo, build_info, first_fit

def random_assign(inst: Instance, rng: np.random.Generator) -> float:
    """
    Randomized first-fit.

    Draws a uniformly random position among the items not yet drawn, tries the
    knapsacks 0..k-1 in order, then swaps the drawn item behind the remaining
    block so it cannot be drawn again. The item order of inst is changed;
    call inst.sort_by_num() to get the original order back.
    """
    z = 0.0
    knapsacks = range(inst.k)
    remaining = inst.n
    while remaining > 0:
        idx = int(rng.integers(remaining))
        if not inst.items[idx].assigned and first_fit(inst, idx, knapsacks) >= 0:
            z += inst.items[idx].value
        last = remaining - 1
        inst.items[idx], inst.items[last] = inst.items[last], inst.items[idx]
        remaining -= 1
    return z

class RandomFirstFit:
    """Random-order first-fit heuristic"""

    def __init__(self, cfg, seed: Optional[int] = None):
        self.cfg = cfg
        self.seed = cfg.heuristics.seed if seed is None else seed

    def solve(self, inst: Instance) -> HeuristicSolutionInfo:
        seed = resolve_seed(self.seed)
        rng = make_rng(seed)
        start_time = time.perf_counter()
        random_assign(inst, rng)
        runtime = time.perf_counter() - start_time
        return build_info("Random first-fit", inst, inst.total_value(), runtime, seed=seed)
