from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from core.config import Config
from core.models import Instance
from offline.mkp_solver import MKPSolver
from offline.models import (
    MODE_DESTROY_REPAIR,
    MODE_GREEDY,
    MODE_INTEGER,
    MODE_LABELS,
    MODE_RANDOM,
    MODE_RELAXATION,
)
from offline.offline_heuristics.destroy_repair import DestroyRepair
from offline.offline_heuristics.greedy_by_value import GreedyByValue
from offline.offline_heuristics.random_first_fit import RandomFirstFit


@dataclass
class RunResult:
    mode: int
    label: str
    value: float
    elapsed: float
    upper_bound: Optional[float]
    status_code: int
    status: str
    seed: Optional[int] = None

    @property
    def writes_solution(self) -> bool:
        """Only the heuristics leave an assignment in the instance."""
        return self.mode >= MODE_GREEDY


StrategyFn = Callable[[Config, Instance, Optional[int]], RunResult]


def _solver_strategy(mode: int) -> StrategyFn:
    def run(cfg: Config, inst: Instance, seed: Optional[int] = None) -> RunResult:
        start = time.perf_counter()
        info = MKPSolver(cfg).solve(inst, mode)
        elapsed = time.perf_counter() - start
        return RunResult(
            mode=mode,
            label=MODE_LABELS[mode],
            value=info.obj_value,
            elapsed=elapsed,
            upper_bound=info.upper_bound,
            status_code=info.status_code,
            status=info.status,
        )

    return run


def _heuristic_strategy(mode: int, factory: Callable[[Config, Optional[int]], object]) -> StrategyFn:
    def run(cfg: Config, inst: Instance, seed: Optional[int] = None) -> RunResult:
        heuristic = factory(cfg, seed)
        start = time.perf_counter()
        info = heuristic.solve(inst)
        elapsed = time.perf_counter() - start
        return RunResult(
            mode=mode,
            label=MODE_LABELS[mode],
            value=inst.total_value(),
            elapsed=elapsed,
            upper_bound=info.upper_bound,
            status_code=info.status_code,
            status="FEASIBLE" if info.feasible else "INFEASIBLE",
            seed=info.seed,
        )

    return run


STRATEGIES: Dict[int, StrategyFn] = {
    MODE_RELAXATION: _solver_strategy(MODE_RELAXATION),
    MODE_INTEGER: _solver_strategy(MODE_INTEGER),
    MODE_GREEDY: _heuristic_strategy(MODE_GREEDY, lambda cfg, seed: GreedyByValue(cfg)),
    MODE_RANDOM: _heuristic_strategy(MODE_RANDOM, lambda cfg, seed: RandomFirstFit(cfg, seed=seed)),
    MODE_DESTROY_REPAIR: _heuristic_strategy(MODE_DESTROY_REPAIR, lambda cfg, seed: DestroyRepair(cfg)),
}


def run_strategy(cfg: Config, inst: Instance, mode: int, seed: Optional[int] = None) -> RunResult:
    """
    Run one strategy on inst. Heuristics mutate inst (pass a copy to keep the
    original); solver modes leave it untouched.
    """
    if mode not in STRATEGIES:
        known = ", ".join(str(m) for m in sorted(STRATEGIES))
        raise KeyError(f"Unknown mode {mode}. Known modes: {known}")
    result = STRATEGIES[mode](cfg, inst, seed)
    if mode == MODE_RANDOM:
        inst.sort_by_num()
    return result
