from __future__ import annotations
import logging
import time
from typing import Optional, Tuple

import numpy as np

from core.logging_setup import LOGGER_NAME
from core.models import Instance
from offline.mkp_solver import MKPSolver
from offline.models import SolutionInfo, MODE_RELAXATION, MODE_INTEGER
from offline.offline_heuristics.core import HeuristicSolutionInfo, build_info, first_fit
from offline.offline_heuristics.greedy_by_value import greedy_assign

logger = logging.getLogger(LOGGER_NAME)

def destroy(inst: Instance, x: np.ndarray, eps: float) -> Tuple[int, float]:
    """
    Unassign every item whose LP value for its current knapsack is below 1.
    Returns (number of removed items, removed value).
    """
    removed, lost = 0, 0.0
    for idx, item in enumerate(inst.items):
        if item.assigned and x[idx, item.knapsack - 1] < 1.0 - eps:
            lost += item.value
            inst.remove(idx)
            removed += 1
    return removed, lost

def repair(inst: Instance) -> Tuple[int, float]:
    """First-fit re-insertion of unassigned items, scanning knapsacks k-1..0."""
    added, gained = 0, 0.0
    knapsacks = range(inst.k - 1, -1, -1)
    for idx in inst.unassigned_indices():
        if first_fit(inst, idx, knapsacks) >= 0:
            added += 1
            gained += inst.items[idx].value
    return added, gained

def solve_residual(inst: Instance, solver: MKPSolver) -> Optional[SolutionInfo]:
    """
    Solve the still-unassigned items exactly against the remaining capacities
    and commit whatever the MIP selected. Nothing is committed when the solve
    has no incumbent.
    """
    free = inst.unassigned_indices()
    if not free:
        return None
    residual = inst.residual(free)
    info = solver.solve(residual, MODE_INTEGER)
    if not info.has_solution:
        logger.warning("Residual solve ended with %s, keeping current assignment.", info.status)
        return info
    for r, idx in enumerate(free):
        chosen = np.flatnonzero(info.assignments[r] > 0.5)
        if chosen.size:
            inst.place(idx, int(chosen[0]))
    return info

def improve(inst: Instance, solver: MKPSolver, eps: float = 1e-6) -> Tuple[float, Optional[SolutionInfo], SolutionInfo]:
    """
    LP-guided destroy and repair on top of the greedy assignment.

    Greedy placements that the LP relaxation does not fully support are undone,
    a reverse first-fit pass refills the knapsacks, unsupported placements are
    undone again and the remaining items are handed to the exact solver.
    Never ends below the greedy value: the greedy assignment is restored if it was better.

    Returns (value, residual SolutionInfo or None, LP SolutionInfo). Mutates inst.
    """
    lp = solver.solve(inst, MODE_RELAXATION)
    x = lp.assignments
    if not lp.has_solution:
        logger.warning("LP relaxation ended with %s, every greedy placement will be destroyed.", lp.status)

    z = greedy_assign(inst)
    greedy_value = inst.total_value()
    greedy_snapshot = inst.assignment_snapshot()

    removed, lost = destroy(inst, x, eps)
    z -= lost
    added, gained = repair(inst)
    z += gained
    removed_again, lost = destroy(inst, x, eps)
    z -= lost
    logger.info(
        "Destroy/repair: greedy=%.4f destroyed=%d repaired=%d destroyed_again=%d residual=%d",
        greedy_value, removed, added, removed_again, len(inst.unassigned_indices()),
    )

    residual_info = solve_residual(inst, solver)
    if residual_info is not None and residual_info.has_solution:
        z += residual_info.obj_value

    value = inst.total_value()
    if not np.isclose(z, value, atol=1e-6):
        logger.debug("Running value %.6f drifted from assignment value %.6f", z, value)

    if value < greedy_value:
        logger.info("Destroy/repair value %.4f below greedy %.4f, restoring greedy.", value, greedy_value)
        inst.restore_snapshot(greedy_snapshot)
        value = inst.total_value()
    return value, residual_info, lp

class DestroyRepair:
    """Greedy + LP-guided destroy/repair + exact residual solve"""

    def __init__(self, cfg, solver: Optional[MKPSolver] = None):
        self.cfg = cfg
        self.solver = solver if solver is not None else MKPSolver(cfg)

    def solve(self, inst: Instance) -> HeuristicSolutionInfo:
        start_time = time.perf_counter()
        value, residual_info, lp = improve(inst, self.solver, eps=self.cfg.heuristics.epsilon)
        runtime = time.perf_counter() - start_time
        extra = {"upper_bound": lp.upper_bound if lp.has_solution else None}
        if residual_info is not None:
            extra["status_code"] = residual_info.status_code
        else:
            extra["status_code"] = lp.status_code
        return build_info("Destroy/repair", inst, value, runtime, **extra)
