from __future__ import annotations
from typing import Dict, Tuple, Optional
import logging
import numpy as np

import gurobipy as gp
from gurobipy import GRB

from core.config import Config
from core.logging_setup import LOGGER_NAME
from core.models import Instance

from offline.models import SolutionInfo, _status_name, MODE_RELAXATION, MODE_INTEGER, MODE_LABELS

logger = logging.getLogger(LOGGER_NAME)

class MKPSolver:
    """
    LP/MIP model of the multiple-knapsack problem, solved with Gurobi.

    Model:
    - x[i, j] in [0, 1] for item i (position in inst.items) and knapsack j (0-based)
    - capacity rows:   sum_i w_i x[i, j] <= C_j   (one per knapsack)
    - uniqueness rows: sum_j x[i, j] <= 1         (one per item)
    - objective: max sum_ij v_i x[i, j]

    MODE_RELAXATION solves the LP only. MODE_INTEGER solves the LP first (its
    objective becomes the upper bound), switches x to binary and runs
    branch-and-bound under the configured time limit.
    The instance passed in is never mutated; the Gurobi model is disposed after each call.
    """

    def __init__(
        self,
        cfg: Config,
        *,
        time_limit: Optional[float] = None,
        mip_gap: Optional[float] = None,
        threads: Optional[int] = None,
        log_to_console: Optional[bool] = None,
    ) -> None:
        self.cfg = cfg
        self.time_limit = cfg.solver.time_limit if time_limit is None else time_limit
        self.mip_gap = cfg.solver.mip_gap if mip_gap is None else mip_gap
        self.threads = cfg.solver.threads if threads is None else threads
        self.log_to_console = cfg.solver.log_to_console if log_to_console is None else log_to_console

        # set in _build_model:
        self.model: Optional[gp.Model] = None
        self.x: Dict[Tuple[int, int], gp.Var] = {}  # (i, j) -> Var
        self.n: int = 0
        self.k: int = 0

    # ---------- Public API ----------

    def solve(self, inst: Instance, mode: int = MODE_INTEGER) -> SolutionInfo:
        """
        Build the model, solve it in the requested mode and read back the
        assignment matrix. Infeasible/time-limited solves are reported through
        SolutionInfo.status / has_solution, never raised.
        """
        if mode not in (MODE_RELAXATION, MODE_INTEGER):
            raise ValueError(f"MKPSolver only handles modes {MODE_RELAXATION} and {MODE_INTEGER}, got {mode}")

        if inst.n == 0 or inst.k == 0:
            return self._empty_solution(inst)

        self._build_model(inst)
        m = self.model
        assert m is not None
        try:
            m.Params.OutputFlag = 1 if self.log_to_console else 0
            if self.threads:
                m.Params.Threads = self.threads

            # LP relaxation (always first)
            m.optimize()
            lp_runtime = float(m.Runtime)
            if mode == MODE_RELAXATION:
                info = self._extract_solution(integral=False, upper_bound=None, runtime=lp_runtime)
            else:
                lp_bound = float(m.ObjVal) if self._has_solution(integral=False) else None
                for var in self.x.values():
                    var.VType = GRB.BINARY
                m.Params.TimeLimit = self.time_limit
                m.Params.MIPGap = self.mip_gap
                m.optimize()
                info = self._extract_solution(
                    integral=True,
                    upper_bound=lp_bound,
                    runtime=lp_runtime + float(m.Runtime),
                )
        finally:
            self._dispose()

        logger.info(
            "Gurobi %s solve: n=%d k=%d status=%s obj=%.4f runtime=%.3fs",
            MODE_LABELS[mode], inst.n, inst.k, info.status, info.obj_value, info.runtime,
        )
        if not info.has_solution:
            logger.warning("Gurobi returned no solution (status %s).", info.status)
        return info

    # ---------- Model construction ----------

    def _build_model(self, inst: Instance) -> None:
        self.n = inst.n
        self.k = inst.k

        weights = np.array([it.weight for it in inst.items], dtype=float)
        values = np.array([it.value for it in inst.items], dtype=float)

        self.model = gp.Model("multiple_knapsack")
        m = self.model
        self.x.clear()

        # Continuous for now; switched to binary for the integer solve
        for j in range(self.k):
            for i in range(self.n):
                self.x[(i, j)] = m.addVar(
                    lb=0.0, ub=1.0, vtype=GRB.CONTINUOUS, obj=values[i],
                    name=f"x{inst.items[i].num}_{j + 1}",
                )
        m.update()

        # Capacity per knapsack
        for j in range(self.k):
            vars_j = [self.x[(i, j)] for i in range(self.n)]
            m.addConstr(gp.LinExpr(weights.tolist(), vars_j) <= inst.capacities[j], name=f"capacity_{j + 1}")

        # Each item in at most one knapsack
        for i in range(self.n):
            vars_i = [self.x[(i, j)] for j in range(self.k)]
            m.addConstr(gp.quicksum(vars_i) <= 1, name=f"unique_{inst.items[i].num}")

        m.ModelSense = GRB.MAXIMIZE
        m.update()

    # ---------- Extraction ----------

    def _has_solution(self, integral: bool) -> bool:
        m = self.model
        assert m is not None
        if integral:
            return m.SolCount > 0
        return m.Status == GRB.OPTIMAL

    def _extract_solution(self, integral: bool, upper_bound: Optional[float], runtime: float) -> SolutionInfo:
        """
        Read the solution safely (also when there is no incumbent).
        """
        m = self.model
        assert m is not None

        status_code = int(m.Status)
        has_solution = self._has_solution(integral)

        x_sol = np.zeros((self.n, self.k), dtype=float)
        if has_solution:
            values = m.getAttr("X", list(self.x.values()))
            for (i, j), val in zip(self.x.keys(), values):
                x_sol[i, j] = val
            x_sol = np.rint(x_sol) if integral else np.clip(x_sol, 0.0, 1.0)

        if integral:
            mip_gap = float(m.MIPGap) if has_solution else float("inf")
            if has_solution and upper_bound is not None:
                upper_bound = min(upper_bound, float(m.ObjBound))
        else:
            mip_gap = 0.0
            upper_bound = float(m.ObjVal) if has_solution else None

        return SolutionInfo(
            status=_status_name(status_code),
            status_code=status_code,
            obj_value=float(m.ObjVal) if has_solution else 0.0,
            upper_bound=upper_bound,
            mip_gap=mip_gap,
            runtime=runtime,
            assignments=x_sol,
            has_solution=has_solution,
        )

    def _empty_solution(self, inst: Instance) -> SolutionInfo:
        return SolutionInfo(
            status=_status_name(GRB.OPTIMAL),
            status_code=GRB.OPTIMAL,
            obj_value=0.0,
            upper_bound=0.0,
            mip_gap=0.0,
            runtime=0.0,
            assignments=np.zeros((inst.n, inst.k), dtype=float),
            has_solution=True,
        )

    def _dispose(self) -> None:
        if self.model is not None:
            self.model.dispose()
        self.model = None
        self.x = {}
