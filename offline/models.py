from dataclasses import dataclass
from typing import Optional
import numpy as np
from gurobipy import GRB

# Strategy selectors (CLI mode numbers)
MODE_RELAXATION = 1
MODE_INTEGER = 2
MODE_GREEDY = 3
MODE_RANDOM = 4
MODE_DESTROY_REPAIR = 5

MODE_LABELS = {
    MODE_RELAXATION: "relaxation",
    MODE_INTEGER: "integer",
    MODE_GREEDY: "greedy",
    MODE_RANDOM: "random",
    MODE_DESTROY_REPAIR: "destroy_repair",
}

# Status code written for strategies that never call the solver
HEURISTIC_STATUS_CODE = 0


@dataclass
class SolutionInfo:
    """Summary of one LP/MIP solve for logging/eval."""
    status: str
    status_code: int
    obj_value: float
    upper_bound: Optional[float]
    mip_gap: float
    runtime: float
    assignments: np.ndarray  # shape: (n, k), x[i, j] = share of item i in knapsack j
    has_solution: bool

    @property
    def ok(self) -> bool:
        """True when the objective and matrix belong to a proven optimal solution."""
        return self.has_solution and self.status_code == GRB.OPTIMAL


def _status_name(code: int) -> str:
    """
    Version-independent mapping of Gurobi status codes to names
    (avoids private attributes like _intToStatus).
    """
    return {
        GRB.LOADED:          "LOADED",
        GRB.OPTIMAL:         "OPTIMAL",
        GRB.INFEASIBLE:      "INFEASIBLE",
        GRB.INF_OR_UNBD:     "INF_OR_UNBD",
        GRB.UNBOUNDED:       "UNBOUNDED",
        GRB.TIME_LIMIT:      "TIME_LIMIT",
        GRB.INTERRUPTED:     "INTERRUPTED",
        GRB.SUBOPTIMAL:      "SUBOPTIMAL",
        GRB.USER_OBJ_LIMIT:  "USER_OBJ_LIMIT",
    }.get(code, f"STATUS_{code}")
