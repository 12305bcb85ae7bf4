import numpy as np

from core.models import Instance

def check_unique_assignment(inst: Instance):
    """Ensure each item sits in at most one valid knapsack."""
    bad = [it.num for it in inst.items if not 0 <= it.knapsack <= inst.k]
    if bad:
        raise AssertionError(f"Items with invalid knapsack index: {bad[:10]}")

def check_capacity_respected(inst: Instance):
    """Ensure no knapsack holds more than its original capacity."""
    loads = np.asarray(inst.loads(), dtype=int)
    caps = np.asarray(inst.capacities, dtype=int)
    if not np.all(loads <= caps):
        viol = (np.where(loads > caps)[0] + 1).tolist()
        raise AssertionError(f"Capacity violation at knapsacks (1-based): {viol}")
    if not np.all(caps - loads == np.asarray(inst.remaining, dtype=int)):
        raise AssertionError("Remaining capacities out of sync with the item assignment.")
    return loads

def check_objective(inst: Instance, value: float, atol: float = 1e-6):
    """Reported value must equal the value recomputed from the assignment."""
    recomputed = inst.total_value()
    if not np.isclose(recomputed, value, rtol=0.0, atol=atol):
        raise AssertionError(f"Reported objective {value} != recomputed {recomputed}")

def check_matrix_feasible(inst: Instance, x: np.ndarray, atol: float = 1e-6):
    """Capacity and uniqueness rows of the MKP model hold for a (fractional) matrix."""
    weights = np.array([it.weight for it in inst.items], dtype=float)
    caps = np.asarray(inst.capacities, dtype=float)
    if x.size == 0:
        return
    if not np.all(x.sum(axis=1) <= 1.0 + atol):
        raise AssertionError("An item is spread over more than one knapsack in total.")
    if not np.all(weights @ x <= caps + atol):
        raise AssertionError("Matrix violates a knapsack capacity.")

def check_solution(inst: Instance, value: float):
    """All invariants a finished strategy must satisfy."""
    check_unique_assignment(inst)
    loads = check_capacity_respected(inst)
    check_objective(inst, value)
    return loads
