import numpy as np
import pytest
from gurobipy import GRB

from core.checks import check_solution
from data.generators import generate_instance
from data.io import parse_instance
from offline.mkp_solver import MKPSolver
from offline.models import MODE_INTEGER, SolutionInfo
from offline.offline_heuristics.destroy_repair import DestroyRepair, destroy, improve, repair
from offline.offline_heuristics.greedy_by_value import greedy_assign


class NoSolutionSolver:
    """Stands in for Gurobi hitting its time limit without an incumbent."""

    def __init__(self):
        self.calls = []

    def solve(self, inst, mode):
        self.calls.append((inst.n, mode))
        return SolutionInfo(
            status="TIME_LIMIT",
            status_code=GRB.TIME_LIMIT,
            obj_value=0.0,
            upper_bound=None,
            mip_gap=float("inf"),
            runtime=0.0,
            assignments=np.zeros((inst.n, inst.k)),
            has_solution=False,
        )


def test_example_keeps_greedy_optimum(cfg, example_instance):
    info = DestroyRepair(cfg).solve(example_instance)
    assert info.obj_value == pytest.approx(100.0)
    assert info.upper_bound == pytest.approx(105.0)
    check_solution(example_instance, info.obj_value)


def test_escapes_greedy_trap(cfg, greedy_trap_instance):
    greedy = greedy_assign(greedy_trap_instance.copy())
    assert greedy == 10.0

    value, residual, lp = improve(greedy_trap_instance, MKPSolver(cfg))
    assert value == pytest.approx(18.0)
    assert residual is not None and residual.ok
    assert lp.obj_value == pytest.approx(18.0)
    by_num = {it.num: it.knapsack for it in greedy_trap_instance.items}
    assert by_num == {1: 0, 2: 1, 3: 1}
    check_solution(greedy_trap_instance, value)


def test_destroy_and_repair_passes(greedy_trap_instance):
    greedy_assign(greedy_trap_instance)
    x = np.array([[0.0], [1.0], [1.0]])
    removed, lost = destroy(greedy_trap_instance, x, 1e-6)
    assert (removed, lost) == (1, 10.0)
    assert greedy_trap_instance.remaining == [10]

    added, gained = repair(greedy_trap_instance)
    # first unassigned item in list order is item 1 (weight 6), the others no longer fit
    assert (added, gained) == (1, 10.0)
    assert greedy_trap_instance.items[0].knapsack == 1


def test_repair_scans_knapsacks_in_reverse():
    inst = parse_instance("2 3\n5 5 5\n1 5 1\n2 5 1\n")
    added, _ = repair(inst)
    assert added == 2
    assert [it.knapsack for it in inst.items] == [3, 2]


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_never_below_greedy(cfg, seed):
    cfg.generator.n = 20
    cfg.generator.k = 3
    inst = generate_instance(cfg, seed=seed)
    greedy = greedy_assign(inst.copy())
    ip = MKPSolver(cfg).solve(inst, MODE_INTEGER)

    info = DestroyRepair(cfg).solve(inst)
    check_solution(inst, info.obj_value)
    assert info.obj_value >= greedy - 1e-6
    assert info.obj_value <= ip.obj_value + 1e-6


def test_failed_solves_fall_back_to_greedy(cfg, greedy_trap_instance):
    stub = NoSolutionSolver()
    info = DestroyRepair(cfg, solver=stub).solve(greedy_trap_instance)
    assert info.obj_value == 10.0
    assert info.status_code == GRB.TIME_LIMIT
    assert info.upper_bound is None
    check_solution(greedy_trap_instance, info.obj_value)
    # LP on the full instance, then the exact solve on the residual items
    assert stub.calls[0][0] == 3
    assert stub.calls[1][1] == MODE_INTEGER


def test_residual_is_sized_exactly(greedy_trap_instance):
    greedy_assign(greedy_trap_instance)
    free = greedy_trap_instance.unassigned_indices()
    residual = greedy_trap_instance.residual(free)
    assert residual.n == len(free) == 2
    assert residual.capacities == (4,)
    assert [it.num for it in residual.items] == [2, 3]
    residual.items[0].knapsack = 1
    assert not greedy_trap_instance.items[1].assigned
