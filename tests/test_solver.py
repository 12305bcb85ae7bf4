import numpy as np
import pytest

from core.checks import check_matrix_feasible
from data.generators import generate_instance
from data.io import parse_instance
from offline.mkp_solver import MKPSolver
from offline.models import MODE_GREEDY, MODE_INTEGER, MODE_RELAXATION
from offline.offline_heuristics.greedy_by_value import greedy_assign


def recompute_objective(inst, x):
    """Objective of an assignment matrix."""
    values = np.array([it.value for it in inst.items], dtype=float)
    return float(values @ x.sum(axis=1))


def test_example_relaxation_and_integer(cfg, example_instance):
    solver = MKPSolver(cfg)
    lp = solver.solve(example_instance, MODE_RELAXATION)
    ip = solver.solve(example_instance, MODE_INTEGER)

    assert lp.status == "OPTIMAL" and lp.has_solution
    assert lp.obj_value == pytest.approx(105.0)
    assert lp.obj_value >= 100.0
    assert ip.ok
    assert ip.obj_value == pytest.approx(100.0)
    assert ip.assignments.tolist() == [[1.0], [1.0], [0.0]]
    assert 100.0 - 1e-6 <= ip.upper_bound <= 105.0 + 1e-6


def test_matrix_shape_and_feasibility(cfg):
    cfg.generator.n = 20
    cfg.generator.k = 3
    inst = generate_instance(cfg, seed=1)
    solver = MKPSolver(cfg)
    for mode in (MODE_RELAXATION, MODE_INTEGER):
        info = solver.solve(inst, mode)
        assert info.assignments.shape == (inst.n, inst.k)
        assert np.all((info.assignments >= 0.0) & (info.assignments <= 1.0))
        check_matrix_feasible(inst, info.assignments)
        assert info.obj_value == pytest.approx(recompute_objective(inst, info.assignments), abs=1e-6)

    ip = solver.solve(inst, MODE_INTEGER)
    assert set(np.unique(ip.assignments)).issubset({0.0, 1.0})


def test_bounds_ordering(cfg):
    cfg.generator.n = 20
    cfg.generator.k = 3
    inst = generate_instance(cfg, seed=2)
    solver = MKPSolver(cfg)
    lp = solver.solve(inst, MODE_RELAXATION)
    ip = solver.solve(inst, MODE_INTEGER)
    greedy = greedy_assign(inst.copy())

    assert lp.obj_value >= ip.obj_value - 1e-6
    assert ip.obj_value >= greedy - 1e-6
    assert greedy >= 0.0
    assert ip.upper_bound is not None and ip.upper_bound <= lp.obj_value + 1e-6


def test_solver_does_not_mutate_instance(cfg, example_instance):
    before = example_instance.copy()
    MKPSolver(cfg).solve(example_instance, MODE_INTEGER)
    assert example_instance == before


def test_empty_instance_short_circuits(cfg):
    inst = parse_instance("0 2\n5 5\n")
    info = MKPSolver(cfg).solve(inst, MODE_INTEGER)
    assert info.ok
    assert info.obj_value == 0.0
    assert info.assignments.shape == (0, 2)


def test_time_limit_reports_status(cfg):
    cfg.generator.n = 30
    cfg.generator.k = 4
    inst = generate_instance(cfg, seed=4)
    info = MKPSolver(cfg, time_limit=0.01).solve(inst, MODE_INTEGER)
    assert info.status in {"OPTIMAL", "TIME_LIMIT"}
    if info.has_solution:
        check_matrix_feasible(inst, info.assignments)
    else:
        assert info.obj_value == 0.0
        assert not info.assignments.any()


def test_rejects_heuristic_modes(cfg, example_instance):
    with pytest.raises(ValueError):
        MKPSolver(cfg).solve(example_instance, MODE_GREEDY)
