import pytest

from core.checks import check_solution
from core.general_utils import make_rng
from data.generators import generate_instance
from data.io import parse_instance
from offline.offline_heuristics.greedy_by_value import GreedyByValue, greedy_assign, value_order
from offline.offline_heuristics.random_first_fit import RandomFirstFit, random_assign


def test_greedy_example(example_instance):
    value = greedy_assign(example_instance)
    assert value == 100.0
    assert [it.knapsack for it in example_instance.items] == [1, 1, 0]
    assert example_instance.remaining == [1]
    check_solution(example_instance, value)


def test_greedy_ties_broken_by_item_number():
    inst = parse_instance("3 2\n5 5\n3 5 10\n1 5 10\n2 5 10\n")
    assert [inst.items[idx].num for idx in value_order(inst)] == [1, 2, 3]
    greedy_assign(inst)
    by_num = {it.num: it.knapsack for it in inst.items}
    assert by_num == {1: 1, 2: 2, 3: 0}


def test_greedy_keeps_item_order_and_is_deterministic(cfg):
    base = generate_instance(cfg, seed=3)
    a, b = base.copy(), base.copy()
    va = GreedyByValue(cfg).solve(a).obj_value
    vb = GreedyByValue(cfg).solve(b).obj_value
    assert va == vb
    assert a.assignment_snapshot() == b.assignment_snapshot()
    assert [it.num for it in a.items] == [it.num for it in base.items]


def test_greedy_fits_exact_capacity():
    inst = parse_instance("1 1\n4\n1 4 7\n")
    assert greedy_assign(inst) == 7.0
    assert inst.remaining == [0]


def test_greedy_with_zero_knapsacks():
    inst = parse_instance("2 0\n1 1 5\n2 1 3\n")
    assert greedy_assign(inst) == 0.0
    assert inst.total_value() == 0.0


@pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
def test_random_assignment_feasible(cfg, seed):
    inst = generate_instance(cfg, seed=10 + seed)
    info = RandomFirstFit(cfg, seed=seed).solve(inst)
    check_solution(inst, info.obj_value)
    assert info.seed == seed
    assert info.feasible


def test_random_same_seed_same_assignment(cfg):
    base = generate_instance(cfg, seed=11)
    a, b = base.copy(), base.copy()
    va = random_assign(a, make_rng(99))
    vb = random_assign(b, make_rng(99))
    assert va == vb
    a.sort_by_num()
    b.sort_by_num()
    assert a.assignment_snapshot() == b.assignment_snapshot()


def test_random_shuffles_items_but_keeps_them(cfg):
    inst = generate_instance(cfg, seed=12)
    before = sorted(it.num for it in inst.items)
    value = random_assign(inst, make_rng(1))
    assert sorted(it.num for it in inst.items) == before
    assert value == pytest.approx(inst.total_value())
    inst.sort_by_num()
    assert [it.num for it in inst.items] == before


def test_random_takes_everything_when_it_all_fits():
    inst = parse_instance("4 2\n100 100\n1 10 1\n2 20 2\n3 30 3\n4 40 4\n")
    for seed in range(5):
        work = inst.copy()
        assert random_assign(work, make_rng(seed)) == 10.0
        assert all(it.assigned for it in work.items)


def test_random_without_seed_uses_clock(cfg, example_instance):
    cfg.heuristics.seed = None
    info = RandomFirstFit(cfg).solve(example_instance)
    assert info.seed is not None
    check_solution(example_instance, info.obj_value)
