import logging
from pathlib import Path

import pytest

from core.config import load_config
from core.logging_setup import LOGGER_NAME
from core.models import Instance, Item

DEFAULT_CONFIG = Path(__file__).resolve().parent.parent / "configs" / "default.yaml"


def make_instance(capacities, items):
    """items: iterable of (id, weight, value)"""
    return Instance(
        items=[Item(num=num, value=float(value), weight=weight) for num, weight, value in items],
        capacities=tuple(capacities),
    )


@pytest.fixture
def cfg():
    cfg = load_config(DEFAULT_CONFIG)
    cfg.solver.time_limit = 30
    return cfg


@pytest.fixture
def example_instance():
    # n=3, k=1: greedy and the exact solve both reach 100
    return make_instance([10], [(1, 5, 60), (2, 4, 40), (3, 6, 30)])


@pytest.fixture
def greedy_trap_instance():
    # greedy takes item 1 (value 10) and blocks items 2+3 (value 18)
    return make_instance([10], [(1, 6, 10), (2, 5, 9), (3, 5, 9)])


@pytest.fixture(autouse=True)
def _reset_mkp_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
