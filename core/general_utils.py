# mkp/core/general_utils.py
from __future__ import annotations
from typing import Sequence, Optional
import logging
import random
import time
import numpy as np

from core.logging_setup import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

def set_global_seed(seed: int) -> None:
    """
    Set seeds across Python's random and NumPy for reproducibility.
    """
    random.seed(seed)
    np.random.seed(seed)

def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """
    Return a modern NumPy RNG (PCG64). If seed=None, it is non-deterministic.
    """
    return np.random.default_rng(seed)

def time_seed() -> int:
    return time.time_ns() % (2**32)

def resolve_seed(seed: Optional[int]) -> int:
    """
    Return seed, or a seed taken from the wall clock when seed is None. A clock
    seed is logged so the run can be replayed with an explicit seed.
    """
    if seed is None:
        seed = time_seed()
        logger.info("Seeded from clock: seed=%d", seed)
    return seed

def validate_capacities(capacities: Sequence[int]) -> None:
    assert all(c >= 0 for c in capacities), "All capacities must be non-negative."
