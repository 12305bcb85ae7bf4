# mkp/data/generators.py
from __future__ import annotations
from typing import Optional
import numpy as np
from core.config import Config, GeneratorConfig
from core.models import Instance, Item
from core.general_utils import make_rng, validate_capacities


def _split_capacity(rng: np.random.Generator, total: int, k: int, min_cap: int) -> np.ndarray:
    """
    Split a total capacity over k knapsacks with Dirichlet shares, each at least min_cap.
    """
    if k == 0:
        return np.empty(0, dtype=int)
    shares = rng.dirichlet(np.ones(k))
    caps = np.floor(shares * total).astype(int)
    return np.maximum(caps, min_cap)

def generate_instance(cfg: Config, seed: int, gen: Optional[GeneratorConfig] = None) -> Instance:
    """
    Create a random MKP instance:
    - n items with integer weights/values drawn uniformly from the configured bounds
    - k knapsacks whose capacities add up to capacity_ratio * total weight
      (each knapsack can hold at least the lightest item)
    """
    gen = gen or cfg.generator
    rng = make_rng(seed)
    n, k = gen.n, gen.k
    lo_w, hi_w = gen.weight_bounds
    lo_v, hi_v = gen.value_bounds
    assert 0 <= lo_w <= hi_w, "weight_bounds must satisfy 0 <= lower <= upper."
    assert 0 <= lo_v <= hi_v, "value_bounds must satisfy 0 <= lower <= upper."
    assert gen.capacity_ratio > 0, "capacity_ratio must be positive."

    weights = rng.integers(lo_w, hi_w + 1, size=n)
    values = rng.integers(lo_v, hi_v + 1, size=n)
    total = int(np.ceil(gen.capacity_ratio * weights.sum())) if n else 0
    min_cap = int(weights.min()) if n else 0
    capacities = _split_capacity(rng, total, k, min_cap)
    validate_capacities(capacities)

    items = [Item(num=i + 1, value=float(values[i]), weight=int(weights[i])) for i in range(n)]
    return Instance(items=items, capacities=tuple(int(c) for c in capacities))
