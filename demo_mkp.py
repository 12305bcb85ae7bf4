import argparse
from pathlib import Path

import numpy as np

from core.checks import check_solution
from core.config import default_config, load_config
from core.general_utils import set_global_seed
from data.generators import generate_instance
from experiments.strategy_registry import run_strategy
from offline.models import MODE_LABELS

def main():
    ap = argparse.ArgumentParser()
    ap.add_argument('--config', type=Path, default=Path('configs/default.yaml'))
    ap.add_argument('--seed', type=int, default=42)
    ap.add_argument('--items', type=int, default=30)
    ap.add_argument('--knapsacks', type=int, default=3)
    args = ap.parse_args()

    cfg = load_config(args.config) if args.config.exists() else default_config()
    cfg.generator.n = args.items
    cfg.generator.k = args.knapsacks
    set_global_seed(args.seed)

    # 1) Generate instance
    inst = generate_instance(cfg, seed=args.seed)
    print(f"n={inst.n}, k={inst.k}, capacities={list(inst.capacities)}")

    # 2) Run every strategy on its own copy
    print("\n=== MKP RESULTS ===")
    for mode, label in sorted(MODE_LABELS.items()):
        work = inst.copy()
        result = run_strategy(cfg, work, mode, seed=args.seed)
        line = f"{mode} {label:<15} value={result.value:10.2f}  time={result.elapsed:.3f}s  status={result.status}"
        if result.writes_solution:
            loads = check_solution(work, result.value)
            fill = np.round(loads / np.maximum(np.asarray(work.capacities), 1), 3)
            line += f"  fill={fill.tolist()}"
        print(line)
    print("All checks passed")

if __name__ == '__main__':
    main()
