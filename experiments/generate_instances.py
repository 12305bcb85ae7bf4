from __future__ import annotations

import argparse
from pathlib import Path

from core.config import default_config, load_config
from data.generators import generate_instance
from data.io import save_instance


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Write random MKP instance files.")
    parser.add_argument("--config", type=Path, default=Path("configs/default.yaml"))
    parser.add_argument("--output-dir", type=Path, default=Path("instances"))
    parser.add_argument("--n", type=int, help="Number of items (overrides config).")
    parser.add_argument("--k", type=int, help="Number of knapsacks (overrides config).")
    parser.add_argument("--seeds", nargs="+", type=int, help="Seeds (defaults to eval.seeds).")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    cfg = load_config(args.config) if args.config.exists() else default_config()
    if args.n is not None:
        cfg.generator.n = args.n
    if args.k is not None:
        cfg.generator.k = args.k
    seeds = args.seeds or list(cfg.eval.seeds)
    for seed in seeds:
        inst = generate_instance(cfg, seed=seed)
        path = args.output_dir / f"mkp_n{inst.n}_k{inst.k}_seed{seed}.txt"
        save_instance(inst, path)
        print(f"Instance saved to {path}")


if __name__ == "__main__":
    main()
