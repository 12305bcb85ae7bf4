from __future__ import annotations

"""
Batch runner: iterate instance files × modes × seeds and collect one CSV row per run,
then aggregate per (instance, mode) with pandas.
"""

import argparse
from pathlib import Path
from typing import List, Sequence

import pandas as pd

from core.checks import check_solution
from core.config import Config, default_config, load_config
from core.logging_setup import CSVWriter, run_stamp, setup_logging
from data.io import load_instance
from experiments.strategy_registry import run_strategy
from offline.models import MODE_LABELS, MODE_RANDOM

HEADERS = ["instance", "n", "k", "mode", "label", "seed", "value", "upper_bound", "status", "status_code", "elapsed"]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run several strategies over a folder of instances.")
    parser.add_argument("instances", type=Path, help="Instance file or directory of *.txt instances.")
    parser.add_argument(
        "--modes",
        nargs="+",
        type=int,
        choices=sorted(MODE_LABELS),
        default=sorted(MODE_LABELS),
        help="Modes to run (defaults to all).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("configs/default.yaml"),
        help="Path to the YAML config.",
    )
    parser.add_argument(
        "--output-root",
        type=Path,
        default=Path("results/batch"),
        help="Root directory for results (a timestamped subfolder is created).",
    )
    return parser.parse_args()


def collect_instances(path: Path) -> List[Path]:
    if path.is_dir():
        return sorted(path.glob("*.txt"))
    return [path]


def run_batch(cfg: Config, files: Sequence[Path], modes: Sequence[int], out_dir: Path) -> pd.DataFrame:
    """
    Solve every instance with every mode (the randomized mode once per configured seed).
    Returns the per-(instance, mode) summary.
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    writer = CSVWriter(out_dir / "runs.csv", HEADERS)

    for path in files:
        base = load_instance(path)
        print(f"\n=== Instance: {path.name} (n={base.n}, k={base.k}) ===")
        for mode in modes:
            seeds = list(cfg.eval.seeds) if mode == MODE_RANDOM else [None]
            for seed in seeds:
                inst = base.copy()
                result = run_strategy(cfg, inst, mode, seed=seed)
                if result.writes_solution:
                    check_solution(inst, result.value)
                writer.write_row({
                    "instance": path.name,
                    "n": base.n,
                    "k": base.k,
                    "mode": mode,
                    "label": result.label,
                    "seed": "" if result.seed is None else result.seed,
                    "value": result.value,
                    "upper_bound": "" if result.upper_bound is None else result.upper_bound,
                    "status": result.status,
                    "status_code": result.status_code,
                    "elapsed": result.elapsed,
                })
                print(f"  {result.label}: value={result.value:.1f}, status={result.status}, {result.elapsed:.3f}s")

    return summarize(out_dir / "runs.csv", out_dir / "summary.csv")


def summarize(runs_csv: Path, summary_csv: Path) -> pd.DataFrame:
    df = pd.read_csv(runs_csv)
    summary = (
        df.groupby(["instance", "mode", "label"], as_index=False)
        .agg(runs=("value", "size"), mean_value=("value", "mean"), best_value=("value", "max"), mean_elapsed=("elapsed", "mean"))
    )
    summary.to_csv(summary_csv, index=False)
    return summary


def main() -> None:
    args = parse_args()
    cfg = load_config(args.config) if args.config.exists() else default_config()
    cfg.output.write_files = False
    out_dir = args.output_root / run_stamp()
    setup_logging(out_dir, level=cfg.logging.level)
    summary = run_batch(cfg, collect_instances(args.instances), args.modes, out_dir)
    print("\n" + summary.to_string(index=False))
    print(f"\nResults saved to {out_dir}")


if __name__ == "__main__":
    main()
