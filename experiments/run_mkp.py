from __future__ import annotations

"""
Command-line entry point: solve one instance file with one strategy.

    mkp <instance_file> <mode>

mode: 1 = LP relaxation, 2 = exact integer solve, 3 = greedy,
      4 = randomized first-fit, 5 = destroy/repair.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from core.checks import check_solution
from core.config import Config, default_config, load_config
from core.logging_setup import setup_logging
from data.io import (
    InstanceFileNotFound,
    MalformedInstance,
    format_summary_line,
    load_instance,
    run_summary_path,
    solution_path,
    write_run_summary,
    write_solution,
)
from experiments.strategy_registry import run_strategy
from offline.models import MODE_LABELS

DEFAULT_CONFIG = Path("configs/default.yaml")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    modes = ", ".join(f"{mode} = {label}" for mode, label in sorted(MODE_LABELS.items()))
    parser = argparse.ArgumentParser(
        prog="mkp",
        description="Multiple-knapsack solver (LP, MIP and heuristics).",
    )
    parser.add_argument("instance_file", type=Path, help="Path to the instance file.")
    parser.add_argument(
        "mode",
        type=int,
        choices=sorted(MODE_LABELS),
        help=f"Strategy: {modes}.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG,
        help="YAML config (defaults are used if the file does not exist).",
    )
    parser.add_argument("--seed", type=int, help="Seed for the randomized strategy.")
    parser.add_argument("--time-limit", type=float, help="Time limit (s) for the integer solve.")
    parser.add_argument("--log-dir", type=Path, help="Directory for mkp.log.")
    parser.add_argument(
        "--no-files",
        action="store_true",
        help="Only print the summary line, do not write .sol/.out files.",
    )
    return parser.parse_args(argv)


def _build_config(args: argparse.Namespace) -> Config:
    cfg = load_config(args.config) if args.config.exists() else default_config()
    if args.time_limit is not None:
        cfg.solver.time_limit = args.time_limit
    if args.log_dir is not None:
        cfg.logging.log_dir = str(args.log_dir)
    if args.no_files:
        cfg.output.write_files = False
    return cfg


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    cfg = _build_config(args)
    logger = setup_logging(Path(cfg.logging.log_dir), level=cfg.logging.level)

    try:
        inst = load_instance(args.instance_file)
    except (InstanceFileNotFound, MalformedInstance) as exc:
        logger.error("Problem loading instance %s: %s", args.instance_file, exc)
        print(f"Problem loading instance {args.instance_file}: {exc}", file=sys.stderr)
        return 1

    logger.info("Instance %s: n=%d k=%d, mode %d (%s)", args.instance_file, inst.n, inst.k, args.mode, MODE_LABELS[args.mode])
    seed = args.seed if args.seed is not None else cfg.heuristics.seed
    result = run_strategy(cfg, inst, args.mode, seed=seed)
    if result.writes_solution:
        check_solution(inst, result.value)

    print(format_summary_line(str(args.instance_file), args.mode, inst.n, inst.k, result.value, result.elapsed))

    if cfg.output.write_files:
        if result.writes_solution:
            write_solution(inst, result.value, solution_path(args.instance_file))
        write_run_summary(
            run_summary_path(args.instance_file, cfg.output.impl_label, str(args.mode)),
            filename=str(args.instance_file),
            label=result.label,
            elapsed=result.elapsed,
            value=result.value,
            upper_bound=result.upper_bound,
            status_code=result.status_code,
        )
    logger.info("Finished: %s value=%.4f status=%s elapsed=%.3fs", result.label, result.value, result.status, result.elapsed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
