# mkp/core/config.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple
import yaml
from pathlib import Path

# ---- Solver & heuristic knobs ----

@dataclass
class SolverConfig:
    """
    Gurobi parameters for the LP/MIP calls.
    - time_limit: wall-clock budget (seconds) for the integer solve
    - mip_gap: relative gap at which branch-and-bound may stop
    - threads: 0 lets Gurobi decide
    - log_to_console: forward Gurobi's own log (OutputFlag)
    """
    time_limit: float = 1000.0
    mip_gap: float = 0.0
    threads: int = 0
    log_to_console: bool = False

@dataclass
class HeuristicConfig:
    """
    - seed: RNG seed for the randomized first-fit (None -> seed from wall-clock time)
    - epsilon: tolerance when reading fractional LP values (x < 1 - epsilon counts as "not endorsed")
    """
    seed: Optional[int] = None
    epsilon: float = 1e-6

@dataclass
class OutputConfig:
    """
    Result files next to the instance file.
    - write_files: write <instance>.sol and <instance>-<impl>-<mode>.out
    - impl_label: the <impl> part of the run-summary file name
    """
    write_files: bool = True
    impl_label: str = "py"

@dataclass
class LoggingConfig:
    log_dir: str = "logs"
    level: str = "INFO"

@dataclass
class GeneratorConfig:
    """
    Random instance generation.
    - n, k: item and knapsack counts
    - weight_bounds / value_bounds: inclusive integer ranges
    - capacity_ratio: total capacity as a fraction of the total item weight
    """
    n: int = 50
    k: int = 5
    weight_bounds: Tuple[int, int] = (5, 40)
    value_bounds: Tuple[int, int] = (10, 100)
    capacity_ratio: float = 0.5

@dataclass
class EvalConfig:
    """
    Reproducibility bookkeeping.
    - seeds: list of RNG seeds for repeated runs
    """
    seeds: Tuple[int, ...] = (1, 2, 3)

@dataclass
class Config:
    solver: SolverConfig = field(default_factory=SolverConfig)
    heuristics: HeuristicConfig = field(default_factory=HeuristicConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)

def default_config() -> Config:
    return Config()

def load_config(path: str | Path) -> Config:
    """
    Load YAML into strongly-typed dataclasses. Unknown keys fail early,
    missing sections fall back to their defaults.
    """
    data = yaml.safe_load(Path(path).read_text()) or {}
    gen = dict(data.get("generator", {}))
    for key in ("weight_bounds", "value_bounds"):
        if key in gen:
            gen[key] = tuple(gen[key])
    return Config(
        solver=SolverConfig(**data.get("solver", {})),
        heuristics=HeuristicConfig(**data.get("heuristics", {})),
        output=OutputConfig(**data.get("output", {})),
        logging=LoggingConfig(**data.get("logging", {})),
        generator=GeneratorConfig(**gen),
        eval=EvalConfig(tuple(data.get("eval", {}).get("seeds", EvalConfig.seeds))),
    )
