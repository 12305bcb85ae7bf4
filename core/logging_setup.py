# mkp/core/logging_setup.py
from __future__ import annotations
import logging
from pathlib import Path
import csv
from datetime import datetime

LOGGER_NAME = "mkp"

def setup_logging(log_dir: Path, name: str = LOGGER_NAME, level: str = "INFO") -> logging.Logger:
    log_dir.mkdir(parents=True, exist_ok=True)
    logger = logging.getLogger(name)
    logger.setLevel(level)
    # Avoid duplicate handlers on reruns
    if logger.handlers:
        return logger
    # File handler
    fh = logging.FileHandler(log_dir / f"{name}.log")
    fh.setLevel(level)
    # Console handler (stderr, stdout is reserved for the summary line)
    ch = logging.StreamHandler()
    ch.setLevel(level)
    fmt = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    fh.setFormatter(fmt)
    ch.setFormatter(fmt)
    logger.addHandler(fh)
    logger.addHandler(ch)
    return logger

class CSVWriter:
    """
    Minimal CSV writer for experiment rows (e.g., instance, mode, seed, objective).
    """
    def __init__(self, path: Path, headers: list[str]):
        path.parent.mkdir(parents=True, exist_ok=True)
        self.path = path
        self.headers = headers
        if not path.exists():
            with path.open("w", newline="") as f:
                writer = csv.DictWriter(f, fieldnames=headers)
                writer.writeheader()

    def write_row(self, row: dict) -> None:
        with self.path.open("a", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=self.headers)
            writer.writerow(row)

def run_stamp() -> str:
    """
    Timestamp string for run folders.
    """
    return datetime.now().strftime("%Y%m%d_%H%M%S")
