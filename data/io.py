# mkp/data/io.py
from __future__ import annotations
import math
from pathlib import Path
from typing import List, Optional
from core.models import Instance, Item

class InstanceFileNotFound(FileNotFoundError):
    """Raised when the instance file does not exist or cannot be read."""

class MalformedInstance(ValueError):
    """Raised when an instance file violates the expected format."""

def _ints(tokens: List[str], start: int, count: int, what: str) -> List[int]:
    chunk = tokens[start:start + count]
    if len(chunk) < count:
        raise MalformedInstance(f"Unexpected end of file while reading {what}.")
    try:
        return [int(t) for t in chunk]
    except ValueError as exc:
        raise MalformedInstance(f"Non-integer token in {what}: {exc}") from exc

def parse_instance(text: str) -> Instance:
    """
    Parse the whitespace-separated format:
      n k
      C_1 ... C_k
      item_id weight value   (n lines, item_id in 1..n)
    """
    tokens = text.split()
    n, k = _ints(tokens, 0, 2, "item/knapsack counts")
    if n < 0 or k < 0:
        raise MalformedInstance(f"Counts must be non-negative, got n={n} k={k}.")
    capacities = _ints(tokens, 2, k, "capacities")
    if any(c < 0 for c in capacities):
        raise MalformedInstance("Capacities must be non-negative.")

    items: List[Item] = []
    seen = set()
    pos = 2 + k
    for line in range(n):
        chunk = tokens[pos:pos + 3]
        if len(chunk) < 3:
            raise MalformedInstance(f"Unexpected end of file in item line {line + 1}.")
        try:
            num, weight, value = int(chunk[0]), int(chunk[1]), float(chunk[2])
        except ValueError as exc:
            raise MalformedInstance(f"Bad token in item line {line + 1}: {exc}") from exc
        if num < 1 or num > n:
            raise MalformedInstance(f"Item id {num} outside 1..{n}.")
        if num in seen:
            raise MalformedInstance(f"Duplicate item id {num}.")
        if not math.isfinite(value):
            raise MalformedInstance(f"Item {num} has a non-finite value {chunk[2]}.")
        if weight < 0 or value < 0:
            raise MalformedInstance(f"Item {num} has a negative weight or value.")
        seen.add(num)
        items.append(Item(num=num, value=value, weight=weight))
        pos += 3
    return Instance(items=items, capacities=tuple(capacities))

def load_instance(path: Path) -> Instance:
    """
    Load an Instance from the plain-text instance format.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise InstanceFileNotFound(f"Cannot read instance file {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise MalformedInstance(f"Instance file {path} is not valid text: {exc}") from exc
    return parse_instance(text)

def save_instance(inst: Instance, path: Path) -> None:
    """
    Write an Instance in the same format load_instance reads.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = [f"{inst.n} {inst.k}", " ".join(str(c) for c in inst.capacities)]
    for it in sorted(inst.items, key=lambda it: it.num):
        value = int(it.value) if float(it.value).is_integer() else it.value
        lines.append(f"{it.num} {it.weight} {value}")
    path.write_text("\n".join(lines) + "\n")

# ---------------------------
# Reporting
# ---------------------------

def format_summary_line(filename: str, mode: int, n: int, k: int, value: float, elapsed: float) -> str:
    return f"{filename};{mode};{n};{k};{value:.0f};{elapsed:f}"

def solution_path(instance_path: Path) -> Path:
    return Path(f"{instance_path}.sol")

def run_summary_path(instance_path: Path, impl: str, variant: str) -> Path:
    return Path(f"{instance_path}-{impl}-{variant}.out")

def write_solution(inst: Instance, value: float, path: Path) -> None:
    """
    Solution file: "<value> <k>", then per knapsack "mochila <j> <count>" and
    a line with its item ids (empty line if the knapsack is empty).
    """
    lines = [f"{value:.0f} {inst.k}"]
    for j in range(1, inst.k + 1):
        nums = sorted(inst.items_in(j))
        lines.append(f"mochila {j} {len(nums)}")
        lines.append(" ".join(str(num) for num in nums))
    path.write_text("\n".join(lines) + "\n")

def write_run_summary(
    path: Path,
    filename: str,
    label: str,
    elapsed: float,
    value: float,
    upper_bound: Optional[float],
    status_code: int,
) -> None:
    bound = "" if upper_bound is None else f"{upper_bound:f}"
    path.write_text(f"{filename};{label};{elapsed:f};{value:f};{bound};{status_code}\n")
