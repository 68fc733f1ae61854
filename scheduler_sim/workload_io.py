from __future__ import annotations

import csv
import json
import random
from dataclasses import asdict
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .errors import InvalidWorkload
from .models import ProcessDescriptor

FIELDS = ["pid", "cpu_burst", "io_burst", "arrival", "priority"]


def _burst_pool(rng: random.Random) -> List[int]:
    # Roughly geometric: 90% of bursts are 1-10, 5% are 11-20, 5% are 21-40.
    pool = [rng.randint(1, 10) for _ in range(450)]
    pool += [rng.randint(11, 20) for _ in range(25)]
    pool += [rng.randint(21, 40) for _ in range(25)]
    return pool


def generate_workload(
    n: int,
    seed: Optional[int] = None,
    zero_io: bool = False,
    zero_arrival: bool = False,
) -> List[ProcessDescriptor]:
    """
    Generate ``n`` random processes with pids 1..n.

    CPU bursts are drawn from a skewed pool in [1, 40], I/O bursts from
    [0, 19], arrivals from [0, 3n) and priorities from [-20, 20].
    ``zero_io`` / ``zero_arrival`` pin those fields to 0 for debugging.
    """
    if n <= 0:
        raise InvalidWorkload(f"Number of processes must be positive (got {n})")

    rng = random.Random(seed)
    pool = _burst_pool(rng)

    workload: List[ProcessDescriptor] = []
    for pid in range(1, n + 1):
        cpu_burst = rng.choice(pool)
        io_burst = 0 if zero_io else rng.randrange(20)
        arrival = 0 if zero_arrival else rng.randrange(3 * n)
        priority = rng.randint(-20, 20)
        workload.append(
            ProcessDescriptor(
                pid=pid,
                cpu_burst=cpu_burst,
                io_burst=io_burst,
                arrival=arrival,
                priority=priority,
            )
        )
    return workload


def load_workload(path: str | Path) -> List[ProcessDescriptor]:
    """
    Load a workload from a JSON or CSV file into a list of ProcessDescriptor objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def save_workload(workload: Sequence[ProcessDescriptor], path: str | Path) -> Path:
    path = Path(path)
    suffix = path.suffix.lower()
    rows = [asdict(desc) for desc in workload]

    if suffix == ".json":
        with path.open("w", encoding="utf-8") as f:
            json.dump(rows, f, indent=2)
    elif suffix == ".csv":
        with path.open("w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=FIELDS)
            writer.writeheader()
            writer.writerows(rows)
    else:
        raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")
    return path


def _load_json(path: Path) -> List[ProcessDescriptor]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError("JSON workload must be a list of process objects")

    return _descriptors(raw)


def _load_csv(path: Path) -> List[ProcessDescriptor]:
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        return _descriptors(reader)


def _descriptors(entries: Iterable) -> List[ProcessDescriptor]:
    processes = [_process_from_mapping(entry) for entry in entries]
    if not processes:
        raise InvalidWorkload("Workload file contains no processes")
    return processes


def _process_from_mapping(mapping) -> ProcessDescriptor:
    try:
        pid = int(mapping["pid"])
        cpu_burst = int(mapping["cpu_burst"])
        arrival = int(mapping["arrival"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid process entry: {mapping!r}") from exc

    io_val = mapping.get("io_burst")
    priority_val = mapping.get("priority")
    try:
        io_burst = int(io_val) if io_val not in (None, "") else 0
        priority = int(priority_val) if priority_val not in (None, "") else 0
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid process entry: {mapping!r}") from exc

    if cpu_burst <= 0:
        raise InvalidWorkload(f"Process {pid} has a non-positive CPU burst ({cpu_burst})")

    return ProcessDescriptor(
        pid=pid,
        cpu_burst=cpu_burst,
        io_burst=io_burst,
        arrival=arrival,
        priority=priority,
    )
