from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import List, Union

from .errors import WorkloadError
from .models import Process


def load_workload(path: Union[str, Path]) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise WorkloadError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except UnicodeDecodeError as exc:
            raise WorkloadError(f"{path}: not a UTF-8 text file") from exc
        except json.JSONDecodeError as exc:
            raise WorkloadError(f"{path}: invalid JSON ({exc})") from exc

    if not isinstance(raw, list):
        raise WorkloadError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        try:
            for row in reader:
                processes.append(_process_from_mapping(row))
        except UnicodeDecodeError as exc:
            raise WorkloadError(f"{path}: not a UTF-8 text file") from exc
    return processes


def _process_from_mapping(mapping) -> Process:
    try:
        pid = str(mapping["pid"]).strip()
        arrival_time = _to_int(mapping["arrival_time"])
        burst_time = _to_int(mapping["burst_time"])
        priority_val = mapping.get("priority")
        priority = _to_int(priority_val) if priority_val not in (None, "") else 0
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise WorkloadError(f"Invalid process entry: {mapping!r}") from exc

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )


def _to_int(value) -> int:
    # CSV cells arrive as text; JSON numbers must already be whole ints.
    if isinstance(value, str):
        return int(value.strip())
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an integer, got {value!r}")
    return value
