from __future__ import annotations

from typing import Optional, Sequence

from .errors import InvalidProcessSet, InvalidQuantum
from .models import IDLE, Process


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_processes(processes: Sequence[Process]) -> None:
    """
    Reject process sets the engine cannot simulate.

    Checks: at least one process, unique (case-sensitive) pids other than
    the reserved IDLE marker, integer arrival >= 0, integer burst >= 1 and
    an integer priority.
    """
    if not processes:
        raise InvalidProcessSet("At least one process is required")

    seen: set[str] = set()
    for p in processes:
        if not isinstance(p.pid, str) or not p.pid:
            raise InvalidProcessSet(f"Process id must be a non-empty string, got {p.pid!r}")
        if p.pid == IDLE:
            raise InvalidProcessSet(f"Process id '{IDLE}' is reserved for idle time")
        if p.pid in seen:
            raise InvalidProcessSet(f"Duplicate process id '{p.pid}'")
        seen.add(p.pid)

        if not _is_int(p.arrival_time) or p.arrival_time < 0:
            raise InvalidProcessSet(f"Process '{p.pid}': arrival time must be an integer >= 0")
        if not _is_int(p.burst_time) or p.burst_time < 1:
            raise InvalidProcessSet(f"Process '{p.pid}': burst time must be an integer >= 1")
        if not _is_int(p.priority):
            raise InvalidProcessSet(f"Process '{p.pid}': priority must be an integer")


def validate_quantum(quantum: Optional[int]) -> int:
    if quantum is None:
        raise InvalidQuantum("Round Robin requires a quantum (use --quantum)")
    if not _is_int(quantum) or quantum < 1:
        raise InvalidQuantum(f"Quantum must be a positive integer, got {quantum!r}")
    return quantum
