"""
Simulation entry point.

``simulate`` is a pure function: it validates its input, works on a deep
copy of the processes and returns fresh result objects, so repeated or
concurrent calls never see each other's state.
"""

from __future__ import annotations

import copy
import logging
from typing import Iterable, List, Optional, Sequence

from .algorithms import ALGORITHM_NAMES, ALGORITHMS, ALIASES, QUANTUM_ALGORITHMS
from .errors import UnknownAlgorithm
from .metrics import compute_process_metrics, compute_system_metrics, summarize_process_metrics
from .models import Process, ProcessState, SimulationResult
from .validation import validate_processes, validate_quantum

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2


def resolve_algorithm(name: str) -> str:
    """
    Normalize an algorithm selector to its registry key.
    """
    key = str(name).strip().lower()
    key = ALIASES.get(key, key)
    if key not in ALGORITHMS:
        choices = ", ".join(ALGORITHMS)
        raise UnknownAlgorithm(f"Unknown algorithm '{name}' (choose from {choices})")
    return key


def simulate(
    processes: Sequence[Process],
    algorithm: str,
    quantum: Optional[int] = None,
) -> SimulationResult:
    key = resolve_algorithm(algorithm)
    validate_processes(processes)
    if key in QUANTUM_ALGORITHMS:
        quantum = validate_quantum(quantum)
    else:
        quantum = None

    states: List[ProcessState] = [ProcessState.fresh(p) for p in copy.deepcopy(list(processes))]

    logger.debug("Running %s on %d processes (quantum=%s)", key, len(states), quantum)
    timeline = ALGORITHMS[key](states, quantum)

    # States keep input order, so metrics line up with the caller's list.
    metrics = [compute_process_metrics(s) for s in states]

    result = SimulationResult(
        algorithm=key,
        name=ALGORITHM_NAMES[key],
        quantum=quantum,
        timeline=timeline,
        metrics=metrics,
        summary=summarize_process_metrics(metrics),
        system=compute_system_metrics(timeline, metrics),
    )
    logger.debug("%s finished at t=%d with %d segments", key, result.system.makespan, len(timeline))
    return result


def compare(
    processes: Sequence[Process],
    algorithms: Iterable[str],
    quantum: Optional[int] = DEFAULT_QUANTUM,
) -> List[SimulationResult]:
    """
    Run several algorithms on the same workload, in the order given.
    """
    return [simulate(processes, alg, quantum=quantum) for alg in algorithms]
