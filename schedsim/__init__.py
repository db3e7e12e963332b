"""
Scheduling simulator package.

Simulates uniprocessor CPU scheduling policies (FCFS, SJF, SRTF, Round
Robin, Priority) over a set of processes and reports the execution
timeline together with per-process metrics.
"""

from .engine import compare, simulate
from .errors import InvalidProcessSet, InvalidQuantum, SimulationError, UnknownAlgorithm, WorkloadError
from .models import IDLE, Process, ProcessMetrics, Segment, SimulationResult

__all__ = [
    "IDLE",
    "InvalidProcessSet",
    "InvalidQuantum",
    "Process",
    "ProcessMetrics",
    "Segment",
    "SimulationError",
    "SimulationResult",
    "UnknownAlgorithm",
    "WorkloadError",
    "compare",
    "simulate",
]
