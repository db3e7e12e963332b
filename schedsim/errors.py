from __future__ import annotations


class SimulationError(ValueError):
    """
    Base class for input problems detected before a simulation runs.
    """


class InvalidProcessSet(SimulationError):
    pass


class InvalidQuantum(SimulationError):
    pass


class UnknownAlgorithm(SimulationError):
    pass


class WorkloadError(SimulationError):
    """Raised when a workload file cannot be turned into processes."""
