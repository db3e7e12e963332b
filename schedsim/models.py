from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import List, Optional

# Sentinel pid for intervals where no process runs.
IDLE = "IDLE"


@dataclass(frozen=True)
class Process:
    pid: str
    arrival_time: int
    burst_time: int
    priority: int = 0


@dataclass
class ProcessState:
    """
    Simulation-time view of one process. Owned by a single run.
    """

    process: Process
    remaining: int
    first_start: Optional[int] = None
    completion: Optional[int] = None

    @classmethod
    def fresh(cls, process: Process) -> "ProcessState":
        return cls(process=process, remaining=process.burst_time)

    @property
    def pid(self) -> str:
        return self.process.pid

    @property
    def arrival_time(self) -> int:
        return self.process.arrival_time

    @property
    def burst_time(self) -> int:
        return self.process.burst_time

    @property
    def priority(self) -> int:
        return self.process.priority

    @property
    def done(self) -> bool:
        return self.remaining == 0

    def is_ready(self, time: int) -> bool:
        return self.arrival_time <= time and self.remaining > 0

    def run(self, start: int, duration: int) -> None:
        """
        Execute this process for ``duration`` units starting at ``start``.
        """
        assert duration >= 1, f"{self.pid}: empty dispatch at t={start}"
        assert duration <= self.remaining, f"{self.pid}: overran burst at t={start}"
        assert start >= self.arrival_time, f"{self.pid}: dispatched before arrival"

        if self.first_start is None:
            self.first_start = start

        self.remaining -= duration
        if self.remaining == 0:
            assert self.completion is None, f"{self.pid}: completed twice"
            self.completion = start + duration


@dataclass
class Segment:
    """
    One contiguous interval of the timeline; ``pid`` may be IDLE.
    """

    pid: str
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time

    @property
    def is_idle(self) -> bool:
        return self.pid == IDLE


@dataclass
class ProcessMetrics:
    pid: str
    arrival_time: int
    burst_time: int
    priority: int
    start_time: int
    completion_time: int
    turnaround_time: int
    waiting_time: int
    response_time: int


@dataclass
class MetricsSummary:
    avg_completion: float
    avg_turnaround: float
    avg_waiting: float
    avg_response: float


@dataclass
class SystemMetrics:
    makespan: int
    cpu_busy_time: int
    idle_time: int
    throughput: float
    cpu_utilization: float


@dataclass
class SimulationResult:
    algorithm: str
    name: str
    quantum: Optional[int]
    timeline: List[Segment] = field(default_factory=list)
    metrics: List[ProcessMetrics] = field(default_factory=list)
    summary: Optional[MetricsSummary] = None
    system: Optional[SystemMetrics] = None

    def to_dict(self) -> dict:
        return asdict(self)
