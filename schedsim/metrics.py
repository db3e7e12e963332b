from __future__ import annotations

from typing import List

from .models import MetricsSummary, ProcessMetrics, ProcessState, Segment, SystemMetrics


def compute_process_metrics(state: ProcessState) -> ProcessMetrics:
    """
    Derive turnaround, waiting and response time for a finished process.
    """
    assert state.remaining == 0, f"{state.pid}: still has {state.remaining} units left"
    assert state.completion is not None and state.first_start is not None, f"{state.pid}: never completed"

    turnaround_time = state.completion - state.arrival_time
    waiting_time = turnaround_time - state.burst_time
    response_time = state.first_start - state.arrival_time

    return ProcessMetrics(
        pid=state.pid,
        arrival_time=state.arrival_time,
        burst_time=state.burst_time,
        priority=state.priority,
        start_time=state.first_start,
        completion_time=state.completion,
        turnaround_time=turnaround_time,
        waiting_time=waiting_time,
        response_time=response_time,
    )


def summarize_process_metrics(processes: List[ProcessMetrics]) -> MetricsSummary:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    if not processes:
        return MetricsSummary(avg_completion=0.0, avg_turnaround=0.0, avg_waiting=0.0, avg_response=0.0)

    n = len(processes)
    return MetricsSummary(
        avg_completion=sum(p.completion_time for p in processes) / n,
        avg_turnaround=sum(p.turnaround_time for p in processes) / n,
        avg_waiting=sum(p.waiting_time for p in processes) / n,
        avg_response=sum(p.response_time for p in processes) / n,
    )


def compute_system_metrics(timeline: List[Segment], processes: List[ProcessMetrics]) -> SystemMetrics:
    """
    Compute throughput and CPU utilization from the timeline and the
    per-process metrics of one run.
    """
    if not processes:
        return SystemMetrics(makespan=0, cpu_busy_time=0, idle_time=0, throughput=0.0, cpu_utilization=0.0)

    makespan = max(p.completion_time for p in processes)
    cpu_busy_time = sum(s.duration for s in timeline if not s.is_idle)
    idle_time = sum(s.duration for s in timeline if s.is_idle)

    throughput = len(processes) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    return SystemMetrics(
        makespan=makespan,
        cpu_busy_time=cpu_busy_time,
        idle_time=idle_time,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
    )
