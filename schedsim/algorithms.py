from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, Dict, List, Optional, Tuple

from .models import ProcessState, Segment
from .timeline import TimelineBuilder
from .validation import validate_quantum

logger = logging.getLogger(__name__)

Policy = Callable[[List[ProcessState], Optional[int]], List[Segment]]


def _ready(states: List[ProcessState], time: int) -> List[ProcessState]:
    return [s for s in states if s.is_ready(time)]


def _pending(states: List[ProcessState]) -> bool:
    return any(not s.done for s in states)


def _skip_idle(states: List[ProcessState], time: int, timeline: TimelineBuilder) -> int:
    """
    Jump the clock to the earliest pending arrival, recording the gap as IDLE.
    """
    next_arrival = min(s.arrival_time for s in states if not s.done)
    assert next_arrival > time, f"idle jump at t={time} with a ready process"
    logger.debug("t=%d: CPU idle until %d", time, next_arrival)
    timeline.idle(time, next_arrival)
    return next_arrival


def _dispatch(state: ProcessState, time: int, duration: int, timeline: TimelineBuilder) -> int:
    end = time + duration
    timeline.append(state.pid, time, end)
    state.run(time, duration)
    logger.debug("t=%d: ran %s until %d (remaining %d)", time, state.pid, end, state.remaining)
    return end


def schedule_fcfs(states: List[ProcessState], quantum: Optional[int] = None) -> List[Segment]:
    """
    First-Come First-Serve (non-preemptive).

    Processes run to completion in ``(arrival_time, pid)`` order.
    """
    timeline = TimelineBuilder()
    time = 0

    for state in sorted(states, key=lambda s: (s.arrival_time, s.pid)):
        if time < state.arrival_time:
            time = _skip_idle(states, time, timeline)
        time = _dispatch(state, time, state.remaining, timeline)

    return timeline.finalize()


def _schedule_non_preemptive(
    states: List[ProcessState],
    rank: Callable[[ProcessState], Tuple],
) -> List[Segment]:
    """
    Repeatedly pick the best-ranked ready process and run it to completion.
    """
    timeline = TimelineBuilder()
    time = 0

    while _pending(states):
        ready = _ready(states, time)
        if not ready:
            time = _skip_idle(states, time, timeline)
            continue

        state = min(ready, key=rank)
        time = _dispatch(state, time, state.remaining, timeline)

    return timeline.finalize()


def schedule_sjf(states: List[ProcessState], quantum: Optional[int] = None) -> List[Segment]:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time (tie-breaker:
    earlier arrival, then PID).
    """
    return _schedule_non_preemptive(states, lambda s: (s.burst_time, s.arrival_time, s.pid))


def schedule_priority(states: List[ProcessState], quantum: Optional[int] = None) -> List[Segment]:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority. Among ready
    processes, choose the one with the smallest priority; break ties
    by earlier arrival time, then PID.
    """
    return _schedule_non_preemptive(states, lambda s: (s.priority, s.arrival_time, s.pid))


def schedule_srtf(states: List[ProcessState], quantum: Optional[int] = None) -> List[Segment]:
    """
    Shortest Remaining Time First (preemptive SJF).

    The decision is re-taken at every time unit: the ready process with the
    least remaining time runs (tie: earlier arrival, then PID). Between two
    arrivals the ready set is fixed and the running process only gets
    shorter, so it keeps winning; the loop therefore runs it straight to the
    next arrival or to its completion. The resulting timeline is the same as
    stepping one unit at a time.
    """
    timeline = TimelineBuilder()
    time = 0

    def next_arrival_after(t: int) -> Optional[int]:
        future = [s.arrival_time for s in states if s.arrival_time > t and not s.done]
        return min(future) if future else None

    while _pending(states):
        ready = _ready(states, time)
        if not ready:
            time = _skip_idle(states, time, timeline)
            continue

        current = min(ready, key=lambda s: (s.remaining, s.arrival_time, s.pid))

        # Run until completion or next arrival, whichever comes first.
        nxt_arrival = next_arrival_after(time)
        if nxt_arrival is None:
            run_time = current.remaining
        else:
            run_time = min(current.remaining, nxt_arrival - time)

        time = _dispatch(current, time, run_time, timeline)

    return timeline.finalize()


def schedule_rr(states: List[ProcessState], quantum: Optional[int] = None) -> List[Segment]:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes are admitted to a FIFO ready queue in ``(arrival_time, pid)``
    order. After each slice, processes that arrived up to and including the
    slice end are admitted before the preempted process goes to the back of
    the queue.
    """
    quantum = validate_quantum(quantum)

    timeline = TimelineBuilder()
    time = 0

    not_arrived: Deque[ProcessState] = deque(sorted(states, key=lambda s: (s.arrival_time, s.pid)))
    ready: Deque[ProcessState] = deque()

    def enqueue_new_arrivals(current_time: int) -> None:
        while not_arrived and not_arrived[0].arrival_time <= current_time:
            ready.append(not_arrived.popleft())

    enqueue_new_arrivals(time)

    while ready or not_arrived:
        if not ready:
            time = _skip_idle(states, time, timeline)
            enqueue_new_arrivals(time)
            continue

        state = ready.popleft()
        time = _dispatch(state, time, min(quantum, state.remaining), timeline)

        enqueue_new_arrivals(time)

        if not state.done:
            ready.append(state)

    return timeline.finalize()


ALGORITHMS: Dict[str, Policy] = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "srtf": schedule_srtf,
    "rr": schedule_rr,
    "priority": schedule_priority,
}

ALGORITHM_NAMES: Dict[str, str] = {
    "fcfs": "FCFS",
    "sjf": "SJF (non-preemptive)",
    "srtf": "SRTF",
    "rr": "Round Robin",
    "priority": "Priority (non-preemptive)",
}

# Alternate selector spellings.
ALIASES: Dict[str, str] = {
    "sjf-np": "sjf",
}

QUANTUM_ALGORITHMS = {"rr"}
