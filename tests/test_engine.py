import json
import random
from concurrent.futures import ThreadPoolExecutor

import pytest

from schedsim import (
    IDLE,
    InvalidProcessSet,
    InvalidQuantum,
    Process,
    UnknownAlgorithm,
    compare,
    simulate,
)

ALGS = ["fcfs", "sjf", "srtf", "rr", "priority"]


def _spans(result):
    return [(s.pid, s.start_time, s.end_time) for s in result.timeline]


def _random_workload(seed):
    rng = random.Random(seed)
    count = rng.randint(1, 8)
    return [
        Process(
            pid=f"P{i}",
            arrival_time=rng.choice([0, rng.randint(0, 20)]),
            burst_time=rng.randint(1, 9),
            priority=rng.randint(0, 4),
        )
        for i in rng.sample(range(count), count)
    ]


def test_fcfs_example_timeline_and_metrics():
    result = simulate([Process("A", 0, 5), Process("B", 2, 3)], "fcfs")

    assert _spans(result) == [("A", 0, 5), ("B", 5, 8)]
    a, b = result.metrics
    assert (a.pid, a.completion_time, a.turnaround_time, a.waiting_time, a.response_time) == ("A", 5, 5, 0, 0)
    assert (b.pid, b.completion_time, b.turnaround_time, b.waiting_time, b.response_time) == ("B", 8, 6, 3, 3)


def test_srtf_tie_matches_fcfs_for_two_process_example():
    procs = [Process("A", 0, 5), Process("B", 2, 3)]
    assert _spans(simulate(procs, "srtf")) == _spans(simulate(procs, "fcfs"))


def test_rr_example():
    result = simulate([Process("A", 0, 4), Process("B", 1, 3)], "rr", quantum=2)
    assert _spans(result) == [("A", 0, 2), ("B", 2, 4), ("A", 4, 6), ("B", 6, 7)]
    assert result.quantum == 2
    assert result.name == "Round Robin"


def test_metrics_follow_input_order():
    procs = [Process("late", 4, 1), Process("early", 0, 2), Process("mid", 1, 1)]
    result = simulate(procs, "sjf")
    assert [m.pid for m in result.metrics] == ["late", "early", "mid"]
    assert _spans(result) == [("early", 0, 2), ("mid", 2, 3), (IDLE, 3, 4), ("late", 4, 5)]


def test_pids_are_case_sensitive():
    result = simulate([Process("a", 0, 1), Process("A", 0, 1)], "fcfs")
    assert _spans(result) == [("A", 0, 1), ("a", 1, 2)]


def test_algorithm_name_is_normalized():
    procs = [Process("A", 0, 2)]
    assert simulate(procs, " RR ", quantum=1).algorithm == "rr"
    assert simulate(procs, "sjf-np").algorithm == "sjf"


def test_quantum_is_ignored_outside_round_robin():
    result = simulate([Process("A", 0, 2)], "fcfs", quantum=0)
    assert result.quantum is None


def test_unknown_algorithm():
    with pytest.raises(UnknownAlgorithm):
        simulate([Process("A", 0, 1)], "lottery")


@pytest.mark.parametrize(
    "procs",
    [
        [],
        [Process("A", 0, 1), Process("A", 2, 1)],
        [Process("A", -1, 1)],
        [Process("A", 0, 0)],
        [Process("A", 0, -3)],
        [Process("", 0, 1)],
        [Process("A", 0, True)],
        [Process("A", 0.5, 1)],
        [Process("A", 0, 1, priority=None)],
        [Process(IDLE, 0, 1)],
        [Process("IDLE", 2, 3), Process("B", 0, 1)],
    ],
)
def test_invalid_process_sets_are_rejected(procs):
    with pytest.raises(InvalidProcessSet):
        simulate(procs, "fcfs")


@pytest.mark.parametrize("quantum", [None, 0, -2, 1.5])
def test_round_robin_requires_positive_quantum(quantum):
    with pytest.raises(InvalidQuantum):
        simulate([Process("A", 0, 1)], "rr", quantum=quantum)


def test_validation_errors_are_value_errors():
    with pytest.raises(ValueError):
        simulate([], "fcfs")


def test_input_processes_are_not_touched():
    procs = [Process("A", 0, 3), Process("B", 1, 2)]
    snapshot = list(procs)

    first = simulate(procs, "srtf")
    first.timeline[0].end_time = 42
    first.metrics[0].waiting_time = -1
    second = simulate(procs, "srtf")

    assert procs == snapshot
    assert second.timeline[0].end_time != 42
    assert second.metrics[0].waiting_time == 0


@pytest.mark.parametrize("alg", ALGS)
def test_simulate_is_idempotent(alg):
    procs = _random_workload(7)
    first = json.dumps(simulate(procs, alg, quantum=3).to_dict(), sort_keys=True)
    second = json.dumps(simulate(procs, alg, quantum=3).to_dict(), sort_keys=True)
    assert first == second


def test_concurrent_runs_do_not_interfere():
    workloads = [_random_workload(seed) for seed in range(20)]
    expected = [simulate(w, "rr", quantum=2).to_dict() for w in workloads]

    with ThreadPoolExecutor(max_workers=4) as pool:
        got = list(pool.map(lambda w: simulate(w, "rr", quantum=2).to_dict(), workloads))

    assert got == expected


def test_compare_runs_requested_algorithms_in_order():
    procs = [Process("A", 0, 4), Process("B", 1, 3)]
    results = compare(procs, ["srtf", "rr", "fcfs"], quantum=2)
    assert [r.algorithm for r in results] == ["srtf", "rr", "fcfs"]
    assert [r.quantum for r in results] == [None, 2, None]


@pytest.mark.parametrize("seed", range(25))
@pytest.mark.parametrize("alg", ALGS)
def test_schedule_properties(alg, seed):
    procs = _random_workload(seed)
    quantum = random.Random(seed).randint(1, 4)
    result = simulate(procs, alg, quantum=quantum)
    by_pid = {p.pid: p for p in procs}

    # Timeline tiles [0, makespan) without gaps or overlaps.
    timeline = result.timeline
    assert timeline[0].start_time == 0
    for prev, cur in zip(timeline, timeline[1:]):
        assert prev.end_time == cur.start_time
        assert prev.pid != cur.pid
    assert all(s.end_time > s.start_time for s in timeline)
    assert timeline[-1].end_time == max(m.completion_time for m in result.metrics)
    assert timeline[-1].pid != IDLE

    # Busy time equals the total burst and every process gets exactly its burst.
    busy = {}
    for s in timeline:
        if s.pid != IDLE:
            busy[s.pid] = busy.get(s.pid, 0) + s.duration
    assert busy == {p.pid: p.burst_time for p in procs}
    assert result.system.cpu_busy_time == sum(p.burst_time for p in procs)

    assert [m.pid for m in result.metrics] == [p.pid for p in procs]
    for m in result.metrics:
        p = by_pid[m.pid]
        own = [s for s in timeline if s.pid == m.pid]
        assert m.start_time == own[0].start_time
        assert m.completion_time == own[-1].end_time
        assert m.turnaround_time == m.completion_time - p.arrival_time
        assert m.waiting_time == m.turnaround_time - p.burst_time
        assert m.response_time == m.start_time - p.arrival_time
        assert m.waiting_time >= 0
        assert m.response_time >= 0
        assert m.completion_time >= p.arrival_time + p.burst_time
        assert own[0].start_time >= p.arrival_time


@pytest.mark.parametrize("seed", range(25))
def test_non_preemptive_policies_run_each_process_once(seed):
    procs = _random_workload(seed)
    for alg in ("fcfs", "sjf", "priority"):
        result = simulate(procs, alg)
        pids = [s.pid for s in result.timeline if s.pid != IDLE]
        assert sorted(pids) == sorted(p.pid for p in procs)
        for m in result.metrics:
            assert m.waiting_time == m.response_time


def _srtf_one_unit_at_a_time(procs):
    remaining = {p.pid: p.burst_time for p in procs}
    spans = []
    time = 0
    while any(remaining.values()):
        ready = [p for p in procs if p.arrival_time <= time and remaining[p.pid] > 0]
        pid = min(ready, key=lambda p: (remaining[p.pid], p.arrival_time, p.pid)).pid if ready else IDLE
        if pid != IDLE:
            remaining[pid] -= 1
        if spans and spans[-1][0] == pid:
            spans[-1] = (pid, spans[-1][1], time + 1)
        else:
            spans.append((pid, time, time + 1))
        time += 1
    return spans


@pytest.mark.parametrize("seed", range(100))
def test_srtf_matches_unit_step_schedule(seed):
    procs = _random_workload(seed)
    assert _spans(simulate(procs, "srtf")) == _srtf_one_unit_at_a_time(procs)


def test_srtf_matches_unit_step_schedule_with_staggered_arrivals():
    procs = [Process("A", 0, 8), Process("B", 1, 4), Process("C", 2, 9), Process("D", 3, 5), Process("E", 30, 2)]
    assert _spans(simulate(procs, "srtf")) == _srtf_one_unit_at_a_time(procs)
