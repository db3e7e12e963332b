from __future__ import annotations

from typing import List

from .models import IDLE, Segment

__all__ = ["IDLE", "TimelineBuilder"]


class TimelineBuilder:
    """
    Accumulates execution segments for one simulation run.

    Consecutive slices of the same pid that touch are merged into a single
    segment, so a process run unit by unit still shows up as one bar.
    Policies are responsible for reporting idle gaps as they skip them;
    the only gap ``finalize`` fills is a leading one before the first
    segment.
    """

    def __init__(self) -> None:
        self._segments: List[Segment] = []

    def append(self, pid: str, start: int, end: int) -> None:
        assert end > start, f"empty segment {pid} [{start}, {end})"

        if self._segments:
            last = self._segments[-1]
            assert start >= last.end_time, f"segment {pid} overlaps {last.pid} at t={start}"
            if last.pid == pid and last.end_time == start:
                last.end_time = end
                return

        self._segments.append(Segment(pid=pid, start_time=start, end_time=end))

    def idle(self, start: int, end: int) -> None:
        self.append(IDLE, start, end)

    def finalize(self) -> List[Segment]:
        segments = [Segment(s.pid, s.start_time, s.end_time) for s in self._segments]
        if segments and segments[0].start_time > 0:
            first = segments[0]
            if first.pid == IDLE:
                first.start_time = 0
            else:
                segments.insert(0, Segment(pid=IDLE, start_time=0, end_time=first.start_time))
        return segments
