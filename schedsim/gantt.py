from __future__ import annotations

from typing import Dict, List, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import Segment

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def build_rich_gantt(segments: List[Segment]) -> Tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with
    the time marks of every segment boundary.

    IDLE segments are drawn dimmed; the timeline is expected to be gap-free.
    """
    if not segments:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    pid_to_color: Dict[str, str] = {}

    def pid_color(pid: str) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(COLORS)
            pid_to_color[pid] = COLORS[idx]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    time_marks = str(segments[0].start_time)

    for seg in segments:
        width = max(1, seg.duration)

        if seg.is_idle:
            timeline.append("." * width, style="dim")
            labels.append(seg.pid[:width].ljust(width), style="dim")
        else:
            timeline.append(" " * width, style=f"on {pid_color(seg.pid)}")
            labels.append(seg.pid[:width].ljust(width), style="bold")

        time_marks += f"{seg.end_time:>3}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
