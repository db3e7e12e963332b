from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS
from .engine import DEFAULT_QUANTUM, compare, simulate
from .errors import SimulationError
from .gantt import build_rich_gantt
from .models import SimulationResult
from .workload_io import load_workload

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF, SRTF, RR, Priority).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every scheduling decision.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help="Algorithm to use (fcfs, sjf, srtf, rr, priority).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Time quantum for round-robin (ignored by the other algorithms).",
    )
    run_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the timeline and metrics as JSON instead of tables.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(ALGORITHMS),
        help="Algorithms to compare (default: fcfs sjf srtf rr priority).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for RR when included (default: {DEFAULT_QUANTUM}).",
    )

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _print_result(result: SimulationResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.name}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    panel, time_marks = build_rich_gantt(result.timeline)
    console.print(panel)
    if time_marks:
        console.print(time_marks)

    console.print()

    headers = [
        "PID",
        "Arrive",
        "Burst",
        "Priority",
        "Start",
        "Complete",
        "Turnaround",
        "Wait",
        "Response",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.metrics:
        proc_table.add_row(
            p.pid,
            str(p.arrival_time),
            str(p.burst_time),
            str(p.priority),
            str(p.start_time),
            str(p.completion_time),
            str(p.turnaround_time),
            str(p.waiting_time),
            str(p.response_time),
        )

    console.print(proc_table)
    console.print()

    summary = result.summary
    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg completion", f"{summary.avg_completion:.2f}")
    sys_table.add_row("Avg turnaround", f"{summary.avg_turnaround:.2f}")
    sys_table.add_row("Avg waiting", f"{summary.avg_waiting:.2f}")
    sys_table.add_row("Avg response", f"{summary.avg_response:.2f}")
    if result.system:
        system = result.system
        sys_table.add_row("Makespan", str(system.makespan))
        sys_table.add_row("Idle time", str(system.idle_time))
        sys_table.add_row("Throughput (proc/time)", f"{system.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{system.cpu_utilization*100:.1f}%")

    console.print(sys_table)


def _print_comparison(results: List[SimulationResult], title: str, console: Console) -> None:
    summary_table = Table(title=title, box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg completion", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg response", justify="right")

    for result in results:
        summary = result.summary
        summary_table.add_row(
            result.name,
            "" if result.quantum is None else str(result.quantum),
            f"{summary.avg_completion:.2f}",
            f"{summary.avg_turnaround:.2f}",
            f"{summary.avg_waiting:.2f}",
            f"{summary.avg_response:.2f}",
        )

    console.print(summary_table)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()

    try:
        workload_path = Path(args.workload)
        processes = load_workload(workload_path)
        logger.debug("Loaded %d processes from %s", len(processes), workload_path)

        if args.command == "run":
            result = simulate(processes, args.algorithm, quantum=args.quantum)
            if args.json:
                print(json.dumps(result.to_dict(), indent=2))
            else:
                _print_result(result, console)
            return 0

        if args.command == "compare":
            results = compare(processes, args.algorithms, quantum=args.quantum)
            _print_comparison(results, f"Algorithm comparison: {workload_path}", console)
            return 0
    except (OSError, SimulationError) as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
