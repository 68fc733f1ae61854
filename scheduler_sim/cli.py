from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .algorithms import compare_policies, seeded_interrupts, simulate
from .engine import SimulationConfig
from .errors import SchedulerError
from .gantt import build_rich_gantt, render_trace
from .metrics import summarize_results
from .models import ProcessDescriptor, SimulationResult
from .policies import POLICIES, get_policy
from .workload_io import generate_workload, load_workload, save_workload

logger = logging.getLogger(__name__)

TRACE_WIDTH = 10


def _add_workload_args(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--processes",
        "-n",
        type=int,
        default=None,
        help="Number of random processes to generate (prompted for when omitted).",
    )
    source.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Path to JSON or CSV workload file instead of a generated one.",
    )
    parser.add_argument(
        "--seed",
        "-s",
        type=int,
        default=None,
        help="Seed for the workload generator and the interrupt draws.",
    )
    parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Round-robin time quantum (default: 10).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scheduler-sim",
        description="Tick-by-tick CPU scheduling simulator (FCFS, SJF, preemptive SJF, Priority, "
        "preemptive Priority, RR).",
    )
    parser.add_argument("--verbose", "-v", action="count", default=0, help="Log engine events (-vv for debug).")

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Simulate one scheduling policy.")
    run_parser.add_argument(
        "--policy",
        "-p",
        required=True,
        help=f"Policy to use ({', '.join(POLICIES)}).",
    )
    _add_workload_args(run_parser)
    run_parser.add_argument("--no-trace", action="store_true", help="Skip the tick-by-tick chart.")

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run several policies on the same workload and compare their statistics.",
    )
    compare_parser.add_argument(
        "--policies",
        "-p",
        nargs="+",
        default=list(POLICIES),
        help=f"Policies to compare (default: {' '.join(POLICIES)}).",
    )
    _add_workload_args(compare_parser)
    compare_parser.add_argument("--trace", action="store_true", help="Print each policy's tick-by-tick chart.")

    gen_parser = subparsers.add_parser("generate", help="Write a random workload to a JSON or CSV file.")
    gen_parser.add_argument("--processes", "-n", type=int, required=True, help="Number of processes.")
    gen_parser.add_argument("--seed", "-s", type=int, default=None, help="Generator seed.")
    gen_parser.add_argument("--output", "-o", required=True, help="Destination path (.json or .csv).")

    return parser


def configure_logging(verbosity: int, console: Console) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _resolve_workload(args: argparse.Namespace, console: Console) -> List[ProcessDescriptor]:
    if args.workload:
        return load_workload(Path(args.workload))

    n = args.processes
    if n is None:
        raw = console.input("Enter the number of processes: ").strip()
        try:
            n = int(raw)
        except ValueError as exc:
            raise ValueError(f"Not a number: {raw!r}") from exc
    return generate_workload(n, seed=args.seed)


def _print_workload(workload: List[ProcessDescriptor], console: Console) -> None:
    table = Table(title="Workload", box=box.SIMPLE_HEAVY)
    for h in ["PID", "CPU burst", "I/O burst", "Arrival", "Priority"]:
        table.add_column(h, justify="right")
    for d in workload:
        table.add_row(str(d.pid), str(d.cpu_burst), str(d.io_burst), str(d.arrival), str(d.priority))
    console.print(table)


def _print_result(result: SimulationResult, console: Console, show_trace: bool, width: int) -> None:
    console.print(f"\n[bold]# {result.label}[/bold]")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    if show_trace:
        console.print()
        console.print(render_trace(result.trace, width=width), markup=False, highlight=False)
        console.print()
        panel, time_marks = build_rich_gantt(result.trace)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    proc_table = Table(title="Per-process statistics", box=box.SIMPLE_HEAVY)
    for h in ["PID", "Arrival", "CPU burst", "I/O burst", "Priority", "Complete", "Wait", "Turnaround"]:
        proc_table.add_column(h, justify="right")
    for p in result.processes:
        proc_table.add_row(
            str(p.pid),
            str(p.arrival),
            str(p.cpu_burst),
            str(p.io_burst),
            str(p.priority),
            str(p.completion),
            str(p.waiting),
            str(p.turnaround),
        )
    console.print(proc_table)

    stats = result.statistics
    if stats:
        console.print(f"-> Execution time: {stats.execution_time}")
        console.print(f"-> CPU utilization: {stats.cpu_utilization:.3f}")
        console.print(f"-> Average waiting time: {stats.avg_waiting:.3f}")
        console.print(f"-> Average turnaround time: {stats.avg_turnaround:.3f}")
        console.print(f"-> Maximum waiting time: {stats.max_waiting}")


def _print_summary(results: List[SimulationResult], console: Console) -> None:
    summary_table = Table(title="Summary", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Policy")
    summary_table.add_column("Exec time", justify="right")
    summary_table.add_column("CPU util", justify="right")
    summary_table.add_column("Avg WT", justify="right")
    summary_table.add_column("Avg TT", justify="right")
    summary_table.add_column("Max WT", justify="right")

    for row in summarize_results(results):
        summary_table.add_row(
            row["policy"],
            str(row["execution_time"]),
            f"{row['cpu_utilization']:.3f}",
            f"{row['avg_waiting']:.3f}",
            f"{row['avg_turnaround']:.3f}",
            str(row["max_waiting"]),
        )

    console.print(summary_table)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console()
    configure_logging(args.verbose, console)

    try:
        if args.command == "generate":
            workload = generate_workload(args.processes, seed=args.seed)
            path = save_workload(workload, args.output)
            console.print(f"Wrote {len(workload)} processes to [green]{path}[/green]")
            return 0

        policies = [get_policy(args.policy)] if args.command == "run" else [get_policy(p) for p in args.policies]
        workload = _resolve_workload(args, console)
        config = SimulationConfig(quantum=args.quantum)
        interrupts = seeded_interrupts(args.seed)
        _print_workload(workload, console)

        if args.command == "run":
            result = simulate(policies[0], workload, interrupts=interrupts(policies[0]), config=config)
            _print_result(result, console, show_trace=not args.no_trace, width=TRACE_WIDTH)
            return 0

        if args.command == "compare":
            results = compare_policies(workload, [p.key for p in policies], interrupt_factory=interrupts, config=config)
            for result in results:
                _print_result(result, console, show_trace=args.trace, width=TRACE_WIDTH)
            console.print()
            _print_summary(results, console)
            return 0
    except (SchedulerError, ValueError, OSError) as exc:
        logger.debug("command failed", exc_info=True)
        console.print(f"[red]Error: {exc}[/red]")
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
