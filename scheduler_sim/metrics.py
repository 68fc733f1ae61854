from __future__ import annotations

from typing import Iterable, List

from .errors import InvalidWorkload
from .models import Process, SimulationResult, SimulationStatistics


def evaluate(
    terminated: Iterable[Process],
    elapsed_time: int,
    idle_time: int,
    num_process: int,
) -> SimulationStatistics:
    """
    Derive utilization and waiting/turnaround statistics from the terminated
    processes of a finished run.

    ``elapsed_time`` is the tick on which the last process terminated; that
    tick is counted as executed, so the run lasted ``elapsed_time + 1`` ticks.
    Utilization is therefore busy ticks over ``elapsed_time + 1`` rather than
    ``(elapsed_time + 1 - idle_time) / elapsed_time``, which can exceed 1.
    """
    if num_process <= 0:
        raise InvalidWorkload("Cannot evaluate a run with no processes")

    sum_waiting = 0
    sum_turnaround = 0
    max_waiting = 0
    for proc in terminated:
        sum_waiting += proc.waiting
        sum_turnaround += proc.turnaround
        if proc.waiting > max_waiting:
            max_waiting = proc.waiting

    executed = elapsed_time + 1
    return SimulationStatistics(
        elapsed_time=elapsed_time,
        idle_time=idle_time,
        cpu_utilization=(executed - idle_time) / executed,
        avg_waiting=sum_waiting / num_process,
        avg_turnaround=sum_turnaround / num_process,
        max_waiting=max_waiting,
    )


def summarize_results(results: Iterable[SimulationResult]) -> List[dict]:
    """
    Return one row of headline numbers per policy for quick comparison.
    """
    rows = []
    for result in results:
        stats = result.statistics
        if stats is None:
            continue
        rows.append(
            {
                "policy": result.label,
                "execution_time": stats.execution_time,
                "cpu_utilization": stats.cpu_utilization,
                "avg_waiting": stats.avg_waiting,
                "avg_turnaround": stats.avg_turnaround,
                "max_waiting": stats.max_waiting,
            }
        )
    return rows
