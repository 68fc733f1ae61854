import pytest

from scheduler_sim.errors import InvalidWorkload
from scheduler_sim.metrics import evaluate, summarize_results
from scheduler_sim.models import Process, SimulationResult


def _done(pid, waiting, turnaround):
    return Process(
        pid=pid,
        cpu_burst=1,
        io_burst=0,
        arrival=0,
        priority=0,
        cpu_remaining=0,
        io_remaining=0,
        waiting=waiting,
        turnaround=turnaround,
    )


def test_evaluate_averages_and_max():
    stats = evaluate([_done(1, 0, 3), _done(2, 6, 9), _done(3, 3, 4)], elapsed_time=9, idle_time=2, num_process=3)
    assert stats.avg_waiting == 3.0
    assert stats.avg_turnaround == pytest.approx(16 / 3)
    assert stats.max_waiting == 6
    assert stats.execution_time == 10
    assert stats.cpu_utilization == pytest.approx(0.8)


def test_evaluate_rejects_empty_run():
    with pytest.raises(InvalidWorkload):
        evaluate([], elapsed_time=0, idle_time=0, num_process=0)


def test_summarize_skips_unfinished():
    stats = evaluate([_done(1, 1, 2)], elapsed_time=1, idle_time=0, num_process=1)
    rows = summarize_results(
        [
            SimulationResult(policy="fcfs", label="FCFS", quantum=None, statistics=stats),
            SimulationResult(policy="rr", label="Round Robin", quantum=10),
        ]
    )
    assert len(rows) == 1
    assert rows[0]["policy"] == "FCFS"
    assert rows[0]["execution_time"] == 2
