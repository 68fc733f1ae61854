"""
CPU scheduling simulator package.

Runs FCFS, SJF, priority and round-robin scheduling tick by tick over a
shared synthetic workload and reports utilization, waiting and turnaround
statistics for each policy.
"""

from .algorithms import compare_policies, simulate
from .engine import SchedulerEngine, SimulationConfig
from .errors import EmptyQueue, InvalidPolicy, InvalidWorkload, SchedulerError, SimulationStalled
from .models import Process, ProcessDescriptor, SimulationResult, SimulationStatistics, TraceEvent

__all__ = [
    "cli",
    "compare_policies",
    "simulate",
    "SchedulerEngine",
    "SimulationConfig",
    "EmptyQueue",
    "InvalidPolicy",
    "InvalidWorkload",
    "SchedulerError",
    "SimulationStalled",
    "Process",
    "ProcessDescriptor",
    "SimulationResult",
    "SimulationStatistics",
    "TraceEvent",
]
