from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class ProcessDescriptor:
    """
    Immutable description of a process as produced by the workload generator.

    Descriptors are shared read-only between engines; every engine builds its
    own mutable Process from them.
    """

    pid: int
    cpu_burst: int
    io_burst: int
    arrival: int
    priority: int = 0


@dataclass
class Process:
    pid: int
    cpu_burst: int
    io_burst: int
    arrival: int
    priority: int
    cpu_remaining: int
    io_remaining: int
    waiting: int = 0
    turnaround: int = 0
    completion: Optional[int] = None

    @classmethod
    def from_descriptor(cls, desc: ProcessDescriptor) -> "Process":
        return cls(
            pid=desc.pid,
            cpu_burst=desc.cpu_burst,
            io_burst=desc.io_burst,
            arrival=desc.arrival,
            priority=desc.priority,
            cpu_remaining=desc.cpu_burst,
            io_remaining=desc.io_burst,
        )


@dataclass(frozen=True)
class TraceEvent:
    """
    What the CPU did during one tick. ``pid is None`` means the CPU was idle.
    """

    tick: int
    pid: Optional[int]

    @property
    def idle(self) -> bool:
        return self.pid is None


@dataclass
class SimulationStatistics:
    elapsed_time: int
    idle_time: int
    cpu_utilization: float
    avg_waiting: float
    avg_turnaround: float
    max_waiting: int

    @property
    def execution_time(self) -> int:
        # the finishing tick is not followed by an increment of elapsed_time
        return self.elapsed_time + 1


@dataclass
class SimulationResult:
    policy: str
    label: str
    quantum: Optional[int]
    processes: List[Process] = field(default_factory=list)
    trace: List[TraceEvent] = field(default_factory=list)
    statistics: Optional[SimulationStatistics] = None
