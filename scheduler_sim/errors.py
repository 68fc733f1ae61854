from __future__ import annotations


class SchedulerError(Exception):
    """Base class for every error raised by the simulator."""


class EmptyQueue(SchedulerError, IndexError):
    """pop() on an empty FIFO or priority queue."""


class InvalidPolicy(SchedulerError, ValueError):
    """Unrecognized scheduling policy name."""


class InvalidWorkload(SchedulerError, ValueError):
    """Empty workload, or a process that can never terminate."""


class SimulationStalled(SchedulerError, RuntimeError):
    """The engine ran past its tick budget without terminating."""
