from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Union

from .errors import InvalidPolicy, InvalidWorkload, SchedulerError, SimulationStalled
from .interrupts import BinomialInterrupts, InterruptSource
from .metrics import evaluate
from .models import Process, ProcessDescriptor, SimulationStatistics, TraceEvent
from .policies import Policy, get_policy
from .queues import FifoQueue, PriorityQueue, by_arrival, by_io_remaining

logger = logging.getLogger(__name__)


@dataclass
class SimulationConfig:
    """
    Tunables shared by every engine of a run.

    ``quantum`` overrides the round-robin quantum (ignored by other policies).
    ``tick_budget`` of None derives a bound from the workload.
    """

    quantum: Optional[int] = None
    tick_budget: Optional[int] = None


def default_tick_budget(workload: Sequence[ProcessDescriptor]) -> int:
    # After the last arrival every tick burns either CPU or I/O time of some
    # process, so this bound is only hit when the engine is broken.
    last_arrival = max(d.arrival for d in workload)
    work = sum(d.cpu_burst + d.io_burst for d in workload)
    return 2 * (last_arrival + work + 1)


class SchedulerEngine:
    """
    Discrete-time simulation of one scheduling policy over a private copy of
    a workload.

    Every process lives in exactly one of ``job_queue`` (not yet arrived),
    ``ready``, ``waiting`` (doing I/O), ``running`` or ``terminated``. Call
    ``tick()`` to advance one time unit, or ``run()`` to go to completion.
    """

    def __init__(
        self,
        policy: Union[str, Policy],
        workload: Sequence[ProcessDescriptor],
        interrupts: Optional[InterruptSource] = None,
        config: Optional[SimulationConfig] = None,
    ) -> None:
        self.policy = get_policy(policy) if isinstance(policy, str) else policy
        self.config = config or SimulationConfig()
        if self.policy.preemptive and self.policy.fifo:
            raise InvalidPolicy(f"{self.policy.label}: preemption needs an ordered ready queue")

        if not workload:
            raise InvalidWorkload("Workload must contain at least one process")
        pids = set()
        for desc in workload:
            if desc.cpu_burst <= 0:
                raise InvalidWorkload(f"Process {desc.pid} has a non-positive CPU burst ({desc.cpu_burst})")
            if desc.io_burst < 0 or desc.arrival < 0:
                raise InvalidWorkload(f"Process {desc.pid} has a negative I/O burst or arrival time")
            if desc.pid in pids:
                raise InvalidWorkload(f"Duplicate process id {desc.pid}")
            pids.add(desc.pid)

        self.quantum: Optional[int] = None
        if self.policy.quantum is not None:
            self.quantum = self.policy.quantum if self.config.quantum is None else self.config.quantum
            if self.quantum <= 0:
                raise InvalidPolicy(f"{self.policy.label} requires a positive quantum (got {self.quantum})")

        self.interrupts = interrupts if interrupts is not None else BinomialInterrupts()
        self.tick_budget = self.config.tick_budget or default_tick_budget(workload)

        self.num_process = len(workload)
        self.job_queue: PriorityQueue[Process] = PriorityQueue(by_arrival)
        for desc in workload:
            self.job_queue.push(Process.from_descriptor(desc))

        if self.policy.fifo:
            self.ready: Union[FifoQueue[Process], PriorityQueue[Process]] = FifoQueue()
        else:
            self.ready = PriorityQueue(self.policy.ready_order)

        self.waiting: PriorityQueue[Process] = PriorityQueue(by_io_remaining)
        self.terminated: List[Process] = []
        self.running: Optional[Process] = None

        self.elapsed_time = 0
        self.idle_time = 0
        self.quantum_used = 0
        self.finished = False
        self.trace: List[TraceEvent] = []

    @property
    def state(self) -> str:
        if self.finished:
            return "terminated"
        return "idle" if self.running is None else "running"

    def run(self) -> SimulationStatistics:
        """
        Tick until every process has terminated and return the statistics.
        """
        while not self.tick():
            pass
        return self.statistics()

    def tick(self) -> bool:
        """
        Advance the simulation by one time unit. Returns True once finished.
        """
        if self.finished:
            return True
        if self.elapsed_time >= self.tick_budget:
            raise SimulationStalled(
                f"{self.policy.label}: no termination after {self.elapsed_time} ticks "
                f"({len(self.terminated)}/{self.num_process} processes finished)"
            )

        self._admit_arrivals()
        self._admit_completed_io()
        self._dispatch()
        if self.policy.preemptive:
            self._preempt()
        self._age_ready()
        self._progress_io()
        self._early_io_return()

        if self._execute():
            self.finished = True
            logger.info(
                "%s finished at tick %d (idle %d)", self.policy.label, self.elapsed_time, self.idle_time
            )
            return True

        self.elapsed_time += 1
        return False

    def statistics(self) -> SimulationStatistics:
        if not self.finished:
            raise SchedulerError(f"{self.policy.label} simulation has not finished yet")
        return evaluate(self.terminated, self.elapsed_time, self.idle_time, self.num_process)

    def snapshot(self) -> Dict[str, List[int]]:
        """
        Pids held by each collection, for reporting and invariant checks.
        """
        return {
            "job_queue": sorted(p.pid for p in self.job_queue),
            "ready": [p.pid for p in self.ready],
            "waiting": sorted(p.pid for p in self.waiting),
            "running": [] if self.running is None else [self.running.pid],
            "terminated": [p.pid for p in self.terminated],
        }

    def _admit_arrivals(self) -> None:
        job_queue = self.job_queue
        while len(job_queue) and job_queue.peek().arrival == self.elapsed_time:
            self.ready.push(job_queue.pop())

    def _admit_completed_io(self) -> None:
        waiting = self.waiting
        while len(waiting) and waiting.peek().io_remaining == 0:
            self.ready.push(waiting.pop())

    def _dispatch(self) -> None:
        if self.running is None and len(self.ready):
            self.running = self.ready.pop()

    def _preempt(self) -> None:
        ready = self.ready
        if self.running is None or not len(ready):
            return
        if ready.better(ready.peek(), self.running):
            logger.debug(
                "t=%d %s: process %d preempted by %d",
                self.elapsed_time,
                self.policy.key,
                self.running.pid,
                ready.peek().pid,
            )
            ready.push(self.running)
            self.running = None
            self._dispatch()

    def _age_ready(self) -> None:
        for proc in self.ready:
            proc.waiting += 1
            proc.turnaround += 1

    def _progress_io(self) -> None:
        # A uniform decrement keeps the heap order valid.
        for proc in self.waiting:
            if proc.io_remaining > 0:
                proc.io_remaining -= 1
            proc.turnaround += 1

    def _early_io_return(self) -> None:
        if not len(self.waiting):
            return

        rebuilt: PriorityQueue[Process] = PriorityQueue(by_io_remaining)
        while len(self.waiting):
            proc = self.waiting.pop()
            if self.interrupts.draw() and proc.cpu_remaining > 1:
                logger.debug("t=%d %s: process %d left I/O early", self.elapsed_time, self.policy.key, proc.pid)
                self.ready.push(proc)
            else:
                rebuilt.push(proc)
        self.waiting = rebuilt

    def _execute(self) -> bool:
        proc = self.running
        if proc is None:
            self.idle_time += 1
            self.trace.append(TraceEvent(self.elapsed_time, None))
            return False

        proc.cpu_remaining -= 1
        proc.turnaround += 1
        self.trace.append(TraceEvent(self.elapsed_time, proc.pid))

        if proc.cpu_remaining == 0:
            proc.completion = self.elapsed_time
            self.terminated.append(proc)
            self.running = None
            self.quantum_used = 0
            logger.debug("t=%d %s: process %d terminated", self.elapsed_time, self.policy.key, proc.pid)
            return len(self.terminated) == self.num_process

        if proc.io_remaining > 0 and (proc.cpu_remaining == 1 or self.interrupts.draw()):
            logger.debug("t=%d %s: process %d requested I/O", self.elapsed_time, self.policy.key, proc.pid)
            self.waiting.push(proc)
            self.running = None
            self.quantum_used = 0
            return False

        if self.quantum is not None:
            self.quantum_used += 1
            if self.quantum_used >= self.quantum:
                self.ready.push(proc)
                self.running = None
                self.quantum_used = 0

        return False
