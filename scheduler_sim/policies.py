from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from .errors import InvalidPolicy
from .queues import Comparator, by_cpu_remaining, by_priority

DEFAULT_QUANTUM = 10


@dataclass(frozen=True)
class Policy:
    """
    How one scheduling algorithm orders and preempts its ready collection.

    ``ready_order`` of None means a FIFO ready queue; otherwise the ready
    queue is a priority queue ordered by that comparator.
    """

    key: str
    label: str
    ready_order: Optional[Comparator] = None
    preemptive: bool = False
    quantum: Optional[int] = None

    @property
    def fifo(self) -> bool:
        return self.ready_order is None


POLICIES: Dict[str, Policy] = {
    "fcfs": Policy("fcfs", "FCFS"),
    "sjf": Policy("sjf", "Non-Preemptive SJF", ready_order=by_cpu_remaining),
    "psjf": Policy("psjf", "Preemptive SJF", ready_order=by_cpu_remaining, preemptive=True),
    "priority": Policy("priority", "Non-Preemptive Priority", ready_order=by_priority),
    "ppriority": Policy("ppriority", "Preemptive Priority", ready_order=by_priority, preemptive=True),
    "rr": Policy("rr", "Round Robin", quantum=DEFAULT_QUANTUM),
}


def get_policy(name: str) -> Policy:
    """
    Look up a policy by key (case-insensitive).
    """
    key = name.lower()
    if key not in POLICIES:
        raise InvalidPolicy(
            f"Unknown scheduling policy '{name}' (choose from: {', '.join(POLICIES)})"
        )
    return POLICIES[key]
