from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from .engine import SchedulerEngine, SimulationConfig
from .interrupts import BinomialInterrupts, InterruptSource
from .models import ProcessDescriptor, SimulationResult
from .policies import POLICIES, Policy, get_policy

logger = logging.getLogger(__name__)

InterruptFactory = Callable[[Policy], InterruptSource]


def seeded_interrupts(seed: Optional[int]) -> InterruptFactory:
    """
    Give every policy its own interrupt stream derived from ``seed`` so one
    engine's draws never shift another's.
    """
    order = list(POLICIES)

    def factory(policy: Policy) -> InterruptSource:
        if seed is None:
            return BinomialInterrupts()
        offset = order.index(policy.key) if policy.key in order else len(order)
        return BinomialInterrupts(seed * 1000 + offset)

    return factory


def simulate(
    policy: str | Policy,
    workload: Sequence[ProcessDescriptor],
    interrupts=None,
    config: Optional[SimulationConfig] = None,
) -> SimulationResult:
    """
    Run one policy to completion over a private copy of ``workload``.
    """
    engine = SchedulerEngine(policy, workload, interrupts=interrupts, config=config)
    engine.run()
    return _result(engine)


def compare_policies(
    workload: Sequence[ProcessDescriptor],
    policies: Optional[Sequence[str]] = None,
    interrupt_factory: Optional[InterruptFactory] = None,
    config: Optional[SimulationConfig] = None,
) -> List[SimulationResult]:
    """
    Run several policies over the same workload, one engine after another.

    Every engine is built (and so every policy name and the workload are
    validated) before the first one runs.
    """
    keys = list(policies) if policies else list(POLICIES)
    factory = interrupt_factory or seeded_interrupts(None)

    engines: List[SchedulerEngine] = []
    for key in keys:
        policy = get_policy(key)
        engines.append(SchedulerEngine(policy, workload, interrupts=factory(policy), config=config))

    results: List[SimulationResult] = []
    for engine in engines:
        logger.info("Running %s over %d processes", engine.policy.label, engine.num_process)
        engine.run()
        results.append(_result(engine))
    return results


def _result(engine: SchedulerEngine) -> SimulationResult:
    return SimulationResult(
        policy=engine.policy.key,
        label=engine.policy.label,
        quantum=engine.quantum,
        processes=sorted(engine.terminated, key=lambda p: p.pid),
        trace=engine.trace,
        statistics=engine.statistics(),
    )
