"""
Sources of "did an interrupt occur" decisions.

The engine asks for one draw per waiting process per tick (early I/O return)
and one per running process that could request I/O. Any object with a
``draw() -> bool`` method can be passed in.
"""

from __future__ import annotations

import random
from collections import deque
from typing import Iterable, Optional, Protocol


class InterruptSource(Protocol):
    def draw(self) -> bool: ...


class BinomialInterrupts:
    """
    Flip a fair coin 100 times and report an interrupt when at least 50 land
    heads, which comes out true a little more than half the time (about 0.54).
    """

    flips = 100

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def draw(self) -> bool:
        heads = sum(self._rng.getrandbits(1) for _ in range(self.flips))
        return heads >= self.flips // 2


class ScriptedInterrupts:
    """
    Replay a fixed sequence of decisions; once exhausted, keep returning
    ``default``. ``calls`` counts every draw.
    """

    def __init__(self, values: Iterable[bool] = (), default: bool = False) -> None:
        self._values = deque(bool(v) for v in values)
        self.default = default
        self.calls = 0

    def draw(self) -> bool:
        self.calls += 1
        if self._values:
            return self._values.popleft()
        return self.default


class NeverInterrupt:
    def draw(self) -> bool:
        return False
