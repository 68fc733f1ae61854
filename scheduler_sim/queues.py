from __future__ import annotations

from collections import deque
from typing import Callable, Deque, Generic, Iterator, List, Optional, TypeVar

from .errors import EmptyQueue
from .models import Process

T = TypeVar("T")

Comparator = Callable[[T, T], bool]


def by_cpu_remaining(a: Process, b: Process) -> bool:
    """Shortest remaining CPU burst first, then lowest pid."""
    return (a.cpu_remaining, a.pid) < (b.cpu_remaining, b.pid)


def by_priority(a: Process, b: Process) -> bool:
    """Smallest priority value first, then lowest pid."""
    return (a.priority, a.pid) < (b.priority, b.pid)


def by_io_remaining(a: Process, b: Process) -> bool:
    return (a.io_remaining, a.pid) < (b.io_remaining, b.pid)


def by_arrival(a: Process, b: Process) -> bool:
    return (a.arrival, a.pid) < (b.arrival, b.pid)


class FifoQueue(Generic[T]):
    """
    First-in first-out queue. Insertion order is service order.
    """

    def __init__(self) -> None:
        self._items: Deque[T] = deque()

    def push_back(self, item: T) -> None:
        self._items.append(item)

    def pop_front(self) -> T:
        if not self._items:
            raise EmptyQueue("pop_front() on an empty FIFO queue")
        return self._items.popleft()

    def front(self) -> Optional[T]:
        return self._items[0] if self._items else None

    # Uniform names shared with PriorityQueue so the engine can hold either.
    push = push_back
    pop = pop_front
    peek = front

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"FifoQueue({list(self._items)!r})"


class PriorityQueue(Generic[T]):
    """
    Binary min-heap ordered by a strict ``better(a, b)`` comparator.

    The heap lives in a flat list: the children of slot ``i`` are ``2i+1`` and
    ``2i+2`` and its parent is ``(i-1)//2``. For every non-root slot,
    ``better(slot, parent)`` is false, so ``peek()`` is always an element no
    other element is better than.
    """

    def __init__(self, better: Comparator) -> None:
        self.better = better
        self._heap: List[T] = []

    def push(self, item: T) -> None:
        self._heap.append(item)
        self._sift_up(len(self._heap) - 1)

    def pop(self) -> T:
        heap = self._heap
        if not heap:
            raise EmptyQueue("pop() on an empty priority queue")

        top = heap[0]
        last = heap.pop()
        if heap:
            heap[0] = last
            self._sift_down(0)
        return top

    def peek(self) -> Optional[T]:
        return self._heap[0] if self._heap else None

    def __len__(self) -> int:
        return len(self._heap)

    def __iter__(self) -> Iterator[T]:
        """Iterate over every element in storage order (not sorted)."""
        return iter(self._heap)

    def __repr__(self) -> str:
        return f"PriorityQueue({self._heap!r})"

    def is_heap(self) -> bool:
        heap = self._heap
        return not any(self.better(heap[i], heap[(i - 1) // 2]) for i in range(1, len(heap)))

    def _sift_up(self, idx: int) -> None:
        heap = self._heap
        item = heap[idx]
        while idx > 0:
            parent = (idx - 1) // 2
            if not self.better(item, heap[parent]):
                break
            heap[idx] = heap[parent]
            idx = parent
        heap[idx] = item

    def _sift_down(self, idx: int) -> None:
        heap = self._heap
        size = len(heap)
        item = heap[idx]
        while True:
            child = 2 * idx + 1
            if child >= size:
                break
            right = child + 1
            if right < size and self.better(heap[right], heap[child]):
                child = right
            if not self.better(heap[child], item):
                break
            heap[idx] = heap[child]
            idx = child
        heap[idx] = item
