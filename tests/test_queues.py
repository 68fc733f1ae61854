import random

import pytest

from scheduler_sim.errors import EmptyQueue
from scheduler_sim.models import Process
from scheduler_sim.queues import (
    FifoQueue,
    PriorityQueue,
    by_arrival,
    by_cpu_remaining,
    by_io_remaining,
    by_priority,
)


def _proc(pid, cpu=1, io=0, arrival=0, priority=0):
    return Process(
        pid=pid,
        cpu_burst=cpu,
        io_burst=io,
        arrival=arrival,
        priority=priority,
        cpu_remaining=cpu,
        io_remaining=io,
    )


def test_fifo_order():
    q = FifoQueue()
    for pid in [3, 1, 2]:
        q.push_back(_proc(pid))
    assert q.front().pid == 3
    assert [q.pop_front().pid for _ in range(3)] == [3, 1, 2]
    assert len(q) == 0
    assert q.front() is None


def test_fifo_pop_empty_raises():
    with pytest.raises(EmptyQueue):
        FifoQueue().pop_front()


def test_priority_pop_empty_raises():
    q = PriorityQueue(lambda a, b: a < b)
    assert q.peek() is None
    with pytest.raises(EmptyQueue):
        q.pop()
    # still an IndexError for callers that only know the builtin
    with pytest.raises(IndexError):
        q.pop()


def test_priority_pops_in_order():
    q = PriorityQueue(lambda a, b: a < b)
    for v in [5, 3, 8, 1, 9, 2, 7]:
        q.push(v)
    assert len(q) == 7
    assert [q.pop() for _ in range(7)] == [1, 2, 3, 5, 7, 8, 9]


def test_heap_invariant_under_interleaved_operations():
    rng = random.Random(7)
    q = PriorityQueue(lambda a, b: a < b)
    contents = []
    for _ in range(500):
        if contents and rng.random() < 0.4:
            popped = q.pop()
            assert popped == min(contents)
            contents.remove(popped)
        else:
            v = rng.randrange(1000)
            q.push(v)
            contents.append(v)
        assert q.is_heap()
        assert len(q) == len(contents)
        if contents:
            assert q.peek() == min(contents)


def test_sjf_comparator_breaks_ties_by_pid():
    q = PriorityQueue(by_cpu_remaining)
    q.push(_proc(4, cpu=5))
    q.push(_proc(2, cpu=5))
    q.push(_proc(9, cpu=1))
    assert [q.pop().pid for _ in range(3)] == [9, 2, 4]


def test_priority_comparator_prefers_smaller_value():
    q = PriorityQueue(by_priority)
    q.push(_proc(1, priority=10))
    q.push(_proc(2, priority=-20))
    q.push(_proc(3, priority=-20))
    assert [q.pop().pid for _ in range(3)] == [2, 3, 1]


def test_io_and_arrival_comparators():
    io_q = PriorityQueue(by_io_remaining)
    arr_q = PriorityQueue(by_arrival)
    for pid, io, arrival in [(1, 4, 6), (2, 0, 6), (3, 4, 0)]:
        io_q.push(_proc(pid, io=io))
        arr_q.push(_proc(pid, arrival=arrival))
    assert [io_q.pop().pid for _ in range(3)] == [2, 1, 3]
    assert [arr_q.pop().pid for _ in range(3)] == [3, 1, 2]
