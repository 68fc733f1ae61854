from pathlib import Path

import pytest

from scheduler_sim.errors import InvalidWorkload
from scheduler_sim.models import ProcessDescriptor
from scheduler_sim.workload_io import generate_workload, load_workload, save_workload


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"cpu_burst":3,"io_burst":2,"arrival":0,"priority":-4},'
                 '{"pid":2,"cpu_burst":2,"arrival":1}]')
    procs = load_workload(p)
    assert isinstance(procs[0], ProcessDescriptor)
    assert procs[0].priority == -4
    assert procs[1].io_burst == 0
    assert procs[1].priority == 0
    assert procs[1].arrival == 1


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,cpu_burst,io_burst,arrival,priority\n1,3,0,0,1\n2,2,5,1,\n")
    procs = load_workload(p)
    assert procs[0].pid == 1
    assert procs[1].io_burst == 5
    assert procs[1].priority == 0


def test_load_rejects_bad_entries(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"arrival":0}]')
    with pytest.raises(ValueError):
        load_workload(p)

    p.write_text('[{"pid":1,"cpu_burst":0,"arrival":0}]')
    with pytest.raises(InvalidWorkload):
        load_workload(p)

    with pytest.raises(ValueError):
        load_workload(tmp_path / "w.txt")


def test_save_then_load(tmp_path: Path):
    workload = generate_workload(12, seed=3)
    for name in ["w.json", "w.csv"]:
        path = save_workload(workload, tmp_path / name)
        assert load_workload(path) == workload


def test_generated_ranges():
    n = 200
    workload = generate_workload(n, seed=42)
    assert [d.pid for d in workload] == list(range(1, n + 1))
    for d in workload:
        assert 1 <= d.cpu_burst <= 40
        assert 0 <= d.io_burst <= 19
        assert 0 <= d.arrival < 3 * n
        assert -20 <= d.priority <= 20


def test_generator_is_seeded_and_has_debug_switches():
    assert generate_workload(20, seed=9) == generate_workload(20, seed=9)
    flat = generate_workload(20, seed=9, zero_io=True, zero_arrival=True)
    assert all(d.io_burst == 0 and d.arrival == 0 for d in flat)


def test_generator_rejects_empty():
    with pytest.raises(InvalidWorkload):
        generate_workload(0)
