import json
from pathlib import Path

from scheduler_sim.cli import main


def _write_workload(tmp_path: Path) -> Path:
    path = tmp_path / "w.json"
    path.write_text(
        json.dumps(
            [
                {"pid": 1, "cpu_burst": 3, "io_burst": 0, "arrival": 0, "priority": 0},
                {"pid": 2, "cpu_burst": 2, "io_burst": 0, "arrival": 0, "priority": 0},
            ]
        )
    )
    return path


def test_run_prints_statistics(tmp_path: Path, capsys):
    path = _write_workload(tmp_path)
    assert main(["run", "--policy", "fcfs", "--workload", str(path)]) == 0
    out = capsys.readouterr().out
    assert "Average waiting time: 1.500" in out
    assert "Average turnaround time: 4.000" in out


def test_compare_prints_summary(capsys):
    assert main(["compare", "-n", "8", "--seed", "5"]) == 0
    out = capsys.readouterr().out
    assert "Summary" in out
    assert "Round Robin" in out


def test_generate_writes_file(tmp_path: Path):
    out = tmp_path / "gen.csv"
    assert main(["generate", "-n", "4", "--seed", "1", "-o", str(out)]) == 0
    assert out.read_text().startswith("pid,cpu_burst,io_burst,arrival,priority")


def test_invalid_policy_exits_non_zero(tmp_path: Path, capsys):
    path = _write_workload(tmp_path)
    assert main(["run", "--policy", "lottery", "--workload", str(path)]) == 1
    assert "Unknown scheduling policy" in capsys.readouterr().out


def test_zero_processes_exits_non_zero(capsys):
    assert main(["compare", "-n", "0"]) == 1
    assert "must be positive" in capsys.readouterr().out


def test_zero_quantum_exits_non_zero(capsys):
    assert main(["run", "-p", "rr", "-n", "3", "--seed", "1", "-q", "0", "--no-trace"]) == 1
    assert "positive quantum" in capsys.readouterr().out
