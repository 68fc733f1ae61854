from __future__ import annotations

from itertools import groupby
from typing import Iterable, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import TraceEvent

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def render_trace(trace: Iterable[TraceEvent], width: int = 10) -> str:
    """
    Plain-text tick-by-tick chart: one ``[ pid ]`` or ``[  IDLE  ]`` block per
    tick, ``width`` blocks per line.
    """
    blocks = ["[  IDLE  ]" if event.idle else f"[ {event.pid:>6} ]" for event in trace]
    if not blocks:
        return "(no execution)"

    lines = ["".join(blocks[i : i + width]) for i in range(0, len(blocks), width)]
    return "\n".join(lines)


def build_rich_gantt(trace: Sequence[TraceEvent]) -> tuple[Panel, str]:
    """
    Colored Gantt panel drawn straight from the per-tick trace, plus a line of
    time marks at every CPU switch. Idle stretches show as dots; a process
    keeps the same color every time it runs.
    """
    if not trace:
        return Panel("No execution", title="Gantt Chart"), ""

    timeline = Text()
    labels = Text()
    time_marks = str(trace[0].tick)

    for pid, run in groupby(trace, key=lambda event: event.pid):
        ticks = list(run)
        span = len(ticks)
        if pid is None:
            timeline.append("." * span, style="dim")
            labels.append(" " * span)
        else:
            timeline.append(" " * span, style=f"on {COLORS[pid % len(COLORS)]}")
            labels.append(str(pid)[:span].ljust(span), style="bold")
        time_marks += f"{ticks[-1].tick + 1:>4}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)
    return Panel.fit(table, title="Gantt Chart"), time_marks
