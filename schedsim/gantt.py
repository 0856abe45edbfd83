from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from rich.panel import Panel
from rich.text import Text

from .models import ScheduledSlice

MAX_CELL_WIDTH = 12
IDLE_LABEL = "."

# (pid or None for idle CPU, start, end)
Cell = Tuple[Optional[int], int, int]


def _cells(slices: List[ScheduledSlice]) -> List[Cell]:
    cells: List[Cell] = []
    last_time = 0
    for sl in sorted(slices, key=lambda s: (s.start_time, s.end_time)):
        if sl.start_time > last_time:
            cells.append((None, last_time, sl.start_time))
        cells.append((sl.pid, sl.start_time, sl.end_time))
        last_time = sl.end_time
    return cells


def _label(pid: Optional[int]) -> str:
    return IDLE_LABEL if pid is None else str(pid)


def _cell_width(cell: Cell) -> int:
    # Wide enough for the label and for the start time printed beneath it.
    pid, start, end = cell
    return max(len(_label(pid)) + 2, min(end - start, MAX_CELL_WIDTH), len(str(start)) + 1)


def _time_marks(cells: List[Cell], widths: List[int]) -> str:
    """
    Place each cell boundary time under the '|' that opens the cell.
    """
    marks = ""
    column = 0
    for (_, start, _), width in zip(cells, widths):
        marks = marks.ljust(column) + str(start)
        column += width + 1

    return marks.ljust(column) + str(cells[-1][2])


def render_gantt(slices: List[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart: one cell per slice with the process id centred in
    it, slice boundary times on the line below.
    """
    if not slices:
        return "Gantt schedule\n(no execution)"

    cells = _cells(slices)
    widths = [_cell_width(c) for c in cells]
    bar = "|" + "|".join(_label(pid).center(width) for (pid, _, _), width in zip(cells, widths)) + "|"

    return "\n".join(["Gantt schedule", bar, _time_marks(cells, widths)])


def build_rich_gantt(slices: List[ScheduledSlice]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not slices:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    cells = _cells(slices)
    widths = [_cell_width(c) for c in cells]

    timeline = Text("|")
    for (pid, _, _), width in zip(cells, widths):
        if pid is None:
            timeline.append(IDLE_LABEL * width, style="dim")
        else:
            timeline.append(_label(pid).center(width), style=f"bold on {pid_color(pid)}")
        timeline.append("|")

    panel = Panel.fit(timeline, title="Gantt Chart")
    return panel, _time_marks(cells, widths)
