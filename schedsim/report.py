from __future__ import annotations

from typing import Iterable, List

from rich import box
from rich.console import Console
from rich.table import Table

from .gantt import build_rich_gantt, render_gantt
from .models import ProcessMetrics, ScheduleResult, ScheduledSlice


def print_title(console: Console, title: str) -> None:
    rule = "-" * (len(title) * 2)
    console.print(rule, markup=False, highlight=False)
    console.print(" " * (len(title) // 2), title, markup=False, highlight=False)
    console.print(rule, markup=False, highlight=False)


def print_gantt(console: Console, timeline: List[ScheduledSlice]) -> None:
    if not console.is_terminal:
        console.print(render_gantt(timeline), markup=False, highlight=False)
        return

    panel, time_marks = build_rich_gantt(timeline)
    console.print(panel)
    if time_marks:
        # Offset by the panel's left border and padding.
        console.print("  " + time_marks, highlight=False)


def build_schedule_table(
    rows: List[ProcessMetrics],
    average_waiting: float,
    average_turnaround: float,
    throughput: float,
) -> Table:
    table = Table(title="Schedule table", box=box.SIMPLE_HEAVY, show_footer=True)
    table.add_column("ID", justify="center")
    table.add_column("Priority", justify="center")
    table.add_column("Burst", justify="right")
    table.add_column("Arrival", justify="right")
    table.add_column("Wait", justify="right", footer=f"Average\n{average_waiting:.2f}")
    table.add_column("Turnaround", justify="right", footer=f"Average\n{average_turnaround:.2f}")
    table.add_column("Exit", justify="right", footer=f"Throughput\n{throughput:.2f}/t")

    for row in rows:
        table.add_row(
            str(row.pid),
            str(row.priority),
            str(row.burst_time),
            str(row.arrival_time),
            str(row.waiting_time),
            str(row.turnaround_time),
            str(row.completion_time),
        )
    return table


def print_report(
    console: Console,
    title: str,
    timeline: List[ScheduledSlice],
    rows: List[ProcessMetrics],
    average_waiting: float,
    average_turnaround: float,
    throughput: float,
) -> None:
    """
    Render one policy run: title banner, Gantt chart, then the schedule table
    with the three aggregate metrics in its footer.
    """
    print_title(console, title)
    print_gantt(console, timeline)
    console.print()
    console.print(build_schedule_table(rows, average_waiting, average_turnaround, throughput))


def print_result(console: Console, result: ScheduleResult) -> None:
    system = result.system
    title = result.algorithm if result.quantum is None else f"{result.algorithm} (quantum {result.quantum})"
    print_report(
        console,
        title,
        result.timeline,
        result.processes,
        system.average_waiting,
        system.average_turnaround,
        system.throughput,
    )


def build_comparison_table(results: Iterable[ScheduleResult], title: str = "Algorithm comparison") -> Table:
    summary_table = Table(title=title, box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm", no_wrap=True)
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")
    summary_table.add_column("Throughput (proc/time)", justify="right")
    summary_table.add_column("CPU utilization", justify="right")

    for result in results:
        system = result.system
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{system.average_waiting:.2f}",
            f"{system.average_turnaround:.2f}",
            f"{system.average_response:.2f}",
            f"{system.throughput:.3f}",
            f"{system.cpu_utilization * 100:.1f}%",
        )

    return summary_table
