import io

from rich.console import Console

from schedsim.algorithms import schedule_fcfs, schedule_rr
from schedsim.gantt import build_rich_gantt, render_gantt
from schedsim.models import Process, ScheduledSlice
from schedsim.report import build_comparison_table, print_result


def _procs():
    return [Process(1, 0, 5), Process(2, 1, 3), Process(3, 2, 1)]


def _console(width=120, terminal=False):
    return Console(file=io.StringIO(), width=width, record=True, color_system=None, force_terminal=terminal)


def test_render_gantt_plain_text():
    slices = [ScheduledSlice(1, 0, 5), ScheduledSlice(2, 5, 8), ScheduledSlice(3, 8, 9)]
    assert render_gantt(slices).splitlines() == [
        "Gantt schedule",
        "|  1  | 2 | 3 |",
        "0     5   8   9",
    ]


def test_render_gantt_shows_idle_gap():
    text = render_gantt([ScheduledSlice(1, 0, 1), ScheduledSlice(2, 5, 7)])
    bar, marks = text.splitlines()[1:]
    assert bar.count("|") == 4
    assert "." in bar
    assert marks.split() == ["0", "1", "5", "7"]


def test_render_gantt_empty():
    assert "(no execution)" in render_gantt([])
    _, marks = build_rich_gantt([])
    assert marks == ""


def test_print_result_has_banner_gantt_and_footer():
    console = _console()
    print_result(console, schedule_fcfs(_procs()))
    text = console.export_text()

    assert "First-come, first-serve" in text
    assert "Gantt schedule" in text
    assert "|  1  | 2 | 3 |" in text
    assert "Schedule table" in text
    assert "3.33" in text  # average wait
    assert "6.33" in text  # average turnaround
    assert "0.33/t" in text


def test_print_result_mentions_quantum():
    console = _console()
    print_result(console, schedule_rr(_procs(), quantum=2))
    assert "Round-robin (quantum 2)" in console.export_text()


def test_comparison_table_lists_each_run():
    console = _console()
    results = [schedule_fcfs(_procs()), schedule_rr(_procs(), quantum=2)]
    console.print(build_comparison_table(results))
    text = console.export_text()
    assert "First-come, first-serve" in text
    assert "Round-robin" in text
    assert "100.0%" in text


def test_terminal_output_uses_rich_gantt():
    console = _console(terminal=True)
    print_result(console, schedule_fcfs(_procs()))
    text = console.export_text()
    assert "Gantt Chart" in text
    assert "0     5   8   9" in text


def test_gantt_keeps_every_boundary_for_wide_times():
    slices = [ScheduledSlice(1, 99998, 99999), ScheduledSlice(2, 99999, 100000)]
    bar, marks = render_gantt(slices).splitlines()[1:]
    assert marks.split() == ["0", "99998", "99999", "100000"]
    for token_start in (i for i, ch in enumerate(marks) if ch != " " and (i == 0 or marks[i - 1] == " ")):
        assert bar[token_start] == "|"
