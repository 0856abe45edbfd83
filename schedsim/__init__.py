"""
CPU scheduling simulator.

Runs classical scheduling policies (FCFS, SJF, Priority, Round Robin, SRTF)
over a fixed set of processes and reports per-process timing metrics and a
Gantt timeline.
"""

from .algorithms import ALGORITHMS, run_algorithm
from .models import Process, ScheduleResult

__all__ = ["ALGORITHMS", "Process", "ScheduleResult", "run_algorithm"]
