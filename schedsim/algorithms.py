from __future__ import annotations

import logging
from collections import deque
from typing import Any, Callable, Deque, Iterable, List, Optional, Sequence

from .errors import ConfigurationError, WorkloadError
from .metrics import MetricsAccumulator
from .models import Process, ProcessMetrics, ScheduleResult, WorkItem
from .pqueue import MinPriorityQueue
from .timeline import TimelineRecorder

logger = logging.getLogger(__name__)

SelectionKey = Callable[[WorkItem], Any]


def validate_processes(processes: Iterable[Process]) -> None:
    """
    Reject process sets no policy can run: negative arrivals, non-positive
    bursts and duplicate process IDs.
    """
    seen = set()
    for p in processes:
        if p.arrival_time < 0:
            raise WorkloadError(f"Process {p.pid} has a negative arrival time ({p.arrival_time})")
        if p.burst_time <= 0:
            raise WorkloadError(f"Process {p.pid} needs a positive burst time (got {p.burst_time})")
        if p.pid in seen:
            raise WorkloadError(f"Duplicate process id {p.pid}")
        seen.add(p.pid)


def _arrival_queue(processes: Sequence[Process]) -> Deque[WorkItem]:
    # Fresh working copies per run; the caller's records are never touched.
    ordered = sorted(processes, key=lambda p: (p.arrival_time, p.pid))
    return deque(WorkItem.from_process(p) for p in ordered)


class _Run:
    """
    State owned by one policy invocation: the Gantt trace, the finished rows
    and the running metric totals.
    """

    def __init__(self, algorithm: str, quantum: Optional[int] = None, coalesce: bool = False) -> None:
        self.algorithm = algorithm
        self.quantum = quantum
        self.timeline = TimelineRecorder(coalesce=coalesce)
        self.rows: List[ProcessMetrics] = []
        self.totals = MetricsAccumulator()

    def execute(self, item: WorkItem, start_time: int, run_time: int) -> int:
        """Run ``item`` for ``run_time`` units from ``start_time``; return the new clock."""
        if item.start_time is None:
            item.start_time = start_time
        end_time = start_time + run_time
        item.remaining -= run_time
        self.timeline.record(item.pid, start_time, end_time)
        return end_time

    def complete(self, item: WorkItem, completion_time: int) -> None:
        p = item.process
        turnaround_time = completion_time - p.arrival_time
        row = ProcessMetrics(
            pid=p.pid,
            arrival_time=p.arrival_time,
            burst_time=p.burst_time,
            start_time=item.start_time,
            completion_time=completion_time,
            waiting_time=turnaround_time - p.burst_time,
            turnaround_time=turnaround_time,
            response_time=item.start_time - p.arrival_time,
            priority=p.priority,
        )
        self.rows.append(row)
        self.totals.add(row)
        logger.debug("t=%d: process %d completed (wait %d)", completion_time, p.pid, row.waiting_time)

    def result(self) -> ScheduleResult:
        system = self.totals.finalize(self.timeline.busy_time)
        logger.info(
            "%s: %d processes, avg wait %.2f, avg turnaround %.2f",
            self.algorithm,
            len(self.rows),
            system.average_waiting,
            system.average_turnaround,
        )
        return ScheduleResult(
            algorithm=self.algorithm,
            quantum=self.quantum,
            processes=self.rows,
            timeline=self.timeline.slices(),
            system=system,
        )


def schedule_fcfs(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive).

    Processes run in arrival order; equal arrivals keep their input order.
    """
    validate_processes(processes)
    run = _Run("First-come, first-serve")

    time = 0
    for p in sorted(processes, key=lambda p: p.arrival_time):
        item = WorkItem.from_process(p)
        if time < p.arrival_time:
            time = p.arrival_time
        time = run.execute(item, time, item.remaining)
        run.complete(item, time)

    return run.result()


def _schedule_non_preemptive(processes: List[Process], algorithm: str, key: SelectionKey) -> ScheduleResult:
    """
    Shared engine for SJF and Priority.

    At each decision point the arrived process with the smallest ``key`` runs
    to completion. With nothing ready the clock jumps to the next arrival.
    """
    validate_processes(processes)
    run = _Run(algorithm)

    pending = _arrival_queue(processes)
    ready: MinPriorityQueue[WorkItem] = MinPriorityQueue(key)
    time = 0

    while pending or ready:
        while pending and pending[0].process.arrival_time <= time:
            ready.push(pending.popleft())

        if not ready:
            time = pending[0].process.arrival_time
            continue

        item = ready.pop()
        logger.debug("t=%d: %s dispatches process %d", time, algorithm, item.pid)
        time = run.execute(item, time, item.remaining)
        run.complete(item, time)

    return run.result()


def _shortest_job_key(item: WorkItem):
    p = item.process
    return (p.burst_time, p.arrival_time, p.pid)


def _priority_key(item: WorkItem):
    # Lower value means higher priority; shorter burst breaks ties.
    p = item.process
    return (p.priority, p.burst_time, p.arrival_time, p.pid)


def schedule_sjf(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    Tie-breaker: earlier arrival, then lower PID.
    """
    return _schedule_non_preemptive(processes, "Shortest-job-first", _shortest_job_key)


def schedule_priority(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority. Ties are broken by
    shorter burst, then earlier arrival, then PID.
    """
    return _schedule_non_preemptive(processes, "Priority", _priority_key)


def schedule_rr(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.
    """
    if quantum is None or quantum <= 0:
        raise ConfigurationError("Round Robin requires a positive quantum (use --quantum)")
    validate_processes(processes)
    run = _Run("Round-robin", quantum=quantum)

    pending = _arrival_queue(processes)
    ready: Deque[WorkItem] = deque()
    time = 0

    def enqueue_new_arrivals(current_time: int) -> None:
        while pending and pending[0].process.arrival_time <= current_time:
            ready.append(pending.popleft())

    enqueue_new_arrivals(time)

    while pending or ready:
        if not ready:
            # Jump to next arrival if CPU is idle
            time = pending[0].process.arrival_time
            enqueue_new_arrivals(time)
            continue

        item = ready.popleft()
        run_time = min(quantum, item.remaining)
        time = run.execute(item, time, run_time)

        # Arrivals during this slice queue up ahead of the preempted process.
        enqueue_new_arrivals(time)

        if item.remaining > 0:
            ready.append(item)
        else:
            run.complete(item, time)

    return run.result()


def schedule_srtf(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Remaining Time First (preemptive SJF).

    The running process is re-evaluated against the ready set at every
    arrival. Consecutive slices of the same process are merged in the
    timeline.
    """
    validate_processes(processes)
    run = _Run("Shortest-remaining-time-first", coalesce=True)

    pending = _arrival_queue(processes)
    ready: MinPriorityQueue[WorkItem] = MinPriorityQueue(
        key=lambda item: (item.remaining, item.process.arrival_time, item.pid)
    )
    time = 0

    while pending or ready:
        while pending and pending[0].process.arrival_time <= time:
            ready.push(pending.popleft())

        if not ready:
            time = pending[0].process.arrival_time
            continue

        item = ready.pop()

        # Run until completion or next arrival, whichever comes first.
        run_time = item.remaining
        if pending:
            run_time = min(run_time, pending[0].process.arrival_time - time)

        time = run.execute(item, time, run_time)

        if item.remaining > 0:
            ready.push(item)
        else:
            run.complete(item, time)

    return run.result()


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "priority": schedule_priority,
    "rr": schedule_rr,
    "srtf": schedule_srtf,
}

QUANTUM_ALGORITHMS = frozenset({"rr"})


def run_algorithm(name: str, processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. Only round-robin uses the quantum.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ConfigurationError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[name]
    return func(processes, quantum=quantum)
