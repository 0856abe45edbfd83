from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Process:
    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0


@dataclass
class WorkItem:
    """
    Mutable working copy of a Process owned by a single policy run.

    Only ``remaining`` and ``start_time`` change while the run progresses; the
    original burst stays available through ``process``.
    """

    process: Process
    remaining: int
    start_time: Optional[int] = None

    @classmethod
    def from_process(cls, process: Process) -> "WorkItem":
        return cls(process=process, remaining=process.burst_time)

    @property
    def pid(self) -> int:
        return self.process.pid


@dataclass(frozen=True)
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: int
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass(frozen=True)
class ProcessMetrics:
    pid: int
    arrival_time: int
    burst_time: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int
    priority: int = 0


@dataclass(frozen=True)
class SystemMetrics:
    average_waiting: float
    average_turnaround: float
    average_response: float
    throughput: float
    makespan: int
    cpu_busy_time: int
    cpu_utilization: float


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[ProcessMetrics] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    system: Optional[SystemMetrics] = None
