from __future__ import annotations

from .models import ProcessMetrics, SystemMetrics


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


class MetricsAccumulator:
    """
    Running totals for one policy run, finalized into SystemMetrics once every
    process has completed.
    """

    def __init__(self) -> None:
        self.count = 0
        self.total_waiting = 0
        self.total_turnaround = 0
        self.total_response = 0
        self.last_completion = 0

    def add(self, row: ProcessMetrics) -> None:
        self.count += 1
        self.total_waiting += row.waiting_time
        self.total_turnaround += row.turnaround_time
        self.total_response += row.response_time
        self.last_completion = max(self.last_completion, row.completion_time)

    def finalize(self, cpu_busy_time: int) -> SystemMetrics:
        # An empty run has no makespan; every ratio collapses to zero.
        return SystemMetrics(
            average_waiting=_ratio(self.total_waiting, self.count),
            average_turnaround=_ratio(self.total_turnaround, self.count),
            average_response=_ratio(self.total_response, self.count),
            throughput=_ratio(self.count, self.last_completion),
            makespan=self.last_completion,
            cpu_busy_time=cpu_busy_time,
            cpu_utilization=_ratio(cpu_busy_time, self.last_completion),
        )
