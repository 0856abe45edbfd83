from __future__ import annotations

from typing import List

from .errors import SchedulerError
from .models import ScheduledSlice


class TimelineRecorder:
    """
    Append-only Gantt trace of a single policy run.

    Slices must be recorded in time order and may not overlap. Idle time is
    never recorded; it shows up as a gap between two slices. With
    ``coalesce=True`` a slice that directly continues the previous slice of the
    same process is merged into it.
    """

    def __init__(self, coalesce: bool = False) -> None:
        self.coalesce = coalesce
        self._slices: List[ScheduledSlice] = []

    def record(self, pid: int, start_time: int, end_time: int) -> ScheduledSlice:
        if start_time < 0 or end_time < start_time:
            raise SchedulerError(f"invalid slice for process {pid}: [{start_time}, {end_time})")

        if self._slices:
            last = self._slices[-1]
            if start_time < last.end_time:
                raise SchedulerError(
                    f"slice for process {pid} at {start_time} overlaps previous slice ending at {last.end_time}"
                )
            if self.coalesce and last.pid == pid and last.end_time == start_time:
                merged = ScheduledSlice(pid=pid, start_time=last.start_time, end_time=end_time)
                self._slices[-1] = merged
                return merged

        slice_ = ScheduledSlice(pid=pid, start_time=start_time, end_time=end_time)
        self._slices.append(slice_)
        return slice_

    @property
    def busy_time(self) -> int:
        return sum(s.duration for s in self._slices)

    def slices(self) -> List[ScheduledSlice]:
        return list(self._slices)

    def __len__(self) -> int:
        return len(self._slices)
